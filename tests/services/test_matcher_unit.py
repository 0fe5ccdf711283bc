"""
Unit tests for `pkgcompat.services.compatibility.matcher`.

The suite covers:
1. Pure whitelists: membership by exact equality.
2. Pure blacklists: everything but the denied tokens is accepted.
3. Mixed lists: a plain match always wins.
4. Edge cases: empty declarations.
"""

import pytest
from pkgcompat.services.compatibility.matcher import is_valid

# ==================================================================================
#                                   TEST: WHITELIST
# ==================================================================================

@pytest.mark.parametrize("actual, expected", [
    ("linux", True),
    ("darwin", True),
    ("win32", False),
    ("Linux", False),
])
def test_whitelist_exact_membership(actual, expected):
    """Only an exact, case-sensitive match is accepted."""
    assert is_valid(["linux", "darwin"], actual) is expected


# ==================================================================================
#                                   TEST: BLACKLIST
# ==================================================================================

@pytest.mark.parametrize("actual, expected", [
    ("win32", False),
    ("sunos", False),
    ("linux", True),
    ("darwin", True),
])
def test_blacklist_allows_everything_not_denied(actual, expected):
    assert is_valid(["!win32", "!sunos"], actual) is expected


# ==================================================================================
#                                   TEST: MIXED LISTS
# ==================================================================================

def test_mixed_plain_match_wins():
    """
    ["!linux", "win32"]: win32 is whitelisted, linux denied, any other value
    is accepted because a blacklist is present.
    """
    items = ["!linux", "win32"]
    assert is_valid(items, "win32") is True
    assert is_valid(items, "linux") is False
    assert is_valid(items, "darwin") is True


def test_mixed_order_does_not_change_outcome():
    assert is_valid(["win32", "!linux"], "linux") is False
    assert is_valid(["win32", "!linux"], "win32") is True


# ==================================================================================
#                                   TEST: EDGE CASES
# ==================================================================================

@pytest.mark.parametrize("actual", ["linux", "x64", ""])
def test_empty_declarations_reject(actual):
    assert is_valid([], actual) is False


def test_lone_bang_denies_empty_value_only():
    assert is_valid(["!"], "") is False
    assert is_valid(["!"], "linux") is True

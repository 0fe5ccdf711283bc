"""
Module `matcher` — whitelist/blacklist membership for `os` and `cpu` fields.

A declaration list mixes plain tokens (whitelist) and tokens prefixed with
'!' (blacklist). A plain match always wins; a denied token loses; otherwise
the presence of any blacklist entry means "everything else is allowed".
"""

from typing import Sequence


def is_valid(items: Sequence[str], actual: str) -> bool:
    is_blacklist = False

    for item in items:
        # whitelist
        if item == actual:
            return True

        # blacklist
        if isinstance(item, str) and item.startswith("!"):
            is_blacklist = True
            if actual == item[1:]:
                return False

    return is_blacklist

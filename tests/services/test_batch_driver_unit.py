"""
Unit tests for the batch entry points of `PackageCompatibility`:
the coroutine `init()` (raises on the first rejected manifest) and `run()`
(returns the outcome instead of raising).
"""

import asyncio

import pytest
from unittest.mock import patch

from pkgcompat.core.errors import IncompatibleModuleError
from pkgcompat.models.manifest import Decision
from pkgcompat.services.compatibility import PackageCompatibility
from pkgcompat.services.resolver import StaticResolver

# ==================================================================================
#                                     FIXTURES
# ==================================================================================

@pytest.fixture
def three_manifests(make_manifest):
    """The second manifest is a regular dependency that fails the OS check."""
    return [
        make_manifest(name="first", os=["darwin"], optional=True),
        make_manifest(name="second", os=["win32"]),
        make_manifest(name="third", os=["darwin"]),
    ]


@pytest.fixture
def batch_checker(linux_env, reporter, three_manifests):
    return PackageCompatibility(linux_env, StaticResolver(three_manifests), reporter)


# ==================================================================================
#                                   TEST: init()
# ==================================================================================

def test_init_aborts_on_first_rejected_manifest(batch_checker, three_manifests):
    with patch.object(batch_checker, "check", wraps=batch_checker.check) as spy:
        with pytest.raises(IncompatibleModuleError) as exc:
            asyncio.run(batch_checker.init())

    checked = [call.args[0].name for call in spy.call_args_list]
    assert checked == ["first", "second"]
    assert exc.value.failure.name == "second"
    # the optional first manifest was fully processed before the abort
    assert three_manifests[0].reference.ignore is True


def test_init_completes_when_everything_is_compatible(linux_env, reporter, make_manifest):
    manifests = [make_manifest(name=n, os=["linux"]) for n in ("a", "b")]
    checker = PackageCompatibility(linux_env, StaticResolver(manifests), reporter)

    assert asyncio.run(checker.init()) is None
    assert reporter.get_buffer() == []


# ==================================================================================
#                                   TEST: run()
# ==================================================================================

def test_run_returns_structured_failure(batch_checker, reporter):
    outcome = batch_checker.run()

    assert outcome.compatible is False
    assert [r.name for r in outcome.results] == ["first", "second"]
    assert [r.decision for r in outcome.results] == [Decision.EXCLUDED_OPTIONAL, Decision.REJECTED]
    assert outcome.failure.name == "second"
    assert outcome.failure.messages == ["The platform linux is incompatible with this module."]
    assert ("error", "second@1.0.0: The platform linux is incompatible with this module.") in reporter.get_buffer()


def test_run_on_empty_resolver(linux_env):
    outcome = PackageCompatibility(linux_env, StaticResolver([])).run()

    assert outcome.compatible is True
    assert outcome.results == []

"""
Shared fixtures for the compatibility test suite.

Every test runs against a fabricated environment so that results never
depend on the machine executing the tests.
"""

import pytest
from unittest.mock import MagicMock

from pkgcompat.models.manifest import Manifest, PackageReference
from pkgcompat.services.compatibility import PackageCompatibility
from pkgcompat.services.environment import Environment
from pkgcompat.services.reporter import BufferedReporter


@pytest.fixture
def linux_env():
    """Linux x64 host with node 18 installed."""
    return Environment(
        platform="linux",
        arch="x64",
        versions={"node": "18.0.0", "v8": "10.2.154.26-node.26"},
    )


@pytest.fixture
def win_env():
    return Environment(platform="win32", arch="x64", versions={"node": "18.0.0"})


@pytest.fixture
def reporter():
    return BufferedReporter()


@pytest.fixture
def mock_reporter():
    """Reporter whose calls can be asserted on individually."""
    return MagicMock()


@pytest.fixture
def make_manifest():
    """Factory for manifests with a graph reference attached."""
    def _make(name="pkg", version="1.0.0", optional=False, with_reference=True, **fields):
        reference = PackageReference(optional=optional) if with_reference else None
        return Manifest(name=name, version=version, reference=reference, **fields)
    return _make


@pytest.fixture
def checker(linux_env, reporter):
    return PackageCompatibility(linux_env, reporter=reporter)

"""
Package `pkgcompat.services.compatibility`

Tools that decide whether a resolved package can be installed on the current
environment.

Public API:
- PackageCompatibility(environment, resolver, reporter)
- is_valid(items, actual) -> bool
- satisfies(version, range_) -> bool

Modules:
- matcher: whitelist/blacklist matching for `os` and `cpu`
- engines: semver range satisfaction for `engines`
- checker: per-manifest decision policy and batch driver
"""

from .checker import PackageCompatibility
from .engines import satisfies
from .matcher import is_valid

__all__ = ["PackageCompatibility", "is_valid", "satisfies"]

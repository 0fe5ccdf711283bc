"""
Exception hierarchy raised by the compatibility services.

- IncompatibleModuleError: a non-optional package failed at least one check.
  It is the installation-stopping signal and carries the structured failure.
- InvariantError: internal consistency fault (e.g. a manifest without its
  graph reference). Never a user-facing compatibility problem.
"""

from typing import Optional

from pkgcompat.models.manifest import CompatibilityFailure


class PkgCompatError(Exception):
    pass


class IncompatibleModuleError(PkgCompatError):
    """Raised once all checks for a rejected manifest have been reported."""

    def __init__(self, failure: Optional[CompatibilityFailure] = None, message: str = "Found incompatible module"):
        super().__init__(message)
        self.failure = failure


class InvariantError(PkgCompatError):
    pass

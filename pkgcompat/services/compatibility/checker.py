"""
This module checks resolved packages against the environment they are about
to be installed into.

Main Responsibility:
- Evaluates the `os`, `cpu` and `engines` declarations of a manifest.
- Turns every violation into a decision: optional packages are excluded with
  a warning, any other package is rejected.
- Drives the check over every resolved manifest, aborting on the first
  rejected one.

`evaluate` is pure; `apply` replays the result on the reporter and the
dependency graph; `check` does both and raises on rejection.
"""

import logging
from collections.abc import Mapping
from typing import List

from pkgcompat.core.errors import IncompatibleModuleError, InvariantError
from pkgcompat.models.manifest import (
    BatchOutcome,
    Category,
    CompatibilityResult,
    Decision,
    Manifest,
    Violation,
)
from pkgcompat.services.environment import Environment
from pkgcompat.services.reporter import LoggingReporter, Reporter
from .engines import satisfies
from .matcher import is_valid

logger = logging.getLogger(__name__)

# legacy engine names -> current name
ALIASES = {
    "iojs": "node",
}

# engines that can never be present in the environment's versions
IGNORE = [
    "npm",
    "teleport",
]


class PackageCompatibility:
    def __init__(self, environment: Environment, resolver=None, reporter: Reporter = None):
        self.environment = environment
        self.resolver = resolver
        self.reporter = reporter or LoggingReporter()

    def is_valid_arch(self, archs: List[str]) -> bool:
        return is_valid(archs, self.environment.arch)

    def is_valid_platform(self, platforms: List[str]) -> bool:
        return is_valid(platforms, self.environment.platform)

    def evaluate(self, info: Manifest) -> CompatibilityResult:
        """
        Runs the OS, CPU and engines checks on a single manifest.

        All three categories are always evaluated so that every reason for a
        failure ends up in the result.

        Raises:
            InvariantError: If a violation is found on a manifest that has no
                package reference.
        """
        human = info.human
        result = CompatibilityResult(name=info.name, version=info.version)

        def push_error(category: Category, msg: str):
            ref = info.reference
            if ref is None:
                raise InvariantError(f"{human}: expected package reference")

            result.violations.append(Violation(category=category, message=msg))
            if ref.optional:
                result.messages.append(("warn", f"{human}: {msg}"))
                if result.decision is Decision.ACCEPTED:
                    result.messages.append((
                        "info",
                        f"{human} is an optional dependency and failed compatibility check. "
                        "Excluding it from installation.",
                    ))
                    result.decision = Decision.EXCLUDED_OPTIONAL
            else:
                result.messages.append(("error", f"{human}: {msg}"))
                result.decision = Decision.REJECTED

        env = self.environment

        if isinstance(info.os, (list, tuple)):
            if not self.is_valid_platform(info.os):
                push_error(Category.OS, f"The platform {env.platform} is incompatible with this module.")

        if isinstance(info.cpu, (list, tuple)):
            if not self.is_valid_arch(info.cpu):
                push_error(Category.CPU, f"The CPU architecture {env.arch} is incompatible with this module.")

        if isinstance(info.engines, Mapping):
            for name, range_ in info.engines.items():
                name = ALIASES.get(name, name)

                if name in env.versions:
                    actual = env.versions[name]
                    if not satisfies(actual, range_):
                        push_error(
                            Category.ENGINES,
                            f"The engine {name} is incompatible with this module. Expected version {range_}.",
                        )
                elif name not in IGNORE:
                    result.messages.append(("warn", f"{human}: The engine {name} appears to be invalid."))

        logger.debug("%s: %s (%d violation(s))", human, result.decision.value, len(result.violations))
        return result

    def apply(self, info: Manifest, result: CompatibilityResult) -> None:
        """Emits the result messages and marks excluded optional packages in the graph."""
        for level, message in result.messages:
            self.reporter.emit(level, message)
        if result.decision is Decision.EXCLUDED_OPTIONAL:
            info.reference.add_ignore(True)

    def check(self, info: Manifest) -> CompatibilityResult:
        """
        Checks one manifest and reports the outcome.

        Returns:
            CompatibilityResult: The accepted or excluded result.

        Raises:
            IncompatibleModuleError: If a non-optional package failed any check.
        """
        result = self.evaluate(info)
        self.apply(info, result)
        if result.decision is Decision.REJECTED:
            raise IncompatibleModuleError(result.failure)
        return result

    def run(self) -> BatchOutcome:
        """
        Checks every resolved manifest, stopping at the first rejected one.

        Unlike `init`, the rejection is returned as part of the outcome
        instead of being raised.
        """
        outcome = BatchOutcome()
        for info in self.resolver.get_manifests():
            result = self.evaluate(info)
            self.apply(info, result)
            outcome.results.append(result)
            if result.decision is Decision.REJECTED:
                outcome.failure = result.failure
                logger.info("Aborting compatibility check: %s", outcome.failure)
                break
        return outcome

    async def init(self) -> None:
        for info in self.resolver.get_manifests():
            self.check(info)

"""
Domain objects exchanged by the compatibility services.

`Manifest` and `PackageReference` mirror what the manifest loader and the
resolver hand over; the remaining classes describe the outcome of a check.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple


@dataclass
class PackageReference:
    """Position of a package in the dependency graph."""
    optional: bool = False
    ignore: bool = False

    def add_ignore(self, flag: bool) -> None:
        self.ignore = flag


@dataclass
class Manifest:
    name: str
    version: str
    # os/cpu/engines are kept loose: malformed values are skipped by the checker
    os: Any = None
    cpu: Any = None
    engines: Any = None
    reference: Optional[PackageReference] = None

    @property
    def human(self) -> str:
        return f"{self.name}@{self.version}"


class Decision(str, Enum):
    ACCEPTED = "accepted"
    EXCLUDED_OPTIONAL = "excluded_optional"
    REJECTED = "rejected"


class Category(str, Enum):
    OS = "os"
    CPU = "cpu"
    ENGINES = "engines"


@dataclass
class Violation:
    category: Category
    message: str


@dataclass
class CompatibilityFailure:
    name: str
    version: str
    categories: List[Category]
    messages: List[str]

    def __str__(self):
        cats = ", ".join(c.value for c in self.categories)
        return f"{self.name}@{self.version} is incompatible ({cats})"


@dataclass
class CompatibilityResult:
    """
    Outcome of checking one manifest.

    `messages` holds (level, text) pairs in emission order, ready to be
    replayed on a reporter.
    """
    name: str
    version: str
    decision: Decision = Decision.ACCEPTED
    violations: List[Violation] = field(default_factory=list)
    messages: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def excluded(self) -> bool:
        return self.decision is Decision.EXCLUDED_OPTIONAL

    @property
    def failure(self) -> Optional[CompatibilityFailure]:
        if self.decision is not Decision.REJECTED:
            return None
        categories = []
        for v in self.violations:
            if v.category not in categories:
                categories.append(v.category)
        return CompatibilityFailure(
            name=self.name,
            version=self.version,
            categories=categories,
            messages=[v.message for v in self.violations],
        )


@dataclass
class BatchOutcome:
    results: List[CompatibilityResult] = field(default_factory=list)
    failure: Optional[CompatibilityFailure] = None

    @property
    def compatible(self) -> bool:
        return self.failure is None

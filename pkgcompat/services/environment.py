"""
This module builds the environment descriptor the checker compares manifests
against: current platform, CPU architecture and installed engine versions.

The descriptor is always injected into the checker; `Environment.from_host()`
is the only place that looks at the running interpreter.
"""

import logging
import platform
import sys
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from pkgcompat.core import config

logger = logging.getLogger(__name__)

# platform.machine() -> architecture identifiers used in `cpu` declarations
_ARCH_ALIASES = {
    "x86_64": "x64",
    "amd64": "x64",
    "i386": "ia32",
    "i686": "ia32",
    "x86": "ia32",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv6l": "arm",
    "armv7l": "arm",
    "armv8l": "arm",
    "ppc64le": "ppc64",
    "ppc64": "ppc64",
    "s390x": "s390x",
    "mips64": "mips64",
    "riscv64": "riscv64",
}


@dataclass(frozen=True)
class Environment:
    platform: str
    arch: str
    versions: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # frozen: expose a read-only copy of the versions mapping
        object.__setattr__(self, "versions", MappingProxyType(dict(self.versions)))

    def to_dict(self) -> dict:
        return {
            "platform": self.platform,
            "arch": self.arch,
            "versions": dict(self.versions),
        }

    @classmethod
    def from_host(cls) -> "Environment":
        """
        Describes the running host, applying the PKGCOMPAT_* overrides from
        the configuration.
        """
        versions = {"python": platform.python_version()}
        versions.update(parse_engine_versions(config.PKGCOMPAT_ENGINE_VERSIONS))

        env = cls(
            platform=config.PKGCOMPAT_PLATFORM or detect_platform(),
            arch=config.PKGCOMPAT_ARCH or detect_arch(),
            versions=versions,
        )
        logger.debug("Host environment: %s", env.to_dict())
        return env


def detect_platform(value: Optional[str] = None) -> str:
    """Normalizes `sys.platform` ('linux2', 'freebsd13', ...) to its family name."""
    p = value if value is not None else sys.platform
    for family in ("linux", "freebsd", "openbsd", "netbsd", "sunos", "aix"):
        if p.startswith(family):
            return family
    if p in ("cygwin", "msys"):
        return "win32"
    return p


def detect_arch(machine: Optional[str] = None) -> str:
    m = (machine if machine is not None else platform.machine()).lower()
    return _ARCH_ALIASES.get(m, m)


def parse_engine_versions(raw: Optional[str]) -> Dict[str, str]:
    """
    Parses "name=version" pairs separated by commas. Malformed pairs are
    skipped with a warning.
    """
    versions: Dict[str, str] = {}
    if not raw:
        return versions
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        name, sep, version = pair.partition("=")
        if not sep or not name.strip() or not version.strip():
            logger.warning("Ignoring malformed engine version %r", pair)
            continue
        versions[name.strip()] = version.strip()
    return versions

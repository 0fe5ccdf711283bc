"""
Module `engines` — semantic-version range satisfaction for the `engines` field.

Ranges use the usual package-manager grammar and are translated into
`packaging` specifier sets, one per `||` alternative:

    "^1.2.3"          -> >=1.2.3,<2.0.0
    "~1.2"            -> >=1.2.0,<1.3.0
    "1.x" / "1"       -> >=1.0.0,<2.0.0
    "1.2.3 - 2.3"     -> >=1.2.3,<2.4.0
    ">=4 <6 || 8"     -> >=4.0.0,<6.0.0 | >=8.0.0,<9.0.0
    "*" / ""          -> any version

Conjunctions may be separated by whitespace or commas. An invalid range or
installed version is never an error: it simply does not satisfy. Prerelease
versions only match a branch that names a prerelease of the same release.
"""

import logging
import re
from typing import FrozenSet, List, NamedTuple, Optional, Tuple

from packaging.specifiers import InvalidSpecifier, SpecifierSet
from packaging.version import InvalidVersion, Version

logger = logging.getLogger(__name__)

Partial = Tuple[Optional[int], Optional[int], Optional[int], Optional[str]]

_WILDCARDS = {"x", "X", "*"}

_PARTIAL_RE = re.compile(
    r"^v?(?P<major>\d+|[xX*])"
    r"(?:\.(?P<minor>\d+|[xX*]))?"
    r"(?:\.(?P<patch>\d+|[xX*]))?"
    r"(?:-(?P<pre>[0-9A-Za-z.-]+))?"
    r"(?:\+[0-9A-Za-z.-]+)?$"
)
_COMPARATOR_RE = re.compile(r"^(?P<op>\^|~>|~|>=|<=|>|<|=)?(?P<version>.*)$")
_HYPHEN_RE = re.compile(r"^(?P<low>\S+)\s+-\s+(?P<high>\S+)$")
_DETACHED_OP_RE = re.compile(r"(\^|~>|~|>=|<=|>|<|=)\s+")
_LEADING_NUMERIC_RE = re.compile(r"^v?(\d+(?:\.\d+)*)")
_SEMVER_RE = re.compile(
    r"^v?(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)"
    r"(?:-(?P<pre>[0-9A-Za-z.-]+))?"
    r"(?:\+[0-9A-Za-z.-]+)?$"
)
_PRE_IDENT_RE = re.compile(r"^(?P<word>[A-Za-z-]*?)(?P<num>\d*)$")
_PRE_WORDS = {"alpha": "a", "a": "a", "beta": "b", "b": "b", "rc": "rc", "c": "rc"}

Release = Tuple[int, int, int]


class Alternative(NamedTuple):
    """
    One `||` branch of a range.

    A prerelease version only matches when a comparator of the branch carries
    a prerelease on the same major.minor.patch, e.g. '19.0.0-rc.2' matches
    '>=19.0.0-rc.1' but neither '>=18' nor '*'.
    """
    spec: SpecifierSet
    prerelease_releases: FrozenSet[Release]

    def allows(self, version: Version) -> bool:
        if version.is_prerelease:
            release = (tuple(version.release) + (0, 0, 0))[:3]
            if release not in self.prerelease_releases:
                return False
        return self.spec.contains(version)


def _parse_partial(text: str) -> Optional[Partial]:
    m = _PARTIAL_RE.match(text)
    if not m:
        return None
    major, minor, patch = (
        None if raw is None or raw in _WILDCARDS else int(raw)
        for raw in (m.group("major"), m.group("minor"), m.group("patch"))
    )
    # everything after a wildcard is a wildcard as well
    if major is None:
        minor = patch = None
    elif minor is None:
        patch = None
    pre = m.group("pre") if patch is not None else None
    return major, minor, patch, pre


def _pre_segment(pre: Optional[str]) -> str:
    """
    Maps a semver prerelease tag to a PEP 440 pre-release segment.

    alpha/a -> aN, beta/b -> bN, rc/c -> rcN; numeric tags ('-0', '-1.2')
    and unknown words ('-next', '-nightly.5') -> .devN, the lowest
    pre-release PEP 440 has. N is the first number found, 0 otherwise.
    """
    if not pre:
        return ""
    idents = pre.split(".")
    first = idents[0]
    if first.isdigit():
        return f".dev{int(first)}"
    m = _PRE_IDENT_RE.match(first)
    word = (m.group("word") if m else first).lower()
    num = m.group("num") if m else ""
    if not num:
        num = next((i for i in idents[1:] if i.isdigit()), "0")
    tag = _PRE_WORDS.get(word)
    if tag is None:
        return f".dev{int(num)}"
    return f"{tag}{int(num)}"


def _format(major: int, minor: int, patch: int, pre: Optional[str] = None) -> str:
    return f"{major}.{minor}.{patch}{_pre_segment(pre)}"


def _comparator(op: Optional[str], partial: Partial) -> Optional[List[str]]:
    """
    Translates one comparator into PEP 440 clauses.

    Returns [] when the comparator accepts every version and None when it
    can never be satisfied.
    """
    major, minor, patch, pre = partial

    if op == "^":
        if major is None:
            return []
        if minor is None:
            return [f">={major}.0.0", f"<{major + 1}.0.0"]
        if patch is None:
            upper = f"{major + 1}.0.0" if major > 0 else f"0.{minor + 1}.0"
            return [f">={major}.{minor}.0", f"<{upper}"]
        if major > 0:
            upper = f"{major + 1}.0.0"
        elif minor > 0:
            upper = f"0.{minor + 1}.0"
        else:
            upper = f"0.0.{patch + 1}"
        return [f">={_format(major, minor, patch, pre)}", f"<{upper}"]

    if op in ("~", "~>"):
        if major is None:
            return []
        if minor is None:
            return [f">={major}.0.0", f"<{major + 1}.0.0"]
        return [f">={_format(major, minor, patch or 0, pre)}", f"<{major}.{minor + 1}.0"]

    if op in (None, "="):
        if major is None:
            return []
        if minor is None:
            return [f">={major}.0.0", f"<{major + 1}.0.0"]
        if patch is None:
            return [f">={major}.{minor}.0", f"<{major}.{minor + 1}.0"]
        return [f"=={_format(major, minor, patch, pre)}"]

    if op == ">":
        if major is None:
            return None
        if minor is None:
            return [f">={major + 1}.0.0"]
        if patch is None:
            return [f">={major}.{minor + 1}.0"]
        return [f">{_format(major, minor, patch, pre)}"]

    if op == ">=":
        if major is None:
            return []
        return [f">={_format(major, minor or 0, patch or 0, pre)}"]

    if op == "<":
        if major is None:
            return None
        return [f"<{_format(major, minor or 0, patch or 0, pre)}"]

    # "<="
    if major is None:
        return []
    if minor is None:
        return [f"<{major + 1}.0.0"]
    if patch is None:
        return [f"<{major}.{minor + 1}.0"]
    return [f"<={_format(major, minor, patch, pre)}"]


def _parse_alternative(text: str) -> Optional[Alternative]:
    text = text.strip()

    hyphen = _HYPHEN_RE.match(text)
    if hyphen:
        comparators = [(">=", hyphen.group("low")), ("<=", hyphen.group("high"))]
    else:
        text = _DETACHED_OP_RE.sub(r"\1", text)
        comparators = []
        for token in re.split(r"[\s,]+", text):
            if not token:
                continue
            m = _COMPARATOR_RE.match(token)
            comparators.append((m.group("op"), m.group("version")))

    clauses: List[str] = []
    prerelease_releases = set()
    for op, raw in comparators:
        partial = _parse_partial(raw)
        if partial is None:
            raise ValueError(f"Invalid comparator {op or ''}{raw!r}")
        translated = _comparator(op, partial)
        if translated is None:
            return None
        clauses.extend(translated)
        major, minor, patch, pre = partial
        if pre:
            prerelease_releases.add((major, minor, patch))

    return Alternative(
        spec=SpecifierSet(",".join(clauses), prereleases=True),
        prerelease_releases=frozenset(prerelease_releases),
    )


def parse_range(range_: str) -> List[Alternative]:
    """
    Parses a range into one Alternative per `||` branch.

    Branches that can never match are dropped, so an empty list means
    the range is unsatisfiable.

    Raises:
        ValueError: If a comparator is not a valid (partial) version.
    """
    alternatives = []
    for part in range_.split("||"):
        alternative = _parse_alternative(part)
        if alternative is not None:
            alternatives.append(alternative)
    return alternatives


def coerce_version(value) -> Optional[Version]:
    """
    Parses an installed version string.

    Semver strings have their prerelease tag translated ('1.2.3-1' sorts
    below '1.2.3'); other strings go through PEP 440, falling back to their
    leading numeric part (e.g. '10.2.154.26-node.26').
    """
    if not isinstance(value, str):
        return None
    text = value.strip()
    m = _SEMVER_RE.match(text)
    if m:
        return Version(_format(int(m.group("major")), int(m.group("minor")),
                               int(m.group("patch")), m.group("pre")))
    try:
        return Version(text)
    except InvalidVersion:
        pass
    m = _LEADING_NUMERIC_RE.match(text)
    if not m:
        return None
    return Version(m.group(1))


def satisfies(version: str, range_: str) -> bool:
    installed = coerce_version(version)
    if installed is None:
        logger.debug("Installed version %r is not a valid version", version)
        return False
    if not isinstance(range_, str):
        logger.debug("Range %r is not a string", range_)
        return False
    try:
        alternatives = parse_range(range_)
    except (ValueError, InvalidSpecifier):
        logger.debug("Range %r is not a valid semver range", range_)
        return False
    return any(alternative.allows(installed) for alternative in alternatives)

"""
Version Parsing and Range Matching
==================================

Thin layer over ``semantic_version`` for npm-style version ranges.

Accepted inputs follow what package managers tolerate in manifests:
- Versions: 1.2.3, v1.2.3, 1.2 (coerced to 1.2.0), 1.0.0-rc.1
- Ranges: ^1.2.3, ~1.2, <=4.5.6, 10.11.x, 1.x || 2.x, 1.0.0 - 2.0.0
- Comma separated ranges (">=1.2, <2") are read as an intersection
- Loose comparators are tightened first: ">= 1.2.3" to ">=1.2.3", "^v1.2.3" to
  "^1.2.3", "=1.2.3" to "1.2.3" and the "~>" operator to "~"
"""

import re

from semantic_version import NpmSpec, Version

from ..common.constants import WILDCARD_RANGES

_PARTIAL_VERSION = re.compile(r"^\d+(?:\.\d+)?$")

# operator (optional) at the start of a comparator, then an optional v before the version
_LOOSE_COMPARATOR = re.compile(r"(?<![^\s|])(?P<op>~>|<=|>=|<|>|=|\^|~)?\s*[vV]?(?=[0-9xX*])")


def parse_version(version_str: str) -> Version:
    """
    Parse a package version string.

    Args:
        version_str: Version like "1.2.3", "v1.2.3" or "1.2"

    Returns:
        semantic_version.Version

    Raises:
        ValueError: If the string is not a semantic version
    """
    text = version_str.strip()
    if text[:1] in ("v", "V", "="):
        text = text[1:].strip()

    try:
        return Version(text)
    except ValueError:
        if _PARTIAL_VERSION.match(text):
            return Version.coerce(text)
        raise ValueError(f"Invalid version string: '{version_str}'") from None


def _tighten_comparator(match: "re.Match[str]") -> str:
    op = match.group("op") or ""
    if op == "~>":
        return "~"
    if op == "=":
        return ""
    return op


def parse_version_constraint(constraint_str: str) -> NpmSpec:
    """
    Parse an npm version range.

    Args:
        constraint_str: Range like "^1.2.3", "<=4.5.6" or ">=1.0, <2.0"

    Returns:
        semantic_version.NpmSpec

    Raises:
        ValueError: If the range is empty or malformed
    """
    # npm separates intersected comparators with spaces
    text = " ".join(part.strip() for part in constraint_str.split(",") if part.strip())
    if not text:
        raise ValueError("Empty version range")
    text = _LOOSE_COMPARATOR.sub(_tighten_comparator, text)

    try:
        return NpmSpec(text)
    except ValueError as e:
        raise ValueError(f"Invalid version range '{constraint_str}': {e}") from None


def is_wildcard_range(range_str: str) -> bool:
    """True for bare "*", "^" or "~" ranges, which accept any version."""
    return range_str in WILDCARD_RANGES


def version_satisfies(constraint: NpmSpec, version: Version) -> bool:
    """Check whether a parsed version falls within a parsed range."""
    return constraint.match(version)

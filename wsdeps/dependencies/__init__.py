"""
wsdeps Dependency Checks
========================

Provides utilities for:
- Extracting a structured descriptor for a manifest dependency entry
- Classifying specifier protocols (workspace, file, link, portal, npm, remote)
- Checking whether a workspace package satisfies a dependency declaration
- Parsing npm-style versions and ranges
"""

from .descriptor import (
    DependencyCategory,
    DependencyDescriptor,
    ManifestView,
    ProtocolKind,
    classify_protocol,
    extract_dependency_info,
    split_specifier,
)
from .satisfaction import CandidatePackage, SatisfactionResult, satisfies
from .version import (
    is_wildcard_range,
    parse_version,
    parse_version_constraint,
    version_satisfies,
)

__all__ = [
    # Descriptors
    "DependencyCategory",
    "DependencyDescriptor",
    "ManifestView",
    "ProtocolKind",
    "classify_protocol",
    "extract_dependency_info",
    "split_specifier",
    # Satisfaction
    "CandidatePackage",
    "SatisfactionResult",
    "satisfies",
    # Version utilities
    "is_wildcard_range",
    "parse_version",
    "parse_version_constraint",
    "version_satisfies",
]

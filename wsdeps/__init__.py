"""wsdeps - check that workspace packages satisfy each other's dependencies.

This package provides tools for:
- Extracting structured dependency descriptors from package.json manifests
- Deciding whether an on-disk workspace package satisfies a declaration
  (workspace:, file:/link:/portal: paths, npm version ranges)
- Discovering workspace members from the root manifest's patterns

Example:
    >>> from wsdeps import read_package_json, satisfies
    >>> app = read_package_json("packages/app/package.json")
    >>> lib = read_package_json("packages/lib/package.json")
    >>> dep = app.get_dependency_info(lib.name)
    >>> ok, err = satisfies(lib.as_candidate(), dep, workspace_root=".")

Package Structure:
    wsdeps/
    ├── common/         - Errors, constants, logging, settings, path helpers
    ├── dependencies/   - Descriptor extraction, satisfaction, versions
    ├── manifest/       - package.json model and reader
    ├── utils/          - Workspace discovery
    └── cli/            - Command line interface
"""

from .common import (
    InvalidManifestError,
    ManifestError,
    ManifestNotFoundError,
    SatisfactionError,
    SatisfactionReason,
    WsdepsError,
)
from .dependencies import (
    CandidatePackage,
    DependencyCategory,
    DependencyDescriptor,
    ProtocolKind,
    SatisfactionResult,
    extract_dependency_info,
    satisfies,
)
from .manifest import PackageManifest, read_package_json
from .utils import discover_workspace_packages, find_workspace_root

__version__ = "0.1.0"

__all__ = [
    # Core
    "extract_dependency_info",
    "satisfies",
    "CandidatePackage",
    "DependencyCategory",
    "DependencyDescriptor",
    "ProtocolKind",
    "SatisfactionResult",
    # Errors
    "WsdepsError",
    "ManifestError",
    "ManifestNotFoundError",
    "InvalidManifestError",
    "SatisfactionError",
    "SatisfactionReason",
    # Manifests
    "PackageManifest",
    "read_package_json",
    # Workspace utilities
    "find_workspace_root",
    "discover_workspace_packages",
]

"""
Dependency Descriptors
======================

Extracts a structured descriptor for one dependency entry of a manifest.

A raw specifier like ``"file:../foo"`` is split on its first colon into a
protocol (``file``) and a version range (``../foo``). The protocol is
classified once, here, into a closed ``ProtocolKind`` so the satisfaction
evaluator never re-derives it from strings.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Protocol, Tuple

from ..common.constants import (
    LOCAL_PATH_PROTOCOLS,
    NPM_PROTOCOL,
    PROTOCOL_SEPARATOR,
    WORKSPACE_PROTOCOL,
)


class DependencyCategory(str, Enum):
    """Manifest section a dependency was declared in."""

    DEPENDENCIES = "dependencies"
    DEV_DEPENDENCIES = "devDependencies"
    OPTIONAL_DEPENDENCIES = "optionalDependencies"
    PEER_DEPENDENCIES = "peerDependencies"


class ProtocolKind(str, Enum):
    """How a specifier must be validated."""

    WORKSPACE = "workspace"  # trusted once inside the workspace
    FILE = "file"  # local path relative to the declaring manifest
    LINK = "link"
    PORTAL = "portal"
    NPM = "npm"  # registry alias, checked as a version range
    BARE = "bare"  # no protocol, plain version range
    REMOTE = "remote"  # git, http, github, ... never locally satisfiable


class ManifestView(Protocol):
    """Read-only view of a manifest needed to extract descriptors."""

    @property
    def name(self) -> str: ...

    @property
    def version(self) -> str: ...

    @property
    def file(self) -> str: ...

    @property
    def dependencies(self) -> Mapping[str, str]: ...

    @property
    def dev_dependencies(self) -> Mapping[str, str]: ...

    @property
    def optional_dependencies(self) -> Mapping[str, str]: ...

    @property
    def peer_dependencies(self) -> Mapping[str, str]: ...


def classify_protocol(protocol: str) -> ProtocolKind:
    """
    Map a raw protocol prefix to its ProtocolKind.

    Args:
        protocol: Prefix before the first colon, "" when absent

    Returns:
        ProtocolKind
    """
    if protocol == "":
        return ProtocolKind.BARE
    if protocol == WORKSPACE_PROTOCOL:
        return ProtocolKind.WORKSPACE
    if protocol == NPM_PROTOCOL:
        return ProtocolKind.NPM
    if protocol in LOCAL_PATH_PROTOCOLS:
        return ProtocolKind(protocol)
    return ProtocolKind.REMOTE


def split_specifier(raw: str) -> Tuple[str, str]:
    """
    Split a raw specifier on its first colon.

    Examples:
        >>> split_specifier("workspace:*")
        ('workspace', '*')
        >>> split_specifier("^1.2.3")
        ('', '^1.2.3')
        >>> split_specifier("file:C:/pkgs/foo")
        ('file', 'C:/pkgs/foo')
    """
    protocol, sep, version_range = raw.partition(PROTOCOL_SEPARATOR)
    if not sep:
        return "", raw
    return protocol, version_range


@dataclass(frozen=True)
class DependencyDescriptor:
    """
    One dependency entry of a manifest, with the identity of its declarer.

    Attributes:
        name: Dependency module name
        version_range: Specifier with the protocol prefix stripped
        category: Manifest section the entry was found in
        protocol: Raw protocol prefix, "" when absent
        from_name: Name of the declaring manifest
        from_version: Version of the declaring manifest
        from_file: Path to the declaring manifest file
        kind: Classified protocol, derived from ``protocol``
    """

    name: str
    version_range: str
    category: DependencyCategory
    protocol: str = ""
    from_name: str = ""
    from_version: str = ""
    from_file: str = ""
    kind: ProtocolKind = field(init=False)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Dependency name must not be empty")
        object.__setattr__(self, "kind", classify_protocol(self.protocol))

    @property
    def raw_specifier(self) -> str:
        """The specifier as written in the manifest."""
        if self.protocol:
            return f"{self.protocol}{PROTOCOL_SEPARATOR}{self.version_range}"
        return self.version_range


def extract_dependency_info(
    manifest: ManifestView, module_name: str
) -> Optional[DependencyDescriptor]:
    """
    Find ``module_name`` in a manifest and describe its declaration.

    Sections are searched in priority order: dependencies, devDependencies,
    optionalDependencies, peerDependencies. The first hit wins.

    Args:
        manifest: Manifest declaring the dependency
        module_name: Dependency to look up

    Returns:
        DependencyDescriptor, or None when no section declares the module
    """
    sections = (
        (DependencyCategory.DEPENDENCIES, manifest.dependencies),
        (DependencyCategory.DEV_DEPENDENCIES, manifest.dev_dependencies),
        (DependencyCategory.OPTIONAL_DEPENDENCIES, manifest.optional_dependencies),
        (DependencyCategory.PEER_DEPENDENCIES, manifest.peer_dependencies),
    )
    for category, mapping in sections:
        if module_name in mapping:
            protocol, version_range = split_specifier(mapping[module_name])
            return DependencyDescriptor(
                name=module_name,
                version_range=version_range,
                category=category,
                protocol=protocol,
                from_name=manifest.name,
                from_version=manifest.version,
                from_file=manifest.file,
            )
    return None

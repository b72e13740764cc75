"""
Workspace Utilities Module
==========================

Provides utilities for finding and working with a package workspace:
- Finding the workspace root (a package.json declaring ``workspaces``)
- Matching member directories against the root's workspace patterns
- Discovering and reading every member manifest
- Checking member-to-member dependencies
"""

import json
import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from ..common.constants import IGNORED_DIRECTORIES, MANIFEST_FILENAME
from ..common.logger import get_logger
from ..common.path_utils import to_absolute
from ..dependencies.descriptor import DependencyDescriptor
from ..dependencies.satisfaction import SatisfactionResult
from ..manifest.package_json import PackageManifest, read_package_json

logger = get_logger(__name__)


# ============================================================================
# Workspace Detection
# ============================================================================


def find_workspace_root(
    start_path: Optional[Path] = None, manifest_name: str = MANIFEST_FILENAME
) -> Optional[Path]:
    """
    Find the workspace root above ``start_path``.

    Walks up the directory tree looking for a manifest that declares
    ``workspaces``. Unreadable or malformed manifests are skipped.

    Args:
        start_path: Starting directory (defaults to current working directory)
        manifest_name: Manifest file name to look for

    Returns:
        Path to workspace root, or None if not found
    """
    current = (start_path or Path.cwd()).resolve()

    for parent in [current] + list(current.parents):
        manifest = parent / manifest_name
        if not manifest.is_file():
            continue
        try:
            data = json.loads(manifest.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.debug("Skipping unreadable manifest", file=str(manifest), error=str(e))
            continue
        if isinstance(data, dict) and data.get("workspaces"):
            return parent

    return None


# ============================================================================
# Workspace Patterns
# ============================================================================


def _match_segments(pattern: Sequence[str], path: Sequence[str]) -> bool:
    if not pattern:
        return not path
    head, rest = pattern[0], pattern[1:]
    if head == "**":
        # zero or more whole segments
        return any(_match_segments(rest, path[i:]) for i in range(len(path) + 1))
    if not path:
        return False
    return fnmatchcase(path[0], head) and _match_segments(rest, path[1:])


def match_workspace_pattern(pattern: str, directory: str) -> bool:
    """
    Match a relative directory against one workspace glob.

    ``*`` and ``?`` never cross a path separator; ``**`` spans any number of
    directories, including none.
    """
    pattern_parts = [p for p in pattern.replace("\\", "/").split("/") if p not in ("", ".")]
    dir_parts = [p for p in directory.replace("\\", "/").split("/") if p not in ("", ".")]
    return _match_segments(pattern_parts, dir_parts)


def filter_workspace_dirs(
    patterns: Sequence[str],
    dirs: Sequence[str],
    root: Optional[Union[str, Path]] = None,
) -> List[str]:
    """
    Keep directories selected by workspace patterns.

    A directory is kept when it matches at least one pattern and no
    ``!``-negated pattern. Order of ``dirs`` is preserved.

    Args:
        patterns: Workspace globs from the root manifest
        dirs: Directories relative to the workspace root
        root: When given, kept directories are returned joined onto this
            root, made absolute and normalised

    Examples:
        >>> filter_workspace_dirs(["packages/*", "!packages/tmp"], ["packages/a", "packages/tmp"])
        ['packages/a']
    """
    include = [p for p in patterns if not p.startswith("!")]
    exclude = [p[1:] for p in patterns if p.startswith("!")]
    kept = [
        d
        for d in dirs
        if any(match_workspace_pattern(p, d) for p in include)
        and not any(match_workspace_pattern(p, d) for p in exclude)
    ]
    if root is None:
        return kept
    base = to_absolute(str(root))
    return [os.path.normpath(os.path.join(base, d)) for d in kept]


# ============================================================================
# Member Discovery
# ============================================================================


def _candidate_dirs(root: Path, manifest_name: str) -> List[str]:
    """Relative (posix) paths of directories below ``root`` holding a manifest."""
    found: List[str] = []
    for current, subdirs, files in os.walk(root):
        subdirs[:] = sorted(d for d in subdirs if d not in IGNORED_DIRECTORIES)
        if manifest_name in files:
            rel = Path(current).relative_to(root).as_posix()
            if rel != ".":
                found.append(rel)
    return found


def discover_workspace_packages(
    root: Union[str, Path], manifest_name: str = MANIFEST_FILENAME
) -> List[PackageManifest]:
    """
    Read every workspace member of the workspace rooted at ``root``.

    Args:
        root: Workspace root directory (holding the root manifest)
        manifest_name: Manifest file name

    Returns:
        Member manifests sorted by directory; empty when the root manifest
        declares no workspaces

    Raises:
        ManifestNotFoundError: If the root manifest is missing
        InvalidManifestError: If the root or a member manifest is invalid
    """
    root_path = Path(root).resolve()
    root_manifest = read_package_json(root_path / manifest_name)
    if not root_manifest.workspaces:
        logger.warning("Root manifest declares no workspaces", file=root_manifest.file)
        return []

    member_dirs = filter_workspace_dirs(
        root_manifest.workspaces, _candidate_dirs(root_path, manifest_name), root=root_path
    )
    members = [read_package_json(os.path.join(d, manifest_name)) for d in member_dirs]
    logger.info("Discovered workspace packages", root=str(root_path), count=len(members))
    return sorted(members, key=lambda m: m.directory)


# ============================================================================
# Workspace Checks
# ============================================================================


@dataclass
class DependencyCheck:
    """Outcome of checking one member dependency against its workspace package."""

    package: PackageManifest
    descriptor: DependencyDescriptor
    result: SatisfactionResult

    @property
    def satisfied(self) -> bool:
        return self.result.satisfied

    @property
    def soft_failed(self) -> bool:
        """Accepted without proof (the version could not be checked)."""
        return self.result.satisfied and self.result.error is not None


def check_workspace_dependencies(
    members: Sequence[PackageManifest], workspace_root: Union[str, Path]
) -> List[DependencyCheck]:
    """
    Check every dependency that one member declares on another member.

    Dependencies on packages outside the workspace are ignored.

    Args:
        members: Workspace member manifests
        workspace_root: Root directory of the workspace

    Returns:
        One DependencyCheck per (member, member dependency) pair, ordered by
        member then dependency name
    """
    by_name: Dict[str, PackageManifest] = {m.name: m for m in members if m.name}
    root = str(workspace_root)
    checks: List[DependencyCheck] = []

    for member in members:
        for dep_name in sorted(by_name):
            descriptor = member.get_dependency_info(dep_name)
            if descriptor is None:
                continue
            result = by_name[dep_name].satisfies_dependency(descriptor, root)
            if not result.satisfied:
                logger.debug(
                    "Unsatisfied workspace dependency",
                    package=member.name,
                    dependency=dep_name,
                    reason=result.error.reason.value if result.error else None,
                )
            checks.append(DependencyCheck(member, descriptor, result))

    return checks

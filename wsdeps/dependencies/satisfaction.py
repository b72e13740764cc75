"""
Workspace Satisfaction
======================

Decides whether a candidate package on disk satisfies a dependency
declaration.

Rules, applied in order (first match wins):
1. The candidate name must equal the dependency name
2. The workspace root defaults to the declaring manifest's directory; a
   ``workspace:`` dependency needs an explicit root
3. The candidate directory must lie within the workspace root
4. Protocol dispatch:
   - workspace: accepted, no version check
   - file / link / portal: resolved path must equal the candidate directory
   - npm or no protocol: version range check
   - anything else is remote and never locally satisfiable

The verdict is always returned together with an optional error. A version that
cannot be checked (unparseable range or version) is accepted with a
``VERSION_RANGE_UNPARSEABLE`` error: callers must branch on the verdict, and
report the error whenever one is present.
"""

import os
from dataclasses import dataclass
from typing import NamedTuple, Optional

from typing_extensions import assert_never

from ..common.errors import SatisfactionError, SatisfactionReason
from ..common.logger import get_logger
from ..common.path_utils import is_within, same_path, to_absolute
from .descriptor import DependencyDescriptor, ProtocolKind
from .version import (
    is_wildcard_range,
    parse_version,
    parse_version_constraint,
    version_satisfies,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class CandidatePackage:
    """Minimal view of an on-disk package offered to satisfy a dependency."""

    name: str
    version: str
    directory: str


class SatisfactionResult(NamedTuple):
    """Verdict plus the reason it is negative or unproven."""

    satisfied: bool
    error: Optional[SatisfactionError] = None


def _fail(reason: SatisfactionReason, detail: str = "") -> SatisfactionResult:
    return SatisfactionResult(False, SatisfactionError(reason, detail))


def satisfies(
    candidate: CandidatePackage,
    descriptor: DependencyDescriptor,
    workspace_root: Optional[str] = None,
) -> SatisfactionResult:
    """
    Check whether ``candidate`` satisfies ``descriptor``.

    Args:
        candidate: Package offered to fulfil the dependency
        descriptor: Dependency declaration, from extract_dependency_info()
        workspace_root: Workspace directory; defaults to the directory of
            ``descriptor.from_file`` (required for ``workspace:`` dependencies)

    Returns:
        SatisfactionResult(satisfied, error). ``error`` may accompany a
        positive verdict when the version could not be verified.

    Raises:
        OSError: If a relative path cannot be made absolute
    """
    logger.debug(
        "Evaluating dependency",
        dependency=descriptor.name,
        specifier=descriptor.raw_specifier,
        candidate_dir=candidate.directory,
    )

    if candidate.name != descriptor.name:
        return _fail(
            SatisfactionReason.NAME_MISMATCH, f"{candidate.name} != {descriptor.name}"
        )

    if not workspace_root:
        if descriptor.kind == ProtocolKind.WORKSPACE:
            return _fail(SatisfactionReason.MISSING_WORKSPACE_INFO)
        workspace_root = os.path.dirname(descriptor.from_file)
    workspace_root = to_absolute(workspace_root)

    if not is_within(candidate.directory, workspace_root):
        return _fail(
            SatisfactionReason.OUTSIDE_WORKSPACE,
            f"{candidate.directory} is not inside {workspace_root}",
        )

    kind = descriptor.kind
    match kind:
        case ProtocolKind.WORKSPACE:
            return SatisfactionResult(True)
        case ProtocolKind.FILE | ProtocolKind.LINK | ProtocolKind.PORTAL:
            return _check_local_path(candidate, descriptor)
        case ProtocolKind.REMOTE:
            return _fail(SatisfactionReason.REMOTE_PROTOCOL, descriptor.protocol)
        case ProtocolKind.NPM | ProtocolKind.BARE:
            return _check_version_range(candidate, descriptor)
        case _:
            assert_never(kind)


def _check_local_path(
    candidate: CandidatePackage, descriptor: DependencyDescriptor
) -> SatisfactionResult:
    # version_range holds a path relative to the declaring manifest
    dep_path = os.path.join(os.path.dirname(descriptor.from_file), descriptor.version_range)
    if not same_path(dep_path, candidate.directory):
        return _fail(
            SatisfactionReason.PATH_MISMATCH,
            f"package {descriptor.name} path does not match workspace package {candidate.name}",
        )
    return SatisfactionResult(True)


def _check_version_range(
    candidate: CandidatePackage, descriptor: DependencyDescriptor
) -> SatisfactionResult:
    if is_wildcard_range(descriptor.version_range):
        return SatisfactionResult(True)

    try:
        constraint = parse_version_constraint(descriptor.version_range)
    except ValueError:
        logger.debug("Unparseable version range", range=descriptor.version_range)
        return SatisfactionResult(
            True,
            SatisfactionError(
                SatisfactionReason.VERSION_RANGE_UNPARSEABLE, descriptor.version_range
            ),
        )

    try:
        version = parse_version(candidate.version)
    except ValueError:
        logger.debug("Unparseable package version", version=candidate.version)
        return SatisfactionResult(
            True,
            SatisfactionError(SatisfactionReason.VERSION_RANGE_UNPARSEABLE, candidate.version),
        )

    if version_satisfies(constraint, version):
        return SatisfactionResult(True)
    return _fail(
        SatisfactionReason.VERSION_RANGE_NOT_SATISFIED,
        f"{candidate.version} does not match {descriptor.version_range}",
    )

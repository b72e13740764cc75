"""
wsdeps Error Classes
====================

Exception hierarchy shared by every wsdeps module.

All errors carry a machine-readable ``code`` and a human ``message`` and can be
serialized with ``to_dict()`` for reporting.
"""

from enum import Enum
from typing import Any, Dict


class WsdepsError(Exception):
    """Base class for all wsdeps errors."""

    def __init__(self, message: str, code: str = "WSDEPS_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
        }


# =============================================================================
# MANIFEST ERRORS
# =============================================================================


class ManifestError(WsdepsError):
    """Raised when a package manifest cannot be loaded."""

    def __init__(self, message: str, code: str = "MANIFEST_ERROR"):
        super().__init__(message, code)


class ManifestNotFoundError(ManifestError):
    """Raised when a package manifest file does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Manifest not found: {path}", "MANIFEST_NOT_FOUND")


class InvalidManifestError(ManifestError):
    """Raised when a package manifest is not valid JSON or has invalid fields."""

    def __init__(self, path: str, detail: str):
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid manifest {path}: {detail}", "INVALID_MANIFEST")


# =============================================================================
# SATISFACTION ERRORS
# =============================================================================


class SatisfactionReason(str, Enum):
    """Why a workspace dependency is not (or not provably) satisfied."""

    NAME_MISMATCH = "name_mismatch"
    MISSING_WORKSPACE_INFO = "missing_workspace_info"
    OUTSIDE_WORKSPACE = "outside_workspace"
    PATH_MISMATCH = "path_mismatch"
    REMOTE_PROTOCOL = "remote_protocol"
    VERSION_RANGE_UNPARSEABLE = "version_range_unparseable"  # soft-fail
    VERSION_RANGE_NOT_SATISFIED = "version_range_not_satisfied"


_REASON_MESSAGES = {
    SatisfactionReason.NAME_MISMATCH: "package name mismatch",
    SatisfactionReason.MISSING_WORKSPACE_INFO: (
        "cannot satisfy workspace protocol dependency without a workspace directory"
    ),
    SatisfactionReason.OUTSIDE_WORKSPACE: "can't satisfy a dependency being outside workspace",
    SatisfactionReason.PATH_MISMATCH: "package path mismatch dependency path",
    SatisfactionReason.REMOTE_PROTOCOL: "cannot satisfy remote protocol",
    SatisfactionReason.VERSION_RANGE_UNPARSEABLE: "can't parse version",
    SatisfactionReason.VERSION_RANGE_NOT_SATISFIED: "package version does not satisfy range",
}


class SatisfactionError(WsdepsError):
    """
    Describes why a candidate package does not satisfy a dependency.

    Every instance shares the ``SATISFACTION_FAILED`` code; the specific cause
    is carried by ``reason``. The error is returned alongside a verdict, never
    raised by the evaluator.

    Attributes:
        reason: The specific failure reason
        detail: Optional extra context (names, paths, versions)
    """

    def __init__(self, reason: SatisfactionReason, detail: str = ""):
        self.reason = reason
        self.detail = detail
        message = f"workspace dependency check failed: {_REASON_MESSAGES[reason]}"
        if detail:
            message += f": {detail}"
        super().__init__(message, "SATISFACTION_FAILED")

    @property
    def is_soft(self) -> bool:
        """True when the error accompanies an optimistic positive verdict."""
        return self.reason == SatisfactionReason.VERSION_RANGE_UNPARSEABLE

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["reason"] = self.reason.value
        return data

    def __repr__(self) -> str:
        return f"SatisfactionError({self.reason.name}, {self.detail!r})"

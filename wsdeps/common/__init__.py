"""
wsdeps Common Package

Shared primitives used across wsdeps modules:
- Exception classes for consistent error handling
- Constants for manifest fields, protocols and defaults
- Structured logging
- Path arithmetic (containment and equality)
- Environment-driven settings
"""

from .config import Settings, clear_settings_cache, get_settings
from .constants import (
    LOCAL_PATH_PROTOCOLS,
    LOG_LEVELS,
    MANIFEST_FILENAME,
    NPM_PROTOCOL,
    WILDCARD_RANGES,
    WORKSPACE_PROTOCOL,
)
from .errors import (
    InvalidManifestError,
    ManifestError,
    ManifestNotFoundError,
    SatisfactionError,
    SatisfactionReason,
    WsdepsError,
)
from .logger import WsdepsLogger, configure_logging, get_logger
from .path_utils import is_within, path_parts, same_path, to_absolute

__all__ = [
    # Errors
    "WsdepsError",
    "ManifestError",
    "ManifestNotFoundError",
    "InvalidManifestError",
    "SatisfactionError",
    "SatisfactionReason",
    # Constants
    "LOCAL_PATH_PROTOCOLS",
    "LOG_LEVELS",
    "MANIFEST_FILENAME",
    "NPM_PROTOCOL",
    "WILDCARD_RANGES",
    "WORKSPACE_PROTOCOL",
    # Settings
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Logger
    "WsdepsLogger",
    "get_logger",
    "configure_logging",
    # Path utilities
    "to_absolute",
    "path_parts",
    "is_within",
    "same_path",
]

"""
wsdeps Shared Constants

Single source of truth for manifest field names, protocol names and defaults.

Usage:
    from wsdeps.common.constants import LOCAL_PATH_PROTOCOLS, WORKSPACE_PROTOCOL
"""

# =============================================================================
# MANIFEST
# =============================================================================

MANIFEST_FILENAME = "package.json"
"""Default manifest file name looked up in workspace members"""

IGNORED_DIRECTORIES = ["node_modules", ".git"]
"""Directories never entered while discovering workspace members"""


# =============================================================================
# PROTOCOLS
# =============================================================================

PROTOCOL_SEPARATOR = ":"

WORKSPACE_PROTOCOL = "workspace"
NPM_PROTOCOL = "npm"

LOCAL_PATH_PROTOCOLS = ["file", "link", "portal"]
"""Protocols whose version range is a path relative to the declaring manifest"""

WILDCARD_RANGES = ["*", "^", "~"]
"""Bare ranges accepted for any version"""


# =============================================================================
# DEFAULTS
# =============================================================================

ENV_PREFIX = "WSDEPS_"
DEFAULT_LOG_LEVEL = "WARNING"

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
"""Level names accepted by --log-level and WSDEPS_LOG_LEVEL (any case)"""

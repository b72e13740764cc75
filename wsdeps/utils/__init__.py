"""
Utilities Module
================

Workspace helpers for wsdeps:
- Workspace root detection
- Workspace pattern matching
- Member package discovery
- Member-to-member dependency checks
"""

from .workspace import (
    DependencyCheck,
    check_workspace_dependencies,
    discover_workspace_packages,
    filter_workspace_dirs,
    find_workspace_root,
    match_workspace_pattern,
)

__all__ = [
    "find_workspace_root",
    "match_workspace_pattern",
    "filter_workspace_dirs",
    "discover_workspace_packages",
    "DependencyCheck",
    "check_workspace_dependencies",
]

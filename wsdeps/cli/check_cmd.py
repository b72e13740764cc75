"""Check command - Verify workspace packages satisfy each other's dependencies."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.table import Table

from ..common import get_settings
from ..utils import (
    DependencyCheck,
    check_workspace_dependencies,
    discover_workspace_packages,
    find_workspace_root,
)
from .utils import console, error, handle_error, info, success, warning


def _resolve_root(root: Optional[str], manifest_name: str) -> Path:
    """Explicit argument, then WSDEPS_WORKSPACE_ROOT, then the nearest workspace."""
    if root:
        return Path(root)
    configured = get_settings().workspace_root
    if configured:
        return Path(configured)
    found = find_workspace_root(Path.cwd(), manifest_name)
    if found is None:
        error("No workspace root found (no package.json declaring 'workspaces')")
        raise typer.Exit(1)
    return found


def _status(check: DependencyCheck) -> str:
    if not check.satisfied:
        return "[red]failed[/red]"
    if check.soft_failed:
        return "[yellow]unverified[/yellow]"
    return "[green]ok[/green]"


def render_checks(checks: List[DependencyCheck]) -> Table:
    table = Table(title="Workspace Dependencies", show_header=True, header_style="bold cyan")
    table.add_column("Package", style="cyan", no_wrap=True)
    table.add_column("Dependency", no_wrap=True)
    table.add_column("Category")
    table.add_column("Specifier")
    table.add_column("Status")
    table.add_column("Reason", style="dim")

    for check in checks:
        err = check.result.error
        table.add_row(
            check.package.name,
            check.descriptor.name,
            check.descriptor.category.value,
            check.descriptor.raw_specifier,
            _status(check),
            err.message if err else "",
        )
    return table


def check(
    root: Optional[str] = typer.Argument(
        None, help="Workspace root (defaults to the nearest workspace above the current directory)"
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Also fail when a version range could not be verified"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output"),
):
    """
    Check that workspace packages satisfy each other's dependencies.

    Every dependency a workspace member declares on another member is
    checked: workspace: entries must point inside the workspace, file:,
    link: and portal: paths must resolve to the member's directory, and
    version ranges must match the member's version.

    Examples:
        wsdeps check
        wsdeps check path/to/monorepo
        wsdeps check --strict
    """
    try:
        settings = get_settings()
        workspace_root = _resolve_root(root, settings.manifest_name).resolve()
        members = discover_workspace_packages(workspace_root, settings.manifest_name)

        if not members:
            warning(f"No workspace packages found under {workspace_root}")
            return

        if verbose:
            info(f"Workspace root: {workspace_root}")
            info(f"Found {len(members)} workspace packages")

        checks = check_workspace_dependencies(members, workspace_root)
        if not checks:
            info("No dependencies between workspace packages")
            return

        console.print(render_checks(checks))

        failed = [c for c in checks if not c.satisfied]
        unverified = [c for c in checks if c.soft_failed]

        if unverified:
            warning(f"{len(unverified)} dependencies accepted without version verification")
        if failed:
            error(f"{len(failed)} of {len(checks)} workspace dependencies are not satisfied")
            raise typer.Exit(1)
        if strict and unverified:
            error("Unverified dependencies are not allowed with --strict")
            raise typer.Exit(1)

        success(f"All {len(checks)} workspace dependencies are satisfied")

    except typer.Exit:
        raise
    except Exception as e:
        handle_error(e, verbose)

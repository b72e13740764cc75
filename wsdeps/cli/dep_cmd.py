"""Dependency commands - Inspect one declaration and check one candidate."""

from typing import Optional

import typer
from rich.table import Table

from ..dependencies import DependencyDescriptor
from ..manifest import read_package_json
from .utils import console, error, handle_error, success, warning


def _describe(descriptor: DependencyDescriptor) -> Table:
    table = Table(title=f"Dependency {descriptor.name}", show_header=False)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")

    table.add_row("Category", descriptor.category.value)
    table.add_row("Specifier", descriptor.raw_specifier)
    table.add_row("Protocol", descriptor.protocol or "-")
    table.add_row("Kind", descriptor.kind.value)
    table.add_row("Version range", descriptor.version_range)
    table.add_row("Declared by", f"{descriptor.from_name}@{descriptor.from_version}")
    table.add_row("Manifest", descriptor.from_file)
    return table


def dep(
    manifest: str = typer.Argument(..., help="Path to the declaring package.json"),
    name: str = typer.Argument(..., help="Dependency name"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output"),
):
    """
    Show how a manifest declares a dependency.

    Examples:
        wsdeps dep packages/app/package.json lodash
    """
    try:
        descriptor = read_package_json(manifest).get_dependency_info(name)
        if descriptor is None:
            error(f"'{name}' is not declared in {manifest}")
            raise typer.Exit(1)
        console.print(_describe(descriptor))
    except typer.Exit:
        raise
    except Exception as e:
        handle_error(e, verbose)


def satisfies(
    manifest: str = typer.Argument(..., help="Path to the declaring package.json"),
    name: str = typer.Argument(..., help="Dependency name"),
    candidate: str = typer.Argument(..., help="Path to the candidate package.json"),
    workspace_root: Optional[str] = typer.Option(
        None,
        "--workspace-root",
        "-w",
        help="Workspace root (defaults to the declaring manifest's directory)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output"),
):
    """
    Check whether a package satisfies a manifest's dependency.

    Examples:
        wsdeps satisfies packages/app/package.json lib packages/lib/package.json -w .
    """
    try:
        descriptor = read_package_json(manifest).get_dependency_info(name)
        if descriptor is None:
            error(f"'{name}' is not declared in {manifest}")
            raise typer.Exit(1)

        ok, err = read_package_json(candidate).satisfies_dependency(descriptor, workspace_root)

        if not ok:
            error(f"{descriptor.name} ({descriptor.raw_specifier}) is not satisfied")
            if err:
                console.print(f"  [dim]{err.message}[/dim]")
            raise typer.Exit(1)
        if err:
            warning(f"{descriptor.name} ({descriptor.raw_specifier}) accepted without proof")
            console.print(f"  [dim]{err.message}[/dim]")
            return
        success(f"{descriptor.name} ({descriptor.raw_specifier}) is satisfied")
    except typer.Exit:
        raise
    except Exception as e:
        handle_error(e, verbose)

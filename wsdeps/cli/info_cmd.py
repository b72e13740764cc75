"""Info command - Versions of wsdeps and the libraries it runs on."""

import platform
from importlib import metadata
from typing import List, Tuple

import typer
from rich.table import Table

from .. import __version__
from .utils import console, warning

# Distributions whose behaviour shows up in check results or CLI output
RUNTIME_DISTRIBUTIONS: List[Tuple[str, str]] = [
    ("semantic-version", "npm range matching"),
    ("pydantic", "package.json model"),
    ("pydantic-settings", "WSDEPS_* settings"),
    ("typer", "command line"),
    ("rich", "terminal output"),
]


def _installed_version(distribution: str) -> str:
    try:
        return metadata.version(distribution)
    except metadata.PackageNotFoundError:
        return ""


def version(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Also show the Python build"),
):
    """
    Show wsdeps version and the versions of its runtime libraries.

    Version range results depend on the installed semantic-version release,
    so include this output when reporting a surprising verdict.

    Examples:
        wsdeps version
        wsdeps version --verbose
    """
    table = Table(title="wsdeps Version Information", show_header=True, header_style="bold cyan")
    table.add_column("Component", style="cyan", no_wrap=True)
    table.add_column("Version", style="green")
    table.add_column("Used for", style="dim")

    table.add_row("wsdeps", __version__, "")
    missing = []
    for distribution, role in RUNTIME_DISTRIBUTIONS:
        installed = _installed_version(distribution)
        if not installed:
            missing.append(distribution)
        table.add_row(distribution, installed or "[red]missing[/red]", role)

    python = platform.python_version()
    if verbose:
        python = f"{python} ({platform.python_implementation()}, {platform.python_compiler()})"
    table.add_row("Python", python, "")

    console.print(table)

    if missing:
        warning(f"Missing runtime libraries: {', '.join(missing)}")
        raise typer.Exit(1)

"""Shared console helpers for CLI commands."""

import typer
from rich.console import Console

from ..common import WsdepsError, get_logger

console = Console()

logger = get_logger("cli")


def success(message: str) -> None:
    console.print(f"[bold green]✔[/bold green] {message}")


def info(message: str) -> None:
    console.print(f"[cyan]ℹ[/cyan] {message}")


def warning(message: str) -> None:
    console.print(f"[bold yellow]⚠[/bold yellow] {message}")


def error(message: str) -> None:
    console.print(f"[bold red]✘[/bold red] {message}")


def handle_error(e: Exception, verbose: bool = False) -> None:
    """Report an exception and exit with status 1."""
    if isinstance(e, WsdepsError):
        error(e.message)
    else:
        error(f"Unexpected error: {e}")
    logger.error("Command failed", exc_info=verbose, error=str(e))
    if verbose:
        console.print_exception()
    raise typer.Exit(1)

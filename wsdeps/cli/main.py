"""wsdeps CLI - Main entry point."""

from typing import Optional

import typer

from ..common import LOG_LEVELS, configure_logging, get_settings
from . import check_cmd, dep_cmd, info_cmd
from .utils import error, handle_error

app = typer.Typer(
    name="wsdeps",
    help="wsdeps - Check workspace package dependencies",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def setup(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", "-l", help="Log level (default: WSDEPS_LOG_LEVEL or WARNING)"
    ),
):
    """Configure logging before any command runs."""
    if log_level is not None and log_level.upper() not in LOG_LEVELS:
        error(f"Invalid log level '{log_level}'. Choose from: {', '.join(LOG_LEVELS)}")
        raise typer.Exit(1)

    try:
        settings = get_settings()
        configure_logging(log_level or settings.log_level, settings.log_format)
    except Exception as e:
        handle_error(e)


# Register all commands
app.command()(check_cmd.check)
app.command()(dep_cmd.dep)
app.command()(dep_cmd.satisfies)
app.command()(info_cmd.version)


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()

"""Main entry point for timeq.

Resolves one time expression and prints it as epoch seconds, epoch
milliseconds or RFC3339 text:

    timeq -e                         # now, epoch seconds
    timeq -m "2 hours ago"           # epoch milliseconds
    timeq -r -o UTC 2022-02-02T01:00:00Z
    timeq -r -o Local "2022-02-02 01:00:00"
"""

import sys
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from timeq import __version__
from timeq.config.settings import get_settings
from timeq.core.clock import SystemClock
from timeq.core.errors import (
    ConfigurationError,
    InputParseError,
    TruncationError,
)
from timeq.core.formatter import format_instant
from timeq.core.modes import OutputMode, TimeZoneChoice
from timeq.core.resolver import resolve
from timeq.utils.output import error_panel, info, warning

app = typer.Typer(
    name="timeq",
    help="timeq - Convert time expressions to epoch or RFC3339",
    add_completion=True,
)

err_console = Console(stderr=True)


def get_clock() -> SystemClock:
    """Clock used by the CLI."""
    return SystemClock()


def _version_callback(value: bool):
    if value:
        typer.echo(f"timeq v{__version__}")
        raise typer.Exit()


@app.command()
def main(
    expression: Optional[str] = typer.Argument(
        None, help="RFC3339, 'YYYY-MM-DD HH:MM:SS' or '<duration> ago|later' (default: now)"
    ),
    epoch: bool = typer.Option(False, "--epoch", "-e", help="Print seconds since the Unix epoch"),
    millis: bool = typer.Option(False, "--millis", "-m", help="Print milliseconds since the Unix epoch"),
    readable: bool = typer.Option(False, "--readable", "-r", help="Print RFC3339 text (needs --output)"),
    output: Optional[TimeZoneChoice] = typer.Option(
        None, "--output", "-o", case_sensitive=False, help="Zone for --readable: UTC or Local"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Explain how the input was resolved (stderr)"),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """
    Resolve a time expression and print it in one output format.

    Exactly one of --epoch, --millis or --readable is required.
    """
    try:
        mode = OutputMode.from_flags(epoch, millis, readable, output)
    except ConfigurationError as e:
        raise typer.BadParameter(str(e))

    try:
        settings = get_settings()
    except ConfigurationError as e:
        error_panel(f"[red]Error:[/] {escape(str(e))}", title="Configuration Error")
        raise typer.Exit(1)

    clock = get_clock()
    try:
        instant = resolve(expression, clock)
    except InputParseError as e:
        error_panel(f"[red]Error:[/] {escape(str(e))}", title="Invalid Input")
        raise typer.Exit(1)

    if verbose:
        info(f"Resolved from [cyan]{instant.source}[/cyan]: {instant.utc.isoformat()}")
        if output is TimeZoneChoice.UTC and settings.utc_uses_local_offset:
            warning(
                "UTC output uses the current local offset "
                "(set readable.utc_uses_local_offset: false to change)"
            )

    try:
        result = format_instant(instant, mode, clock, settings.utc_uses_local_offset)
    except TruncationError as e:
        error_panel(f"[red]Internal error:[/] {escape(str(e))}", title="Formatting Failed")
        raise typer.Exit(1)

    typer.echo(result)


def run():
    """Console script entry point."""
    try:
        app()
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(0)
    except Exception as e:
        err_console.print()
        err_console.print(Panel(
            f"[red]An unexpected error occurred:[/]\n\n"
            f"[bold white]{escape(str(e))}[/bold white]\n\n"
            f"[dim]Type: {type(e).__name__}[/dim]",
            title="[bold red]Unexpected Error[/bold red]",
            border_style="red",
            box=box.ROUNDED,
        ))
        sys.exit(1)


if __name__ == "__main__":
    run()

"""Pretty output utilities using Rich.

The resolved time is the only thing written to stdout; everything printed
from here goes to stderr.
"""

from rich import box
from rich.console import Console
from rich.panel import Panel

console = Console(stderr=True)


def warning(message: str) -> None:
    """Print warning message."""
    console.print(f"[bold yellow]![/] {message}")


def info(message: str) -> None:
    """Print info message."""
    console.print(f"[bold blue]→[/] {message}")


def error_panel(message: str, title: str = "Error") -> None:
    """Print an error in a red panel."""
    console.print()
    console.print(
        Panel(
            message,
            title=f"[bold red]{title}[/bold red]",
            border_style="red",
            box=box.ROUNDED,
        )
    )

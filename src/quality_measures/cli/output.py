"""Rich output helpers shared by CLI commands."""

from typing import Any

from rich.console import Console

console = Console()


def print_error(message: str) -> None:
    console.print(f"[red]✗ {message}[/red]")


def print_success(message: str) -> None:
    console.print(f"[green]✓ {message}[/green]")


def print_info(message: str) -> None:
    console.print(f"[blue]ℹ {message}[/blue]")


def print_warning(message: str) -> None:
    console.print(f"[yellow]⚠ {message}[/yellow]")


def print_json(data: Any, title: str | None = None) -> None:
    """Print data as JSON.

    Args:
        data: JSON-serializable data
        title: Optional heading, printed before the JSON (omit for machine output)
    """
    if title:
        console.print(f"[bold blue]{title}[/bold blue]")
    console.print_json(data=data)

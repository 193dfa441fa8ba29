from __future__ import annotations

from rich.console import Console
from rich.markup import escape

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def info(message: str) -> None:
    console.print(escape(message))


def step(message: str) -> None:
    console.print(f"[cyan]{escape(message)}[/cyan]")


def success(message: str) -> None:
    console.print(f"[green]✓[/green] {escape(message)}")


def warn(message: str) -> None:
    console.print(f"[red]{escape(message)}[/red]")


def error(message: str) -> None:
    err_console.print(f"[red]{escape(message)}[/red]")


def dry_run(command: str) -> None:
    console.print(f"[cyan]{escape(f'[dryrun] {command}')}[/cyan]")

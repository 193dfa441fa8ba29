from __future__ import annotations

from rich.prompt import Confirm, Prompt

from iconpipe.console import console


class Prompter:
    """Interactive questions asked during a release."""

    def confirm(self, message: str, *, warning: bool = False) -> bool:
        styled = f"[red]{message}[/red]" if warning else message
        return Confirm.ask(styled, console=console, default=False)

    def select(self, message: str, options: list[tuple[str, str]]) -> str:
        """Ask for one of ``options`` given as (value, label) pairs; returns the value."""
        for value, label in options:
            console.print(f"  [bold]{value}[/bold]  {label}" if label != value else f"  [bold]{value}[/bold]")
        return Prompt.ask(message, console=console, choices=[value for value, _ in options])

    def text(self, message: str, *, default: str = "") -> str:
        return Prompt.ask(message, console=console, default=default)

"""Progress and error reporting sinks."""

from __future__ import annotations

from typing import Protocol

import click


class Reporter(Protocol):
    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class ConsoleReporter:
    """Reporter that writes styled messages to the terminal."""

    def __init__(self, quiet: bool = False) -> None:
        self.quiet = quiet

    def info(self, message: str) -> None:
        if not self.quiet:
            click.echo(message)

    def warning(self, message: str) -> None:
        click.echo(click.style(f"Warning: {message}", fg="yellow"), err=True)

    def error(self, message: str) -> None:
        click.echo(click.style(f"Error: {message}", fg="red", bold=True), err=True)

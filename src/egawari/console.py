"""Colored console output using the egawari markup.

Every line is run through :func:`egawari.markup.render` once.  Output goes
through :func:`click.echo`, which strips the escape codes when the stream is
not a terminal.
"""

from __future__ import annotations

import click

from egawari.markup import (
    BOLD_CYAN,
    BOLD_GREEN,
    BOLD_RED,
    BOLD_YELLOW,
    RESET,
    arrow,
    colored,
)


def col(text: str) -> None:
    """Print *text* colored, without an arrow."""
    click.echo(f"{colored(text)}{RESET}")


def log(text: str) -> None:
    click.echo(f"{arrow(text, BOLD_CYAN)}{RESET}")


def err(text: str) -> None:
    click.echo(f"{arrow(text, BOLD_RED)}{RESET}", err=True)


def success(text: str) -> None:
    click.echo(f"{arrow(text, BOLD_GREEN)}{RESET}")


def warn(text: str) -> None:
    click.echo(f"{arrow(text, BOLD_YELLOW)}{RESET}", err=True)

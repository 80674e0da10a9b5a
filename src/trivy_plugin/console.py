"""Stderr progress and error lines for the plugin process."""

from __future__ import annotations

import click

from .constants import LOG_PREFIX
from .env_flags import is_quiet


def log(message: str) -> None:
    if is_quiet():
        return
    click.echo(f"{LOG_PREFIX} {message}", err=True)


def error(message: str) -> None:
    click.echo(f"{LOG_PREFIX} {message}", err=True)

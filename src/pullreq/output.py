"""Output helpers separating user-facing messages from machine-readable results."""

import sys

import click


def user_output(message: str = "", *, nl: bool = True) -> None:
    """Write a user-facing message to stderr."""
    click.echo(message, file=sys.stderr, nl=nl)


def machine_output(message: str = "", *, nl: bool = True) -> None:
    """Write a result meant for scripts and pipes to stdout."""
    click.echo(message, nl=nl)

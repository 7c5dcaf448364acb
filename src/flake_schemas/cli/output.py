"""Output routing for CLI commands.

Human-facing messages go to stderr so that stdout carries only data
(inventories, JSON) and stays safe to pipe.
"""

import click


def user_output(message: str = "") -> None:
    """Write a human-facing message to stderr."""
    click.echo(message, err=True)


def machine_output(message: str = "") -> None:
    """Write data meant for other programs to stdout."""
    click.echo(message)

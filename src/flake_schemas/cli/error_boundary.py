"""Error boundary handling for CLI commands.

This module provides a decorator to catch well-known exceptions at CLI entry
points and display clean error messages without stack traces.
"""

import functools
from collections.abc import Callable
from typing import Any, TypeVar

import click

from flake_schemas.cli.output import user_output
from flake_schemas.core.errors import FlakeSchemaError

T = TypeVar("T", bound=Callable[..., Any])


def cli_error_boundary(func: T) -> T:
    """Decorator that catches well-known exceptions and displays clean error messages.

    Catches:
        - FlakeSchemaError: Invalid outputs, unknown kinds, unreadable input
        - FileNotFoundError: Missing input or config files
        - ValueError: Invalid configuration values

    All other exceptions bubble up normally with full stack traces.

    Example:
        @click.command()
        @cli_error_boundary
        def my_command():
            ...
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except FlakeSchemaError as e:
            user_output(click.style("Error: ", fg="red") + str(e))
            raise SystemExit(1) from None
        except FileNotFoundError as e:
            user_output(click.style("Error: ", fg="red") + str(e))
            raise SystemExit(1) from None
        except ValueError as e:
            user_output(click.style("Error: ", fg="red") + str(e))
            raise SystemExit(1) from None

    return wrapper  # type: ignore[return-value]

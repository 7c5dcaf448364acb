import logging
import os
from pathlib import Path

import click

from flake_schemas.cli.commands.check import check_cmd
from flake_schemas.cli.commands.doc import doc_cmd
from flake_schemas.cli.commands.kinds import kinds_cmd
from flake_schemas.cli.commands.show import show_cmd
from flake_schemas.cli.context import create_context
from flake_schemas.cli.error_boundary import cli_error_boundary

# Enable debug logging if FLAKE_SCHEMAS_DEBUG environment variable is set
if os.getenv("FLAKE_SCHEMAS_DEBUG"):
    logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="flake-schemas")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: ./flake-schemas.toml when present).",
)
@click.pass_context
@cli_error_boundary
def cli(ctx: click.Context, config_path: Path | None) -> None:
    """Describe, search and validate Nix flake outputs without building them."""
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context(config_path=config_path)


cli.add_command(check_cmd)
cli.add_command(doc_cmd)
cli.add_command(kinds_cmd)
cli.add_command(show_cmd)


def main() -> None:
    """CLI entry point used by the `flake-schemas` console script."""
    cli()

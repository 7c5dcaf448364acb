"""Command to print the documentation of an output kind."""

import click

from flake_schemas.cli.context import FlakeSchemasContext
from flake_schemas.cli.error_boundary import cli_error_boundary
from flake_schemas.cli.output import machine_output


@click.command("doc")
@click.argument("kind")
@click.pass_obj
@cli_error_boundary
def doc_cmd(ctx: FlakeSchemasContext, kind: str) -> None:
    """Print the documentation of the KIND flake output."""
    schema = ctx.registry.get_schema(kind)
    machine_output(schema.doc.rstrip("\n"))

"""Command to list the registered output kinds."""

import click
from rich.console import Console
from rich.table import Table

from flake_schemas.cli.context import FlakeSchemasContext
from flake_schemas.cli.json_output import emit_json


@click.command("kinds")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_obj
def kinds_cmd(ctx: FlakeSchemasContext, as_json: bool) -> None:
    """List the flake output kinds that have a schema."""
    registry = ctx.registry

    if as_json:
        emit_json(
            {
                "kinds": [
                    {
                        "name": name,
                        "version": registry[name].version,
                        "allow_ifd": registry[name].allow_ifd,
                        "summary": registry[name].summary,
                    }
                    for name in registry.names()
                ]
            }
        )
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("kind", style="cyan", no_wrap=True)
    table.add_column("ifd", no_wrap=True)
    table.add_column("summary")

    for name in registry.names():
        schema = registry[name]
        table.add_row(name, "yes" if schema.allow_ifd else "no", schema.summary)

    Console().print(table)

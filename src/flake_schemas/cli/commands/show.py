"""Command to show the inventory of a flake output file."""

import logging
from pathlib import Path

import click
from rich.console import Console

from flake_schemas.cli.config import OUTPUT_FORMATS
from flake_schemas.cli.context import FlakeSchemasContext
from flake_schemas.cli.error_boundary import cli_error_boundary
from flake_schemas.cli.json_output import emit_json
from flake_schemas.cli.loader import load_raw_tree
from flake_schemas.cli.rendering import render_flake, render_node
from flake_schemas.outputs import inventory_outputs
from flake_schemas.report import build_flake_report, build_report

logger = logging.getLogger(__name__)


@click.command("show")
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "-k",
    "--kind",
    help="Treat FILE as a single output of this kind instead of a whole flake.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    default=None,
    help="Output format (default from config: tree).",
)
@click.option(
    "--checks/--no-checks",
    "run_checks",
    default=None,
    help="Force and show eval checks.",
)
@click.option(
    "--derivations",
    is_flag=True,
    help="Force derivations and show their store paths.",
)
@click.option(
    "--max-depth",
    type=click.IntRange(min=0),
    default=None,
    help="Levels of children to show (0 = unlimited).",
)
@click.pass_obj
@cli_error_boundary
def show_cmd(
    ctx: FlakeSchemasContext,
    file: Path,
    kind: str | None,
    output_format: str | None,
    run_checks: bool | None,
    derivations: bool,
    max_depth: int | None,
) -> None:
    """Show the inventory of the flake outputs in FILE (JSON or YAML)."""
    config = ctx.config
    output_format = output_format if output_format is not None else config.output_format
    with_checks = run_checks if run_checks is not None else config.run_checks
    depth = config.max_depth if max_depth is None else (max_depth or None)

    raw = load_raw_tree(file)
    logger.debug("Loaded %s (kind=%s)", file, kind)

    if kind is not None:
        node = ctx.registry.inventory(kind, raw)
        report = build_report(
            node, with_checks=with_checks, with_derivations=derivations, max_depth=depth
        )
        if output_format == "json":
            emit_json(report)
        else:
            Console().print(render_node(kind, report))
        return

    flake = inventory_outputs(raw, ctx.registry, skip=config.skip_outputs)
    flake_report = build_flake_report(
        flake, with_checks=with_checks, with_derivations=derivations, max_depth=depth
    )
    if output_format == "json":
        emit_json(flake_report)
    else:
        Console().print(render_flake(flake_report))

"""Command to run every eval check of a flake output file."""

from pathlib import Path

import click

from flake_schemas.cli.context import FlakeSchemasContext
from flake_schemas.cli.error_boundary import cli_error_boundary
from flake_schemas.cli.loader import load_raw_tree
from flake_schemas.cli.output import machine_output, user_output
from flake_schemas.outputs import inventory_outputs
from flake_schemas.walk import CheckResult, run_checks


@click.command("check")
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "-k",
    "--kind",
    help="Treat FILE as a single output of this kind instead of a whole flake.",
)
@click.pass_obj
@cli_error_boundary
def check_cmd(ctx: FlakeSchemasContext, file: Path, kind: str | None) -> None:
    """Force every eval check in FILE and report the ones that fail.

    Exits with status 1 if any check is false or raises.
    """
    raw = load_raw_tree(file)

    results: list[CheckResult] = []
    if kind is not None:
        results.extend(run_checks(ctx.registry.inventory(kind, raw), path=(kind,)))
    else:
        flake = inventory_outputs(raw, ctx.registry, skip=ctx.config.skip_outputs)
        for name, node in flake.outputs.items():
            results.extend(run_checks(node, path=(name,)))

    failed = [result for result in results if not result.passed]
    for result in failed:
        reason = result.error if result.error is not None else "false"
        machine_output(f"{click.style('✘', fg='red')} {result.label}: {reason}")

    user_output(f"Ran {len(results)} checks, {len(failed)} failed")
    if failed:
        raise SystemExit(1)

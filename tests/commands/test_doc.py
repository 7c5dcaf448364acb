"""Tests for the doc command."""

from pathlib import Path

from click.testing import CliRunner

from flake_schemas.cli.cli import cli
from tests.fakes.context import build_context


def test_doc_prints_documentation(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["doc", "legacyPackages"], obj=build_context(tmp_path))

    assert result.exit_code == 0, result.output
    assert result.stdout.startswith("The `legacyPackages` flake output is similar to `packages`")
    assert "should be avoided in favor of `packages`" in result.stdout


def test_doc_unknown_kind(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["doc", "widgets"], obj=build_context(tmp_path))

    assert result.exit_code == 1
    assert "Error: " in result.output
    assert "No schema registered for 'widgets'" in result.output

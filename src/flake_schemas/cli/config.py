import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "flake-schemas.toml"

OutputFormat = Literal["tree", "json"]
OUTPUT_FORMATS: tuple[OutputFormat, ...] = ("tree", "json")


@dataclass(frozen=True)
class LoadedConfig:
    """In-memory representation of `flake-schemas.toml`."""

    output_format: OutputFormat = "tree"
    run_checks: bool = False
    max_depth: int | None = None  # None = unlimited
    skip_outputs: list[str] = field(default_factory=list)


def load_config(config_dir: Path) -> LoadedConfig:
    """Load flake-schemas.toml from the given directory if present; otherwise return defaults.

    Example config:
      [show]
      format = "json"
      run_checks = true
      max_depth = 3

      [outputs]
      skip = ["legacyPackages"]
    """
    cfg_path = config_dir / CONFIG_FILENAME
    if not cfg_path.exists():
        return LoadedConfig()
    return load_config_file(cfg_path)


def load_config_file(cfg_path: Path) -> LoadedConfig:
    """Load an explicit config file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not valid TOML or holds invalid values
    """
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config file not found at {cfg_path}")

    try:
        data = tomllib.loads(cfg_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in {cfg_path}: {e}") from e
    logger.debug("Loaded config from %s", cfg_path)

    show = _table(data, "show", cfg_path)
    outputs = _table(data, "outputs", cfg_path)

    output_format = show.get("format", "tree")
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(
            f"Invalid show.format '{output_format}' in {cfg_path} "
            f"(expected one of: {', '.join(OUTPUT_FORMATS)})"
        )

    max_depth = show.get("max_depth", 0)
    if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 0:
        raise ValueError(f"Invalid show.max_depth in {cfg_path}: expected a non-negative integer")

    run_checks = show.get("run_checks", False)
    if not isinstance(run_checks, bool):
        raise ValueError(f"Invalid show.run_checks in {cfg_path}: expected true or false")

    skip = outputs.get("skip", [])
    if not isinstance(skip, list) or not all(isinstance(name, str) for name in skip):
        raise ValueError(f"Invalid outputs.skip in {cfg_path}: expected a list of output names")

    return LoadedConfig(
        output_format=output_format,
        run_checks=run_checks,
        max_depth=max_depth or None,
        skip_outputs=list(skip),
    )


def _table(data: dict[str, Any], name: str, cfg_path: Path) -> dict[str, Any]:
    table = data.get(name, {})
    if not isinstance(table, dict):
        raise ValueError(f"Invalid [{name}] in {cfg_path}: expected a table")
    return table

"""Application context for CLI commands."""

from dataclasses import dataclass
from pathlib import Path

from flake_schemas.cli.config import LoadedConfig, load_config, load_config_file
from flake_schemas.schemas.registry import SchemaRegistry, default_registry


@dataclass(frozen=True)
class FlakeSchemasContext:
    """Immutable context holding the dependencies of every command.

    Created at CLI entry point and threaded through the commands.
    Tests build their own with a custom registry or config.
    """

    cwd: Path  # Current working directory at CLI invocation
    config: LoadedConfig
    registry: SchemaRegistry


def create_context(*, config_path: Path | None = None) -> FlakeSchemasContext:
    """Create the production context.

    Args:
        config_path: Explicit config file. If None, flake-schemas.toml in the
                     current directory is used when present.

    Returns:
        FlakeSchemasContext with the built-in schema registry

    Example:
        >>> ctx = create_context()
        >>> ctx.registry.names()[:2]
        ['apps', 'schemas']
    """
    cwd = Path.cwd()
    if config_path is not None:
        config = load_config_file(config_path)
    else:
        config = load_config(cwd)
    return FlakeSchemasContext(cwd=cwd, config=config, registry=default_registry())

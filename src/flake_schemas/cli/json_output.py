"""JSON output utilities for CLI commands with machine-parseable output."""

import json
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from flake_schemas.cli.output import machine_output


def _serialize_for_json(obj: Any) -> Any:
    """Recursively serialize special types for JSON.

    Handles Path, dataclass and Pydantic instances that appear in plain
    dict structures.
    """
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    if isinstance(obj, Path):
        return str(obj)
    if is_dataclass(obj) and not isinstance(obj, type):
        return _serialize_for_json(asdict(obj))
    if isinstance(obj, dict):
        return {key: _serialize_for_json(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_serialize_for_json(item) for item in obj]
    return obj


def emit_json(data: dict[str, Any] | BaseModel) -> None:
    """Output JSON data to stdout for machine consumption.

    Args:
        data: Dictionary or Pydantic model to serialize as JSON
    """
    serialized = _serialize_for_json(data)
    machine_output(json.dumps(serialized, indent=2))

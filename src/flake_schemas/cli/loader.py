"""Loading raw output trees from files.

JSON and YAML files are supported. Objects are attribute sets; an object
with `"type": "derivation"` and a `drvPath` is a derivation. Functions cannot
be written in either format.
"""

import json
from pathlib import Path
from typing import Any

import yaml

from flake_schemas.core.errors import RawTreeLoadError

YAML_SUFFIXES = {".yaml", ".yml"}


def load_raw_tree(path: Path) -> Any:
    """Parse a JSON or YAML file into a raw tree.

    Args:
        path: Input file; YAML is chosen by suffix, anything else is read as JSON

    Returns:
        The parsed value

    Raises:
        FileNotFoundError: If path doesn't exist
        RawTreeLoadError: If the file cannot be parsed
    """
    if not path.exists():
        raise FileNotFoundError(f"Input file not found at {path}")

    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise RawTreeLoadError(path, str(e)) from e

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise RawTreeLoadError(path, str(e)) from e

"""Helpers writing raw output trees to disk for CLI tests."""

import json
from pathlib import Path
from typing import Any

import yaml


def write_json(path: Path, data: Any) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def write_yaml(path: Path, data: Any) -> Path:
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path

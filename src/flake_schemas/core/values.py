"""Accessors over raw flake values.

Raw values are plain Python data standing in for evaluated Nix values:
mappings are attribute sets, callables are functions, and any value may be a
Lazy thunk. Field access goes through the explicit accessors here rather than
ad hoc presence tests.
"""

from collections.abc import Mapping
from pathlib import PurePath
from typing import Any

from flake_schemas.core.errors import MissingAttributeError, NotAMappingError
from flake_schemas.core.lazy import force

DERIVATION_TYPE = "derivation"

AttrPath = str | tuple[str, ...]


def _segments(path: AttrPath) -> tuple[str, ...]:
    if isinstance(path, tuple):
        return path
    return tuple(path.split("."))


def attr_or(value: Any, path: AttrPath, default: Any) -> Any:
    """Select an attribute path, falling back to default when it is absent.

    Only absence is defaulted. If evaluating an intermediate value raises,
    the error propagates.

    Args:
        value: Raw value to select from
        path: Dotted attribute path ("meta.description") or tuple of names
        default: Returned when a segment is missing or a value is not a mapping

    Returns:
        The forced value at path, or default
    """
    current = force(value)
    for segment in _segments(path):
        if not isinstance(current, Mapping) or segment not in current:
            return default
        current = force(current[segment])
    return current


def select(value: Any, path: AttrPath) -> Any:
    """Select an attribute path, raising when any segment is missing.

    Raises:
        MissingAttributeError: If a segment is absent or its parent is not a mapping
    """
    segments = _segments(path)
    current = force(value)
    for segment in segments:
        if not isinstance(current, Mapping) or segment not in current:
            raise MissingAttributeError(".".join(segments), segment)
        current = force(current[segment])
    return current


def is_derivation(value: Any) -> bool:
    """Return True if value is a buildable artifact handle.

    A derivation carries `type = "derivation"` and a `drvPath` field.
    """
    value = force(value)
    if not isinstance(value, Mapping):
        return False
    return attr_or(value, "type", None) == DERIVATION_TYPE and "drvPath" in value


def type_of(value: Any) -> str:
    """Return the Nix type name of a raw value (`builtins.typeOf`)."""
    value = force(value)
    if isinstance(value, Mapping):
        return "set"
    if isinstance(value, (list, tuple)):
        return "list"
    if isinstance(value, str):
        return "string"
    # bool is a subclass of int
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    if value is None:
        return "null"
    if isinstance(value, PurePath):
        return "path"
    if callable(value):
        return "lambda"
    return type(value).__name__


def expect_mapping(value: Any, name: str) -> Mapping[str, Any]:
    """Force value and return it as a mapping.

    Raises:
        NotAMappingError: If value is not a mapping
    """
    value = force(value)
    if not isinstance(value, Mapping):
        raise NotAMappingError(name, type_of(value))
    return value

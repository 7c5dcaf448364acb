"""Exceptions raised while building or consuming inventories.

Which failures are contained and which propagate is decided per output kind;
see the policy table in flake_schemas.core.descent.
"""

from pathlib import Path


class FlakeSchemaError(Exception):
    """Base class for all flake-schemas errors."""


class InventoryStructureError(FlakeSchemaError):
    """Raised when a raw output violates a structural invariant of its kind.

    Example: the top-level value of `packages` is itself a derivation instead
    of a mapping from platform to packages.
    """

    def __init__(self, kind: str, message: str):
        self.kind = kind
        super().__init__(f"Invalid `{kind}` output: {message}")


class NotAMappingError(FlakeSchemaError):
    """Raised when descent reaches a value that is neither a derivation nor a mapping."""

    def __init__(self, name: str, type_name: str):
        self.name = name
        self.type_name = type_name
        super().__init__(f"Attribute '{name}' is a {type_name} while a set was expected")


class MissingAttributeError(FlakeSchemaError):
    """Raised when a strict attribute projection hits a missing segment."""

    def __init__(self, path: str, missing: str):
        self.path = path
        self.missing = missing
        super().__init__(f"Attribute '{missing}' missing while selecting '{path}'")


class UnknownOutputKindError(FlakeSchemaError, LookupError):
    """Raised when no schema is registered for an output kind."""

    def __init__(self, kind: str, known: list[str]):
        self.kind = kind
        self.known = known
        super().__init__(f"No schema registered for '{kind}' (known: {', '.join(known)})")


class DuplicateSchemaError(FlakeSchemaError):
    """Raised when registering a schema under a kind that already has one."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"A schema for '{kind}' is already registered")


class RawTreeLoadError(FlakeSchemaError):
    """Raised when an input file cannot be parsed into a raw tree."""

    def __init__(self, path: Path, message: str):
        self.path = path
        super().__init__(f"Cannot load {path}: {message}")

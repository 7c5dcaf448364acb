"""Schema for the `schemas` output, which holds schemas themselves.

Entries may be Schema objects (the registry describing itself) or raw
schema definitions: mappings with `version`, `doc` and an `inventory`
function, as a flake declares them.
"""

from collections.abc import Mapping
from typing import Any

from flake_schemas.core.inventory import InventoryNode, mk_children
from flake_schemas.core.lazy import Lazy, force
from flake_schemas.core.values import attr_or, expect_mapping
from flake_schemas.schemas.base import SCHEMA_VERSION, OutputSchema, Schema


def _schema_field(schema_def: Any, name: str) -> Any:
    schema_def = force(schema_def)
    if isinstance(schema_def, Schema):
        fields = {
            "version": schema_def.version,
            "doc": schema_def.doc,
            "inventory": schema_def.inventory,
            "allowIFD": schema_def.allow_ifd,
        }
        return fields[name]
    return attr_or(schema_def, name, None)


def is_valid_schema(schema_def: Any) -> bool:
    """Return True if schema_def has version 1, a string doc and a callable inventory.

    Any number equal to 1 is accepted as the version, so `1.0` from a JSON or
    YAML file counts. Booleans do not.
    """
    version = _schema_field(schema_def, "version")
    return (
        isinstance(version, (int, float))
        and not isinstance(version, bool)
        and version == SCHEMA_VERSION
        and isinstance(_schema_field(schema_def, "doc"), str)
        and callable(_schema_field(schema_def, "inventory"))
    )


def schema_from_definition(schema_def: Any) -> Schema:
    """Turn a raw schema definition into a Schema.

    Raises:
        ValueError: If the definition is not a valid schema
    """
    schema_def = force(schema_def)
    if isinstance(schema_def, Schema):
        return schema_def
    if not is_valid_schema(schema_def):
        raise ValueError(
            "Schema definition needs version = 1, a string doc and an inventory function"
        )
    allow_ifd = _schema_field(schema_def, "allowIFD")
    return OutputSchema(
        doc=_schema_field(schema_def, "doc"),
        inventory=_schema_field(schema_def, "inventory"),
        allow_ifd=True if allow_ifd is None else bool(allow_ifd),
    )


def _schema_node(schemas: Mapping[str, Any], name: str) -> InventoryNode:
    return InventoryNode(
        short_description=Lazy.of(f"A schema checker for the `{name}` flake output"),
        eval_checks={"isValidSchema": Lazy(lambda: is_valid_schema(schemas[name]))},
        what=Lazy.of("flake schema"),
    )


def schemas_inventory(output: Any) -> InventoryNode:
    schemas = expect_mapping(output, "schemas")
    return mk_children({name: _schema_node(schemas, name) for name in schemas})

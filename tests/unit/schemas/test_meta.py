"""Tests for the schemas meta-schema."""

import pytest

from flake_schemas.core.inventory import InventoryNode
from flake_schemas.schemas.base import OutputSchema
from flake_schemas.schemas.meta import is_valid_schema, schema_from_definition, schemas_inventory


def _classify(output: object) -> InventoryNode:
    return InventoryNode()


VALID_DEFINITION = {"version": 1, "doc": "The `widgets` output.", "inventory": _classify}


def test_valid_definition() -> None:
    assert is_valid_schema(VALID_DEFINITION) is True


@pytest.mark.parametrize(
    "definition",
    [
        {**VALID_DEFINITION, "version": 2},
        {**VALID_DEFINITION, "version": True},
        {**VALID_DEFINITION, "version": "1"},
        {**VALID_DEFINITION, "doc": None},
        {**VALID_DEFINITION, "inventory": "not callable"},
        {"version": 1, "doc": "missing inventory"},
        {"version": 1, "inventory": _classify},
        "not a set",
    ],
)
def test_invalid_definitions(definition: object) -> None:
    assert is_valid_schema(definition) is False


def test_schema_objects_are_valid() -> None:
    schema = OutputSchema(doc="Widgets.\n", inventory=_classify)

    assert is_valid_schema(schema) is True
    assert schema_from_definition(schema) is schema


def test_schema_from_definition() -> None:
    schema = schema_from_definition({**VALID_DEFINITION, "allowIFD": False})

    assert schema.version == 1
    assert schema.doc == "The `widgets` output."
    assert schema.allow_ifd is False
    assert schema.inventory({}).is_container is False


def test_schema_from_definition_defaults_allow_ifd() -> None:
    assert schema_from_definition(VALID_DEFINITION).allow_ifd is True


def test_schema_from_definition_rejects_invalid() -> None:
    with pytest.raises(ValueError, match="version = 1"):
        schema_from_definition({**VALID_DEFINITION, "version": 0})


def test_schemas_inventory_nodes() -> None:
    node = schemas_inventory({"widgets": VALID_DEFINITION, "broken": {"version": 1}})

    widgets = node.child_nodes()["widgets"]
    assert widgets.what is not None
    assert widgets.what.force() == "flake schema"
    assert widgets.short_description.force() == "A schema checker for the `widgets` flake output"
    assert widgets.eval_checks["isValidSchema"].force() is True
    assert node.child_nodes()["broken"].eval_checks["isValidSchema"].force() is False


def test_float_version_equal_to_one_is_valid() -> None:
    assert is_valid_schema({**VALID_DEFINITION, "version": 1.0}) is True
    assert is_valid_schema({**VALID_DEFINITION, "version": 1.5}) is False
    assert schema_from_definition({**VALID_DEFINITION, "version": 1.0}).version == 1

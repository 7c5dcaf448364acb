"""Inventory of a whole flake's outputs."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from flake_schemas.core.inventory import InventoryNode
from flake_schemas.core.lazy import force
from flake_schemas.core.values import expect_mapping
from flake_schemas.schemas.meta import is_valid_schema, schema_from_definition
from flake_schemas.schemas.registry import SchemaRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FlakeInventory:
    """Inventories of the outputs that have a schema.

    Attributes:
        outputs: Output name -> inventory, in the flake's output order
        unknown: Output names without a registered schema
    """

    outputs: dict[str, InventoryNode]
    unknown: list[str]


def with_flake_schemas(registry: SchemaRegistry, outputs: Mapping[str, Any]) -> SchemaRegistry:
    """Extend registry with the valid schemas a flake declares in its `schemas` output.

    Schemas declared by the flake take precedence over registered ones.
    Invalid declarations are skipped; they still show up as failing
    `isValidSchema` checks in the `schemas` inventory.
    """
    if "schemas" not in outputs:
        return registry
    declared = expect_mapping(outputs["schemas"], "schemas")
    for kind in declared:
        schema_def = force(declared[kind])
        if not is_valid_schema(schema_def):
            logger.debug("Ignoring invalid schema declared for '%s'", kind)
            continue
        registry = registry.register(kind, schema_from_definition(schema_def), replace=True)
    return registry


def inventory_outputs(
    outputs: Any,
    registry: SchemaRegistry,
    skip: Iterable[str] = (),
    use_declared_schemas: bool = True,
) -> FlakeInventory:
    """Classify every output of a flake that has a schema.

    Args:
        outputs: Raw mapping of output name to output value
        registry: Schemas to classify with
        skip: Output names to leave out entirely
        use_declared_schemas: Also classify with schemas from the flake's `schemas` output

    Returns:
        FlakeInventory with one inventory per known output
    """
    flake_outputs = expect_mapping(outputs, "outputs")
    if use_declared_schemas:
        registry = with_flake_schemas(registry, flake_outputs)
    skipped = set(skip)
    inventories: dict[str, InventoryNode] = {}
    unknown: list[str] = []
    for name in flake_outputs:
        if name in skipped:
            logger.debug("Skipping output '%s'", name)
            continue
        if name not in registry:
            logger.debug("No schema for output '%s'", name)
            unknown.append(name)
            continue
        inventories[name] = registry.inventory(name, flake_outputs[name])
    return FlakeInventory(outputs=inventories, unknown=unknown)

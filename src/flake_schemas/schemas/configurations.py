"""Schemas for system configurations and importable modules.

Configuration entries point at the derivation that realizes them; module
entries are purely descriptive.
"""

from collections.abc import Mapping
from typing import Any

from flake_schemas.core.inventory import InventoryNode, mk_children
from flake_schemas.core.lazy import Lazy
from flake_schemas.core.values import AttrPath, expect_mapping, select
from flake_schemas.schemas.base import Classifier

SYSTEM_TOPLEVEL = ("config", "system", "build", "toplevel")
HOME_ACTIVATION_PACKAGE = ("activationPackage",)


def configurations_inventory(kind: str, what: str, derivation_path: AttrPath) -> Classifier:
    """Build a classifier for `*Configurations` outputs.

    A missing derivation path is not caught: it raises when a consumer forces
    the node's `derivation`.

    Args:
        kind: Output name
        what: Label given to every configuration
        derivation_path: Attribute path of the realized configuration
    """

    def configuration_node(configurations: Mapping[str, Any], name: str) -> InventoryNode:
        return InventoryNode(
            what=Lazy.of(what),
            derivation=Lazy(lambda: select(configurations[name], derivation_path)),
        )

    def inventory(output: Any) -> InventoryNode:
        configurations = expect_mapping(output, kind)
        return mk_children(
            {name: configuration_node(configurations, name) for name in configurations}
        )

    return inventory


def modules_inventory(kind: str, what: str) -> Classifier:
    """Build a classifier for `*Modules` outputs: one descriptive leaf per module."""

    def inventory(output: Any) -> InventoryNode:
        modules = expect_mapping(output, kind)
        return mk_children({name: InventoryNode(what=Lazy.of(what)) for name in modules})

    return inventory

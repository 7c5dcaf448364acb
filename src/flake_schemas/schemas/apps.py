"""Schema for the `apps` output: platform -> app name -> app descriptor."""

from collections.abc import Mapping
from typing import Any

from flake_schemas.core.inventory import InventoryNode, mk_children
from flake_schemas.core.lazy import Lazy
from flake_schemas.core.values import attr_or, expect_mapping

APP_TYPE = "app"


def is_valid_app(app: Any) -> bool:
    """Return True if app has `type = "app"` and a string `program`."""
    return attr_or(app, "type", None) == APP_TYPE and isinstance(
        attr_or(app, "program", None), str
    )


def _app_node(apps: Mapping[str, Any], name: str, for_systems: Lazy[list[str]]) -> InventoryNode:
    return InventoryNode(
        for_systems=for_systems,
        eval_checks={"isValidApp": Lazy(lambda: is_valid_app(apps[name]))},
        what=Lazy.of("app"),
    )


def apps_inventory(output: Any) -> InventoryNode:
    platforms = expect_mapping(output, "apps")

    def apps_for_system(system: str, for_systems: Lazy[list[str]]) -> dict[str, InventoryNode]:
        apps = expect_mapping(platforms[system], f"apps.{system}")
        return {name: _app_node(apps, name, for_systems) for name in apps}

    def platform_node(system: str) -> InventoryNode:
        for_systems = Lazy.of([system])
        return InventoryNode(
            for_systems=for_systems,
            children=Lazy(lambda: apps_for_system(system, for_systems)),
        )

    return mk_children({system: platform_node(system) for system in platforms})

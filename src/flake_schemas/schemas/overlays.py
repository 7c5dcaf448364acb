"""Schema for the `overlays` output."""

from collections.abc import Mapping
from typing import Any

from flake_schemas.core.inventory import InventoryNode, mk_children
from flake_schemas.core.lazy import Lazy, force
from flake_schemas.core.values import expect_mapping


def is_overlay(overlay: Any) -> bool:
    """Best-effort overlay check: `overlay {} {}` must return an attribute set.

    This only shows the value is a two-argument function producing a set. It
    does not apply the overlay to a real package set.
    """
    return isinstance(force(force(overlay)({}, {})), Mapping)


def _overlay_node(overlays: Mapping[str, Any], name: str) -> InventoryNode:
    return InventoryNode(
        what=Lazy.of("Nixpkgs overlay"),
        eval_checks={"isOverlay": Lazy(lambda: is_overlay(overlays[name]))},
    )


def overlays_inventory(output: Any) -> InventoryNode:
    overlays = expect_mapping(output, "overlays")
    return mk_children({name: _overlay_node(overlays, name) for name in overlays})

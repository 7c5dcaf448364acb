"""Inventory node model shared by every schema."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from flake_schemas.core.lazy import Lazy


def _empty_description() -> Lazy[str]:
    return Lazy.of("")


def _not_a_flake_check() -> Lazy[bool]:
    return Lazy.of(False)


@dataclass(frozen=True)
class InventoryNode:
    """One node of an inventory tree.

    A node is either a container (`children` set, no `derivation`) or a
    description leaf. Some schemas produce containers that also carry a
    description. Every field is its own Lazy, so forcing one never forces or
    depends on a sibling.

    Fields that are None are absent: a consumer can tell a container from a
    leaf, or find which checks exist, without evaluating anything.
    """

    children: Lazy[Mapping[str, "InventoryNode"]] | None = None
    short_description: Lazy[str] = field(default_factory=_empty_description)
    for_systems: Lazy[list[str]] | None = None
    eval_checks: Mapping[str, Lazy[bool]] = field(default_factory=dict)
    what: Lazy[str] | None = None
    derivation: Lazy[Any] | None = None
    is_flake_check: Lazy[bool] = field(default_factory=_not_a_flake_check)

    @property
    def is_container(self) -> bool:
        return self.children is not None

    @property
    def has_derivation(self) -> bool:
        return self.derivation is not None

    def child_nodes(self) -> Mapping[str, "InventoryNode"]:
        """Force and return children; empty for leaves."""
        if self.children is None:
            return {}
        return self.children.force()


def mk_children(
    children: Mapping[str, InventoryNode] | Callable[[], Mapping[str, InventoryNode]],
) -> InventoryNode:
    """Build a container node.

    Args:
        children: Child mapping, or a thunk producing it on first use
    """
    if callable(children):
        return InventoryNode(children=Lazy(children))
    return InventoryNode(children=Lazy.of(children))

"""Schema for the `lib` output, which may hold arbitrary values."""

from collections.abc import Mapping
from typing import Any

from flake_schemas.core.inventory import InventoryNode, mk_children
from flake_schemas.core.lazy import Lazy, force
from flake_schemas.core.values import type_of


def lib_inventory(value: Any) -> InventoryNode:
    """Describe a value by its type, recursing into attribute sets.

    Containers keep exactly the keys of the mapping they describe; every
    other value becomes a leaf whose `what` is its type name. Nested values
    are only evaluated when their parent's children are forced.

    Forcing a container's children evaluates every entry of the mapping, since
    each child must be known to be a container or a leaf. An entry that fails
    to evaluate therefore fails the whole `children` field of its parent.
    """
    value = force(value)
    if isinstance(value, Mapping):
        return mk_children(lambda: {name: lib_inventory(value[name]) for name in value})
    return InventoryNode(what=Lazy.of(type_of(value)))

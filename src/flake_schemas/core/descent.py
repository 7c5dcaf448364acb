"""Shared recursive descent over nested derivation trees.

Output kinds that nest derivations at varying depths describe their
recursion with a RecursionPolicy instead of their own descent code:

    kind            unconditional depth   opt-in marker           contain failures
    legacyPackages  2                     recurseForDerivations   yes
    hydraJobs       unbounded             -                       no

Depth 1 is the platform level. Entries at a depth within the unconditional
depth are always listed; entries deeper than that are listed only when their
parent container sets the opt-in marker to true, otherwise the parent
contributes nothing.

With contain_failures, a child whose evaluation raises is dropped from its
parent's children. Without it, the error reaches whoever forced the parent's
children.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from flake_schemas.core.errors import NotAMappingError
from flake_schemas.core.inventory import InventoryNode
from flake_schemas.core.lazy import Lazy, force, guarded_eval
from flake_schemas.core.values import attr_or, expect_mapping, is_derivation, type_of

logger = logging.getLogger(__name__)

LeafFactory = Callable[[Any], InventoryNode]


@dataclass(frozen=True)
class RecursionPolicy:
    """How deep descent goes and whether it tolerates failing children.

    Attributes:
        unconditional_depth: Deepest level listed without opt-in; None for unbounded
        opt_in_marker: Attribute that opts a container into deeper listing
        contain_failures: Drop children whose evaluation raises
    """

    unconditional_depth: int | None
    opt_in_marker: str | None = None
    contain_failures: bool = False

    def lists_entries_at(self, depth: int, container: Mapping[str, Any]) -> bool:
        """Return True if the entries of container, sitting at depth, are listed."""
        if self.unconditional_depth is None or depth <= self.unconditional_depth:
            return True
        if self.opt_in_marker is None:
            return False
        return attr_or(container, self.opt_in_marker, False) is True


LEGACY_PACKAGES_POLICY = RecursionPolicy(
    unconditional_depth=2,
    opt_in_marker="recurseForDerivations",
    contain_failures=True,
)

HYDRA_JOBS_POLICY = RecursionPolicy(unconditional_depth=None)


def descend(
    raw: Any,
    policy: RecursionPolicy,
    leaf: LeafFactory,
    depth: int = 1,
    prefix: str = "",
) -> dict[str, InventoryNode]:
    """Classify the entries of raw, which sit at the given depth.

    Derivations become leaves built by `leaf`. Mappings become containers
    whose children are descended lazily at depth + 1, subject to the policy.

    Args:
        raw: Mapping whose entries are classified
        policy: Recursion and failure-containment policy
        leaf: Builds the leaf node for a derivation
        depth: Depth of raw's entries (1 = platform level)
        prefix: Dotted path of raw, used in errors and log messages

    Returns:
        Ordered mapping of entry name to node, omitting entries that contribute nothing

    Raises:
        NotAMappingError: If raw is not a mapping
    """
    container = expect_mapping(raw, prefix.rstrip(".") or "<root>")

    children: dict[str, InventoryNode] = {}
    for name in container:
        path = prefix + name

        def classify(name: str = name, path: str = path) -> InventoryNode | None:
            return _classify_entry(container, name, path, policy, leaf, depth)

        if policy.contain_failures:
            node = guarded_eval(classify, None)
        else:
            node = classify()
        if node is not None:
            children[name] = node
    return children


def _classify_entry(
    container: Mapping[str, Any],
    name: str,
    path: str,
    policy: RecursionPolicy,
    leaf: LeafFactory,
    depth: int,
) -> InventoryNode | None:
    value = force(container[name])
    if is_derivation(value):
        return leaf(value)
    if not isinstance(value, Mapping):
        raise NotAMappingError(path, type_of(value))
    if not policy.lists_entries_at(depth + 1, value):
        logger.debug("Not recursing into '%s' (no %s)", path, policy.opt_in_marker)
        return None
    return InventoryNode(
        children=Lazy(lambda: descend(value, policy, leaf, depth + 1, path + ".")),
    )

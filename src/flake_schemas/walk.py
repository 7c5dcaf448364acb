"""Consumers that walk an inventory tree.

Walking forces only `children`. Running checks forces each eval check on its
own; a check that raises is recorded as an error for that check rather than
stopping the walk, since the walker is the consumer that forced it.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from flake_schemas.core.inventory import InventoryNode

logger = logging.getLogger(__name__)

NodePath = tuple[str, ...]


@dataclass(frozen=True)
class CheckResult:
    """Outcome of forcing one eval check."""

    path: NodePath
    name: str
    passed: bool
    error: str | None = None

    @property
    def label(self) -> str:
        return ".".join(self.path) + ":" + self.name


def iter_nodes(
    node: InventoryNode,
    max_depth: int | None = None,
    path: NodePath = (),
    depth: int = 0,
) -> Iterator[tuple[NodePath, InventoryNode]]:
    """Yield (path, node) pairs depth-first, parents before children.

    Args:
        node: Root of the walk
        max_depth: Levels below the root to visit; None for no limit
        path: Path of node, prepended to every yielded path
        depth: Level of node below the root of the walk
    """
    yield path, node
    if node.children is None:
        return
    if max_depth is not None and depth >= max_depth:
        return
    for name, child in node.child_nodes().items():
        yield from iter_nodes(child, max_depth, path + (name,), depth + 1)


def force_check(path: NodePath, name: str, node: InventoryNode) -> CheckResult:
    """Force a single eval check of node."""
    try:
        outcome = node.eval_checks[name].force()
    except Exception as e:
        logger.debug("Check %s of %s raised: %s", name, ".".join(path), e)
        return CheckResult(path=path, name=name, passed=False, error=f"{type(e).__name__}: {e}")
    if not isinstance(outcome, bool):
        return CheckResult(
            path=path,
            name=name,
            passed=False,
            error=f"check returned {type(outcome).__name__} instead of a boolean",
        )
    return CheckResult(path=path, name=name, passed=outcome)


def run_checks(
    node: InventoryNode,
    max_depth: int | None = None,
    path: NodePath = (),
) -> list[CheckResult]:
    """Force every eval check in the tree below node."""
    results: list[CheckResult] = []
    for node_path, current in iter_nodes(node, max_depth, path):
        for name in current.eval_checks:
            results.append(force_check(node_path, name, current))
    return results

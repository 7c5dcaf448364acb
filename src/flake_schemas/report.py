"""Serializable reports of inventory trees.

Building a report forces the descriptive fields of every node it covers.
Eval checks and derivations are only forced when asked for.
"""

from pydantic import BaseModel, ConfigDict, Field

from flake_schemas.core.inventory import InventoryNode
from flake_schemas.core.values import attr_or
from flake_schemas.outputs import FlakeInventory
from flake_schemas.walk import NodePath, force_check


class CheckReport(BaseModel):
    """Pydantic model for one forced eval check."""

    model_config = ConfigDict(strict=True)

    name: str
    passed: bool
    error: str | None = None


class NodeReport(BaseModel):
    """Pydantic model for one inventory node and its reported descendants.

    Attributes:
        what: Classification label, None for plain containers
        short_description: One-line description
        for_systems: Platforms the node applies to, None when unrestricted
        derivation: Store derivation path, when derivations were requested
        is_flake_check: Whether `nix flake check` builds the derivation
        checks: Forced eval checks, when checks were requested
        children: Child reports; None for leaves and for containers below max depth
    """

    model_config = ConfigDict(strict=True)

    what: str | None = None
    short_description: str = ""
    for_systems: list[str] | None = None
    derivation: str | None = None
    is_flake_check: bool = False
    checks: list[CheckReport] = Field(default_factory=list)
    children: dict[str, "NodeReport"] | None = None


class FlakeReport(BaseModel):
    """Pydantic model for the report of a whole flake."""

    model_config = ConfigDict(strict=True)

    outputs: dict[str, NodeReport]
    unknown: list[str] = Field(default_factory=list)


def build_report(
    node: InventoryNode,
    *,
    with_checks: bool = False,
    with_derivations: bool = False,
    max_depth: int | None = None,
    path: NodePath = (),
    depth: int = 0,
) -> NodeReport:
    """Turn an inventory node into a NodeReport.

    Args:
        node: Node to report
        with_checks: Force and include eval checks
        with_derivations: Force derivations and include their drvPath
        max_depth: Levels of children to include below node; None for all
        path: Path of node, used in check results
        depth: Level of node below the root of the report

    Returns:
        NodeReport for node
    """
    checks: list[CheckReport] = []
    if with_checks:
        for name in node.eval_checks:
            result = force_check(path, name, node)
            checks.append(CheckReport(name=result.name, passed=result.passed, error=result.error))

    derivation: str | None = None
    if with_derivations and node.derivation is not None:
        drv_path = attr_or(node.derivation.force(), "drvPath", None)
        derivation = None if drv_path is None else str(drv_path)

    children: dict[str, NodeReport] | None = None
    if node.children is not None and (max_depth is None or depth < max_depth):
        children = {
            name: build_report(
                child,
                with_checks=with_checks,
                with_derivations=with_derivations,
                max_depth=max_depth,
                path=path + (name,),
                depth=depth + 1,
            )
            for name, child in node.child_nodes().items()
        }

    for_systems: list[str] | None = None
    if node.for_systems is not None:
        for_systems = [str(system) for system in node.for_systems.force()]

    return NodeReport(
        what=None if node.what is None else str(node.what.force()),
        short_description=str(node.short_description.force()),
        for_systems=for_systems,
        derivation=derivation,
        is_flake_check=bool(node.is_flake_check.force()),
        checks=checks,
        children=children,
    )


def build_flake_report(
    inventory: FlakeInventory,
    *,
    with_checks: bool = False,
    with_derivations: bool = False,
    max_depth: int | None = None,
) -> FlakeReport:
    """Report every output of a flake inventory."""
    return FlakeReport(
        outputs={
            name: build_report(
                node,
                with_checks=with_checks,
                with_derivations=with_derivations,
                max_depth=max_depth,
                path=(name,),
            )
            for name, node in inventory.outputs.items()
        },
        unknown=list(inventory.unknown),
    )

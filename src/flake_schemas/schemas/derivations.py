"""Schemas for outputs that hold derivations.

- packages, checks, devShells: exactly two levels, platform -> name -> derivation
- legacyPackages: platform containers, then depth-limited opt-in descent with
  failing attributes dropped
- hydraJobs: unbounded descent, failures propagate
"""

from collections.abc import Mapping
from typing import Any

from flake_schemas.core.descent import HYDRA_JOBS_POLICY, LEGACY_PACKAGES_POLICY, descend
from flake_schemas.core.errors import InventoryStructureError
from flake_schemas.core.inventory import InventoryNode, mk_children
from flake_schemas.core.lazy import Lazy, force, guarded_eval
from flake_schemas.core.values import attr_or, expect_mapping, is_derivation, select
from flake_schemas.schemas.base import Classifier


def derivation_leaf(
    package: Any,
    *,
    what: str,
    is_flake_check: bool = False,
    for_systems: Lazy[list[str]] | None = None,
) -> InventoryNode:
    """Build the leaf node describing one derivation.

    Args:
        package: Raw derivation value, possibly still a Lazy
        what: Classification label ("package", "CI test", ...)
        is_flake_check: Whether `nix flake check` builds this derivation
        for_systems: Platforms the derivation applies to
    """
    return InventoryNode(
        for_systems=for_systems,
        short_description=Lazy(lambda: attr_or(package, "meta.description", "")),
        derivation=Lazy(lambda: force(package)),
        eval_checks={"isDerivation": Lazy(lambda: is_derivation(package))},
        what=Lazy.of(what),
        is_flake_check=Lazy.of(is_flake_check),
    )


def ensure_not_derivation(kind: str, value: Any, where: str) -> None:
    """Raise if value is a derivation where a set of them is expected.

    Raises:
        InventoryStructureError: If value is a derivation
    """
    if is_derivation(value):
        raise InventoryStructureError(kind, f"{where} is a derivation, expected an attribute set")


def _entry(container: Mapping[str, Any], name: str) -> Lazy[Any]:
    return Lazy(lambda: force(container[name]))


def derivations_inventory(kind: str, what: str, is_flake_check: bool) -> Classifier:
    """Build the classifier shared by packages, checks and devShells.

    Args:
        kind: Output name, used in structural errors
        what: Label given to every leaf
        is_flake_check: Flag given to every leaf
    """

    def packages_for_system(platforms: Mapping[str, Any], system: str) -> dict[str, InventoryNode]:
        packages = force(platforms[system])
        ensure_not_derivation(kind, packages, f"'{kind}.{system}'")
        packages = expect_mapping(packages, f"{kind}.{system}")
        return {
            name: derivation_leaf(
                _entry(packages, name),
                what=what,
                is_flake_check=is_flake_check,
                for_systems=Lazy.of([system]),
            )
            for name in packages
        }

    def platform_node(platforms: Mapping[str, Any], system: str) -> InventoryNode:
        return InventoryNode(
            for_systems=Lazy.of([system]),
            children=Lazy(lambda: packages_for_system(platforms, system)),
        )

    def inventory(output: Any) -> InventoryNode:
        ensure_not_derivation(kind, output, "the top-level value")
        platforms = expect_mapping(output, kind)
        return mk_children({system: platform_node(platforms, system) for system in platforms})

    return inventory


def legacy_packages_inventory(output: Any) -> InventoryNode:
    """Classify `legacyPackages`.

    Nixpkgs-style package sets contain attributes that fail to evaluate on
    some platforms; those are dropped instead of failing the inventory.
    """
    ensure_not_derivation("legacyPackages", output, "the top-level value")
    platforms = expect_mapping(output, "legacyPackages")

    def packages_for_system(system: str) -> dict[str, InventoryNode]:
        packages = guarded_eval(lambda: force(platforms[system]), {})
        ensure_not_derivation("legacyPackages", packages, f"'legacyPackages.{system}'")

        def leaf(package: Any) -> InventoryNode:
            return derivation_leaf(
                package,
                what="package",
                for_systems=Lazy(lambda: [attr_or(package, "system", system)]),
            )

        return guarded_eval(
            lambda: descend(packages, LEGACY_PACKAGES_POLICY, leaf, depth=2, prefix=system + "."),
            {},
        )

    def platform_node(system: str) -> InventoryNode:
        return InventoryNode(
            for_systems=Lazy.of([system]),
            children=Lazy(lambda: packages_for_system(system)),
        )

    return mk_children({system: platform_node(system) for system in platforms})


def _hydra_leaf(job: Any) -> InventoryNode:
    return derivation_leaf(
        job,
        what="Hydra CI test",
        for_systems=Lazy(lambda: [select(job, "system")]),
    )


def hydra_jobs_inventory(output: Any) -> InventoryNode:
    """Classify `hydraJobs`: recurse through every non-derivation mapping."""
    ensure_not_derivation("hydraJobs", output, "the top-level value")
    return mk_children(lambda: descend(output, HYDRA_JOBS_POLICY, _hydra_leaf))

"""Tests for the shared recursive descent and its policies."""

from typing import Any

import pytest

from flake_schemas.core.descent import (
    HYDRA_JOBS_POLICY,
    LEGACY_PACKAGES_POLICY,
    RecursionPolicy,
    descend,
)
from flake_schemas.core.errors import NotAMappingError
from flake_schemas.core.inventory import InventoryNode
from flake_schemas.core.lazy import Lazy
from tests.fakes.raw import EvaluationFailure, FailingMapping, failing, fake_derivation


def _leaf(value: Any) -> InventoryNode:
    return InventoryNode(what=Lazy.of("leaf"), derivation=Lazy.of(value))


def _shape(children: dict[str, InventoryNode]) -> dict[str, Any]:
    """Reduce a descent result to nested dicts, with "leaf" at derivations."""
    return {
        name: _shape(dict(node.child_nodes())) if node.is_container else "leaf"
        for name, node in children.items()
    }


def test_policy_unbounded_lists_every_depth() -> None:
    assert HYDRA_JOBS_POLICY.lists_entries_at(1, {}) is True
    assert HYDRA_JOBS_POLICY.lists_entries_at(50, {}) is True


def test_policy_requires_marker_beyond_unconditional_depth() -> None:
    policy = RecursionPolicy(unconditional_depth=2, opt_in_marker="recurseForDerivations")

    assert policy.lists_entries_at(2, {}) is True
    assert policy.lists_entries_at(3, {}) is False
    assert policy.lists_entries_at(3, {"recurseForDerivations": True}) is True
    assert policy.lists_entries_at(3, {"recurseForDerivations": False}) is False


def test_policy_without_marker_never_opts_in() -> None:
    policy = RecursionPolicy(unconditional_depth=1)

    assert policy.lists_entries_at(2, {"recurseForDerivations": True}) is False


def test_unbounded_descent_follows_raw_structure() -> None:
    raw = {
        "tests": {"x86_64-linux": fake_derivation("tests")},
        "release": {"a": {"b": {"c": fake_derivation("deep")}}},
    }

    children = descend(raw, HYDRA_JOBS_POLICY, _leaf)

    assert _shape(children) == {
        "tests": {"x86_64-linux": "leaf"},
        "release": {"a": {"b": {"c": "leaf"}}},
    }


def test_descent_preserves_key_order() -> None:
    raw = {"zeta": fake_derivation("z"), "alpha": fake_derivation("a"), "mid": fake_derivation("m")}

    assert list(descend(raw, HYDRA_JOBS_POLICY, _leaf)) == ["zeta", "alpha", "mid"]


def test_nested_children_are_deferred() -> None:
    """Test that descent into a container waits until its children are forced."""
    raw = {"group": {"broken": failing()}}

    children = descend(raw, HYDRA_JOBS_POLICY, _leaf)

    assert children["group"].is_container
    with pytest.raises(EvaluationFailure):
        children["group"].child_nodes()


def test_uncontained_failure_propagates() -> None:
    with pytest.raises(EvaluationFailure):
        descend({"ok": fake_derivation("ok"), "broken": failing()}, HYDRA_JOBS_POLICY, _leaf)


def test_non_mapping_value_raises_without_containment() -> None:
    with pytest.raises(NotAMappingError) as exc_info:
        descend({"release": {"version": "1.0"}}, HYDRA_JOBS_POLICY, _leaf)["release"].child_nodes()

    assert exc_info.value.name == "release.version"
    assert exc_info.value.type_name == "string"


def test_contained_failure_drops_only_that_entry() -> None:
    raw = FailingMapping(
        {"hello": fake_derivation("hello"), "broken": None, "cowsay": fake_derivation("cowsay")},
        failing_names={"broken"},
    )

    children = descend(raw, LEGACY_PACKAGES_POLICY, _leaf, depth=2)

    assert list(children) == ["hello", "cowsay"]


def test_opt_in_marker_controls_deeper_listing() -> None:
    unmarked = {"pythonPackages": {"requests": fake_derivation("requests")}}
    marked = {
        "pythonPackages": {"recurseForDerivations": True, "requests": fake_derivation("requests")}
    }

    assert _shape(descend(unmarked, LEGACY_PACKAGES_POLICY, _leaf, depth=2)) == {}
    assert _shape(descend(marked, LEGACY_PACKAGES_POLICY, _leaf, depth=2)) == {
        "pythonPackages": {"requests": "leaf"}
    }


def test_descend_rejects_non_mapping_root() -> None:
    with pytest.raises(NotAMappingError):
        descend([fake_derivation("x")], HYDRA_JOBS_POLICY, _leaf)

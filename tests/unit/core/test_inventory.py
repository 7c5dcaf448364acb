"""Tests for the inventory node model."""

import pytest

from flake_schemas.core.inventory import InventoryNode, mk_children
from flake_schemas.core.lazy import Lazy
from tests.fakes.raw import EvaluationFailure, failing


def test_default_node_is_a_plain_leaf() -> None:
    node = InventoryNode()

    assert node.is_container is False
    assert node.has_derivation is False
    assert node.short_description.force() == ""
    assert node.is_flake_check.force() is False
    assert node.for_systems is None
    assert node.what is None
    assert dict(node.eval_checks) == {}
    assert node.child_nodes() == {}


def test_mk_children_with_mapping() -> None:
    leaf = InventoryNode(what=Lazy.of("thing"))
    node = mk_children({"a": leaf})

    assert node.is_container is True
    assert node.child_nodes() == {"a": leaf}


def test_mk_children_with_thunk_is_deferred() -> None:
    calls: list[int] = []

    def build() -> dict[str, InventoryNode]:
        calls.append(1)
        return {}

    node = mk_children(build)

    assert node.is_container is True
    assert calls == []
    node.child_nodes()
    assert calls == [1]


def test_fields_fail_independently() -> None:
    """Test that a failing field does not affect its siblings."""
    node = InventoryNode(
        short_description=failing("no description"),
        what=Lazy.of("package"),
        eval_checks={"broken": failing("check failed"), "ok": Lazy.of(True)},
        derivation=Lazy.of({"type": "derivation"}),
    )

    assert node.what is not None
    assert node.what.force() == "package"
    assert node.eval_checks["ok"].force() is True
    assert node.derivation is not None
    assert node.derivation.force() == {"type": "derivation"}
    with pytest.raises(EvaluationFailure, match="no description"):
        node.short_description.force()
    with pytest.raises(EvaluationFailure, match="check failed"):
        node.eval_checks["broken"].force()

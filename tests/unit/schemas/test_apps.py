"""Tests for the apps schema."""

import pytest

from flake_schemas.core.errors import NotAMappingError
from flake_schemas.schemas.apps import apps_inventory, is_valid_app
from tests.fakes.raw import EvaluationFailure, failing


def test_is_valid_app() -> None:
    assert is_valid_app({"type": "app", "program": "/nix/store/abc-hello/bin/hello"}) is True
    assert is_valid_app({"type": "app"}) is False
    assert is_valid_app({"type": "app", "program": 42}) is False
    assert is_valid_app({"type": "derivation", "program": "/bin/sh"}) is False
    assert is_valid_app("not an app") is False


def test_apps_inventory_shape() -> None:
    output = {
        "x86_64-linux": {
            "default": {"type": "app", "program": "/bin/hello"},
            "broken": {"type": "app"},
        },
        "aarch64-darwin": {},
    }

    node = apps_inventory(output)

    assert list(node.child_nodes()) == ["x86_64-linux", "aarch64-darwin"]
    linux = node.child_nodes()["x86_64-linux"]
    assert linux.for_systems is not None
    assert linux.for_systems.force() == ["x86_64-linux"]
    default = linux.child_nodes()["default"]
    assert default.what is not None
    assert default.what.force() == "app"
    assert default.for_systems is not None
    assert default.for_systems.force() == ["x86_64-linux"]
    assert default.eval_checks["isValidApp"].force() is True
    assert linux.child_nodes()["broken"].eval_checks["isValidApp"].force() is False
    assert node.child_nodes()["aarch64-darwin"].child_nodes() == {}


def test_app_check_is_deferred() -> None:
    node = apps_inventory({"x86_64-linux": {"default": failing("no program")}})

    leaf = node.child_nodes()["x86_64-linux"].child_nodes()["default"]

    assert leaf.what is not None
    assert leaf.what.force() == "app"
    with pytest.raises(EvaluationFailure, match="no program"):
        leaf.eval_checks["isValidApp"].force()


def test_apps_rejects_non_mapping_platform() -> None:
    node = apps_inventory({"x86_64-linux": "hello"})

    with pytest.raises(NotAMappingError) as exc_info:
        node.child_nodes()["x86_64-linux"].child_nodes()

    assert exc_info.value.name == "apps.x86_64-linux"

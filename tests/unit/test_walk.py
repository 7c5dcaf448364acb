"""Tests for walking inventories and running checks."""

from flake_schemas.core.inventory import InventoryNode, mk_children
from flake_schemas.core.lazy import Lazy
from flake_schemas.schemas.registry import default_registry
from flake_schemas.walk import CheckResult, force_check, iter_nodes, run_checks
from tests.fakes.raw import failing, fake_derivation


def _packages() -> InventoryNode:
    return default_registry().inventory(
        "packages",
        {
            "x86_64-linux": {"hello": fake_derivation("hello"), "bogus": "nope"},
            "aarch64-linux": {"hello": fake_derivation("hello", system="aarch64-linux")},
        },
    )


def test_iter_nodes_parents_first() -> None:
    paths = [path for path, _ in iter_nodes(_packages())]

    assert paths == [
        (),
        ("x86_64-linux",),
        ("x86_64-linux", "hello"),
        ("x86_64-linux", "bogus"),
        ("aarch64-linux",),
        ("aarch64-linux", "hello"),
    ]


def test_iter_nodes_max_depth() -> None:
    paths = [path for path, _ in iter_nodes(_packages(), max_depth=1)]

    assert paths == [(), ("x86_64-linux",), ("aarch64-linux",)]


def test_iter_nodes_max_depth_does_not_force_deeper_children() -> None:
    node = mk_children({"group": InventoryNode(children=failing())})

    paths = [path for path, _ in iter_nodes(node, max_depth=1)]

    assert paths == [(), ("group",)]


def test_run_checks_collects_results() -> None:
    results = run_checks(_packages(), path=("packages",))

    assert [(result.label, result.passed) for result in results] == [
        ("packages.x86_64-linux.hello:isDerivation", True),
        ("packages.x86_64-linux.bogus:isDerivation", False),
        ("packages.aarch64-linux.hello:isDerivation", True),
    ]


def test_failing_check_is_recorded_as_error() -> None:
    node = InventoryNode(eval_checks={"broken": failing("boom"), "ok": Lazy.of(True)})

    results = run_checks(node, path=("thing",))

    assert results == [
        CheckResult(
            path=("thing",), name="broken", passed=False, error="EvaluationFailure: boom"
        ),
        CheckResult(path=("thing",), name="ok", passed=True),
    ]


def test_non_boolean_check_is_an_error() -> None:
    node = InventoryNode(eval_checks={"weird": Lazy.of("yes")})

    result = force_check(("thing",), "weird", node)

    assert result.passed is False
    assert result.error == "check returned str instead of a boolean"


def test_max_depth_counts_from_the_starting_node() -> None:
    node = _packages()

    unprefixed = run_checks(node, max_depth=2)
    prefixed = run_checks(node, max_depth=2, path=("packages",))

    assert len(prefixed) == len(unprefixed) == 3
    assert [result.path for result in prefixed] == [
        ("packages", "x86_64-linux", "hello"),
        ("packages", "x86_64-linux", "bogus"),
        ("packages", "aarch64-linux", "hello"),
    ]


def test_iter_nodes_with_prefix_and_depth_limit() -> None:
    paths = [path for path, _ in iter_nodes(_packages(), max_depth=1, path=("packages",))]

    assert paths == [("packages",), ("packages", "x86_64-linux"), ("packages", "aarch64-linux")]

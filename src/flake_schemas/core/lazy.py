"""Deferred values.

Every inventory field and every raw-tree entry may be a Lazy: a thunk that is
evaluated on first use. Nothing here runs work eagerly, so a consumer that
never reads a field never pays for it (and never sees it fail).
"""

import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
D = TypeVar("D")


class Lazy(Generic[T]):
    """A memoizing thunk.

    A successful result is cached. A thunk that raises is not cached and
    raises again on the next force, like re-evaluating a failing Nix value.
    """

    __slots__ = ("_thunk", "_value", "_forced")

    def __init__(self, thunk: Callable[[], T]) -> None:
        self._thunk = thunk
        self._value: T | None = None
        self._forced = False

    @classmethod
    def of(cls, value: T) -> "Lazy[T]":
        """Wrap an already-evaluated value."""
        lazy = cls(lambda: value)
        lazy._value = value
        lazy._forced = True
        return lazy

    @property
    def is_forced(self) -> bool:
        return self._forced

    def force(self) -> T:
        if not self._forced:
            self._value = self._thunk()
            self._forced = True
        return self._value  # type: ignore[return-value]

    def __repr__(self) -> str:
        if self._forced:
            return f"Lazy({self._value!r})"
        return "Lazy(<unevaluated>)"


def force(value: Any) -> Any:
    """Return the evaluated form of a raw value.

    Unwraps nested Lazy values; anything else is returned unchanged.
    """
    while isinstance(value, Lazy):
        value = value.force()
    return value


def guarded_eval(thunk: Callable[[], T] | Lazy[T], default: D) -> T | D:
    """Force thunk, returning default if forcing raises.

    Only the immediate forcing is guarded. Lazy values nested inside a
    successful result are returned unevaluated and keep their own failures.

    Args:
        thunk: Zero-argument callable or Lazy to force
        default: Value returned when forcing raises

    Returns:
        The forced value, or default on failure
    """
    try:
        if isinstance(thunk, Lazy):
            return thunk.force()
        return thunk()
    except Exception as e:
        logger.debug("Contained evaluation failure (%s): %s", type(e).__name__, e)
        return default

"""Schema abstraction.

Architecture:
- Schema: Abstract base class, the capability set of an output kind
  (version, documentation, IFD policy, inventory builder)
- OutputSchema: Implementation wrapping a classifier function
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from flake_schemas.core.inventory import InventoryNode

SCHEMA_VERSION = 1

Classifier = Callable[[Any], InventoryNode]


class Schema(ABC):
    """Describes and classifies one flake output kind."""

    @property
    @abstractmethod
    def version(self) -> int:
        """Schema format version. Only version 1 is valid."""

    @property
    @abstractmethod
    def doc(self) -> str:
        """Markdown documentation for the output kind."""

    @property
    def allow_ifd(self) -> bool:
        """Whether building the inventory may import from derivations."""
        return True

    @abstractmethod
    def inventory(self, output: Any) -> InventoryNode:
        """Build the inventory of a raw output value."""

    @property
    def summary(self) -> str:
        """First non-empty line of the documentation."""
        for line in self.doc.splitlines():
            if line.strip():
                return line.strip()
        return ""


class OutputSchema(Schema):
    """Schema backed by a plain classifier function."""

    def __init__(
        self,
        *,
        doc: str,
        inventory: Classifier,
        version: int = SCHEMA_VERSION,
        allow_ifd: bool = True,
    ) -> None:
        self._doc = doc
        self._inventory = inventory
        self._version = version
        self._allow_ifd = allow_ifd

    @property
    def version(self) -> int:
        return self._version

    @property
    def doc(self) -> str:
        return self._doc

    @property
    def allow_ifd(self) -> bool:
        return self._allow_ifd

    def inventory(self, output: Any) -> InventoryNode:
        return self._inventory(output)

    def __repr__(self) -> str:
        return f"OutputSchema(version={self._version}, summary={self.summary!r})"

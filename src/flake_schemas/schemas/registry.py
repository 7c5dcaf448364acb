"""Registry of output kinds and the schemas that describe them.

The registry is immutable: registering a schema returns a new registry, so
the process-wide default can be shared freely.
"""

import functools
import logging
from collections.abc import Iterator, Mapping
from typing import Any

from flake_schemas.core.errors import DuplicateSchemaError, UnknownOutputKindError
from flake_schemas.core.inventory import InventoryNode
from flake_schemas.schemas.apps import apps_inventory
from flake_schemas.schemas.base import OutputSchema, Schema
from flake_schemas.schemas.configurations import (
    HOME_ACTIVATION_PACKAGE,
    SYSTEM_TOPLEVEL,
    configurations_inventory,
    modules_inventory,
)
from flake_schemas.schemas.derivations import (
    derivations_inventory,
    hydra_jobs_inventory,
    legacy_packages_inventory,
)
from flake_schemas.schemas.lib import lib_inventory
from flake_schemas.schemas.meta import schemas_inventory
from flake_schemas.schemas.overlays import overlays_inventory

logger = logging.getLogger(__name__)


class SchemaRegistry(Mapping[str, Schema]):
    """Read-only mapping from output kind name to its schema."""

    def __init__(self, schemas: Mapping[str, Schema] | None = None) -> None:
        self._schemas: dict[str, Schema] = dict(schemas) if schemas is not None else {}

    def __getitem__(self, kind: str) -> Schema:
        return self._schemas[kind]

    def __iter__(self) -> Iterator[str]:
        return iter(self._schemas)

    def __len__(self) -> int:
        return len(self._schemas)

    def names(self) -> list[str]:
        return list(self._schemas)

    def get_schema(self, kind: str) -> Schema:
        """Return the schema for kind.

        Raises:
            UnknownOutputKindError: If no schema is registered for kind
        """
        if kind not in self._schemas:
            raise UnknownOutputKindError(kind, self.names())
        return self._schemas[kind]

    def register(self, kind: str, schema: Schema, *, replace: bool = False) -> "SchemaRegistry":
        """Return a new registry with schema registered under kind.

        Args:
            kind: Output kind name
            schema: Schema describing the output
            replace: Allow overriding an existing schema

        Raises:
            DuplicateSchemaError: If kind is already registered and replace is False
        """
        if kind in self._schemas and not replace:
            raise DuplicateSchemaError(kind)
        logger.debug("Registering schema for '%s'", kind)
        return SchemaRegistry({**self._schemas, kind: schema})

    def inventory(self, kind: str, output: Any) -> InventoryNode:
        """Classify a raw output with the schema registered for kind."""
        return self.get_schema(kind).inventory(output)

    def describe(self) -> InventoryNode:
        """Inventory of the registry itself, built with the `schemas` schema."""
        return schemas_inventory(self._schemas)


def _builtin_schemas() -> dict[str, Schema]:
    return {
        "apps": OutputSchema(
            doc="The `apps` output provides commands available via `nix run`.\n",
            inventory=apps_inventory,
        ),
        "schemas": OutputSchema(
            doc=(
                "The `schemas` flake output is used to define and document flake outputs.\n"
                "For the expected format, consult the Nix manual.\n"
            ),
            inventory=schemas_inventory,
        ),
        "packages": OutputSchema(
            doc=(
                "The `packages` flake output contains packages that can be added to a shell "
                "using `nix shell`.\n"
            ),
            inventory=derivations_inventory("packages", "package", False),
        ),
        "legacyPackages": OutputSchema(
            doc=(
                "The `legacyPackages` flake output is similar to `packages`, but it can be "
                "nested (i.e. contain attribute sets that contain more packages).\n"
                "Since enumerating the packages in nested attribute sets is inefficient, "
                "`legacyPackages` should be avoided in favor of `packages`.\n"
            ),
            inventory=legacy_packages_inventory,
        ),
        "checks": OutputSchema(
            doc=(
                "The `checks` flake output contains derivations that will be built by "
                "`nix flake check`.\n"
            ),
            inventory=derivations_inventory("checks", "CI test", True),
        ),
        "devShells": OutputSchema(
            doc=(
                "The `devShells` flake output contains derivations that provide a development "
                "environment for `nix develop`.\n"
            ),
            inventory=derivations_inventory("devShells", "development environment", False),
        ),
        "hydraJobs": OutputSchema(
            doc=(
                "The `hydraJobs` flake output defines derivations to be built\n"
                "by the Hydra continuous integration system.\n"
            ),
            inventory=hydra_jobs_inventory,
            allow_ifd=False,
        ),
        "lib": OutputSchema(
            doc="The `lib` flake output exposes arbitrary Nix terms.\n",
            inventory=lib_inventory,
        ),
        "overlays": OutputSchema(
            doc=(
                'The `overlays` flake output defines ["overlays"]'
                "(https://nixos.org/manual/nixpkgs/stable/#chap-overlays) that can be plugged "
                "into Nixpkgs.\n"
                "Overlays add additional packages or modify or replace existing packages.\n"
            ),
            inventory=overlays_inventory,
        ),
        "nixosConfigurations": OutputSchema(
            doc=(
                "The `nixosConfigurations` flake output defines [NixOS system configurations]"
                "(https://nixos.org/manual/nixos/stable/#ch-configuration).\n"
            ),
            inventory=configurations_inventory(
                "nixosConfigurations", "NixOS configuration", SYSTEM_TOPLEVEL
            ),
        ),
        "nixosModules": OutputSchema(
            doc=(
                "The `nixosModules` flake output defines importable [NixOS modules]"
                "(https://nixos.org/manual/nixos/stable/#sec-writing-modules).\n"
            ),
            inventory=modules_inventory("nixosModules", "NixOS module"),
        ),
        "homeConfigurations": OutputSchema(
            doc=(
                "The `homeConfigurations` flake output defines [Home Manager configurations]"
                "(https://github.com/nix-community/home-manager).\n"
            ),
            inventory=configurations_inventory(
                "homeConfigurations", "home-manager configuration", HOME_ACTIVATION_PACKAGE
            ),
        ),
        "homeManagerModules": OutputSchema(
            doc=(
                "The `homeManagerModules` flake output defines importable [Home Manager modules]"
                "(https://github.com/nix-community/home-manager).\n"
            ),
            inventory=modules_inventory("homeManagerModules", "Home Manager module"),
        ),
        "darwinConfigurations": OutputSchema(
            doc=(
                "The `darwinConfigurations` flake output defines [nix-darwin system "
                "configurations](https://github.com/LnL7/nix-darwin).\n"
            ),
            inventory=configurations_inventory(
                "darwinConfigurations", "nix-darwin configuration", SYSTEM_TOPLEVEL
            ),
        ),
    }


@functools.cache
def default_registry() -> SchemaRegistry:
    """Registry of the built-in output kinds, built once per process."""
    return SchemaRegistry(_builtin_schemas())

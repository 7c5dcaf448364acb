"""flake-schemas: lazy inventories of Nix flake outputs.

Import from submodules:
- core.inventory: InventoryNode, mk_children
- core.lazy: Lazy, force, guarded_eval
- core.values: attr_or, select, is_derivation, type_of
- schemas.registry: SchemaRegistry, default_registry
- outputs: inventory_outputs
- walk: iter_nodes, run_checks
"""

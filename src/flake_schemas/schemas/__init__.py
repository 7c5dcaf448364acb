"""Schemas for the well-known flake output kinds.

Import from submodules:
- base: Schema, OutputSchema
- registry: SchemaRegistry, default_registry
- meta: is_valid_schema, schema_from_definition
"""

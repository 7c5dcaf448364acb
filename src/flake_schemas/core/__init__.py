"""Inventory engine: deferred values, raw-value accessors, nodes and descent."""

"""
Module: db
Description: Package initialization for database maintenance.

This package contains:
- schema.sql: The bridge schema (tables, views, trigger)
- schema_objects: Declared objects and their derived drop order
- reset: The destructive reset utility (bridge-reset-db)
"""

__all__ = []

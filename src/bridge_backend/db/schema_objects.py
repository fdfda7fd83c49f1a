"""
Module: schema_objects.py
Description: Declared bridge schema objects and their drop order.

The reset utility drops every object the schema creates before
re-applying it. Rather than hand-maintaining the DROP sequence, each
object declares what it depends on and the sequence is derived with
a stable topological sort: an object is dropped only after everything
that depends on it.

Key Components:
- SchemaObject: A table, view or trigger with its dependencies
- BRIDGE_SCHEMA_OBJECTS: The objects created by schema.sql
- drop_order(): Dependents-first ordering
- drop_statements(): "IF EXISTS" DROP statements in that order
- introspect_schema(): Objects and references found in schema SQL

Dependencies: pydantic, re, typing
Author: Bridge Backend Team
"""

import re
from typing import Dict, List, Literal, Optional, Sequence, Set, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

ObjectKind = Literal['table', 'view', 'trigger']


class SchemaObject(BaseModel):
    """
    A droppable schema object.

    Attributes:
        name: Object name
        kind: 'table', 'view' or 'trigger'
        depends_on: Names of objects this one references (foreign keys,
            view sources, trigger table)
        on_table: Table a trigger is attached to
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., pattern=r'^[a-z_][a-z0-9_]*$')
    kind: ObjectKind
    depends_on: Tuple[str, ...] = ()
    on_table: Optional[str] = None

    @model_validator(mode='after')
    def check_trigger_table(self) -> "SchemaObject":
        """Triggers must name their table and depend on it."""
        if self.kind == 'trigger':
            if not self.on_table:
                raise ValueError(f"trigger {self.name} must set on_table")
            if self.on_table not in self.depends_on:
                raise ValueError(f"trigger {self.name} must depend on {self.on_table}")
        elif self.on_table is not None:
            raise ValueError(f"on_table is only valid for triggers, not {self.kind}")
        return self

    def drop_statement(self) -> str:
        """Render the idempotent DROP statement for this object."""
        if self.kind == 'trigger':
            return f"DROP TRIGGER IF EXISTS {self.name} ON {self.on_table};"
        if self.kind == 'view':
            return f"DROP VIEW IF EXISTS {self.name} CASCADE;"
        return f"DROP TABLE IF EXISTS {self.name} CASCADE;"


# Declared in preferred drop order; drop_order() keeps this order
# wherever the dependencies allow it.
BRIDGE_SCHEMA_OBJECTS: Tuple[SchemaObject, ...] = (
    SchemaObject(
        name='update_lock_events_updated_at',
        kind='trigger',
        on_table='lock_events',
        depends_on=('lock_events',),
    ),
    SchemaObject(name='pending_locks', kind='view', depends_on=('lock_events', 'merkle_proofs')),
    SchemaObject(name='bridge_stats', kind='view', depends_on=('lock_events', 'unlock_events')),
    SchemaObject(name='unlock_events', kind='table', depends_on=('lock_events',)),
    SchemaObject(name='merkle_proofs', kind='table', depends_on=('lock_events', 'block_roots')),
    SchemaObject(name='lock_events', kind='table'),
    SchemaObject(name='block_roots', kind='table'),
    SchemaObject(name='relayer_transactions', kind='table'),
    SchemaObject(name='bridge_history', kind='table'),
    SchemaObject(name='system_metrics', kind='table'),
    SchemaObject(name='failed_transactions', kind='table'),
)


def drop_order(objects: Sequence[SchemaObject] = BRIDGE_SCHEMA_OBJECTS) -> List[SchemaObject]:
    """
    Order objects so that dependents are dropped before their dependencies.

    Stable: among objects that are ready to drop, the one declared
    first is taken first.

    Args:
        objects: Declared schema objects

    Returns:
        Objects in drop order

    Raises:
        ValueError: On duplicate names, undeclared dependencies or cycles
    """
    by_name: Dict[str, SchemaObject] = {}
    for obj in objects:
        if obj.name in by_name:
            raise ValueError(f"duplicate schema object: {obj.name}")
        by_name[obj.name] = obj

    # Number of not-yet-dropped objects depending on each object
    dependents: Dict[str, int] = {name: 0 for name in by_name}
    for obj in objects:
        for dep in obj.depends_on:
            if dep not in by_name:
                raise ValueError(f"{obj.name} depends on undeclared object {dep}")
            dependents[dep] += 1

    ordered: List[SchemaObject] = []
    remaining = list(objects)
    while remaining:
        ready = next((obj for obj in remaining if dependents[obj.name] == 0), None)
        if ready is None:
            cycle = ', '.join(obj.name for obj in remaining)
            raise ValueError(f"dependency cycle among: {cycle}")
        remaining.remove(ready)
        ordered.append(ready)
        for dep in ready.depends_on:
            dependents[dep] -= 1

    return ordered


def drop_statements(objects: Sequence[SchemaObject] = BRIDGE_SCHEMA_OBJECTS) -> List[str]:
    """DROP ... IF EXISTS statements for objects, dependents first."""
    return [obj.drop_statement() for obj in drop_order(objects)]


def drop_script(objects: Sequence[SchemaObject] = BRIDGE_SCHEMA_OBJECTS) -> str:
    """All DROP statements joined into one batch."""
    return '\n'.join(drop_statements(objects)) + '\n'


_COMMENT_RE = re.compile(r'--[^\n]*')
_TABLE_RE = re.compile(
    r'CREATE\s+TABLE\s+(?:IF\s+NOT\s+EXISTS\s+)?(\w+)\s*\((.*?)\n\s*\)\s*;',
    re.IGNORECASE | re.DOTALL,
)
_VIEW_RE = re.compile(
    r'CREATE\s+(?:OR\s+REPLACE\s+)?VIEW\s+(\w+)\s+AS\s+(.*?);',
    re.IGNORECASE | re.DOTALL,
)
_TRIGGER_RE = re.compile(
    r'CREATE\s+(?:OR\s+REPLACE\s+)?TRIGGER\s+(\w+)\s+.*?\bON\s+(\w+)',
    re.IGNORECASE | re.DOTALL,
)
_REFERENCES_RE = re.compile(r'\bREFERENCES\s+(\w+)', re.IGNORECASE)
_SOURCE_RE = re.compile(r'\b(?:FROM|JOIN)\s+(\w+)', re.IGNORECASE)


def introspect_schema(schema_sql: str) -> List[SchemaObject]:
    """
    Find the tables, views and triggers a schema script creates.

    Dependencies are read from REFERENCES clauses, view FROM/JOIN
    sources and trigger ON clauses, restricted to objects the script
    itself creates. Function bodies and indexes are not reported.

    Args:
        schema_sql: Contents of a schema script

    Returns:
        SchemaObject per created object, in script order
    """
    sql = _COMMENT_RE.sub('', schema_sql)
    found: List[Tuple[int, str, str, Set[str], Optional[str]]] = []

    for match in _TABLE_RE.finditer(sql):
        refs = {ref.lower() for ref in _REFERENCES_RE.findall(match.group(2))}
        found.append((match.start(), match.group(1).lower(), 'table', refs, None))

    for match in _VIEW_RE.finditer(sql):
        refs = {ref.lower() for ref in _SOURCE_RE.findall(match.group(2))}
        found.append((match.start(), match.group(1).lower(), 'view', refs, None))

    for match in _TRIGGER_RE.finditer(sql):
        table = match.group(2).lower()
        found.append((match.start(), match.group(1).lower(), 'trigger', {table}, table))

    found.sort(key=lambda item: item[0])
    created = {name for _, name, _, _, _ in found}

    objects = []
    for _, name, kind, refs, on_table in found:
        depends_on = tuple(sorted(
            ref for ref in refs if (ref in created or ref == on_table) and ref != name
        ))
        objects.append(
            SchemaObject(name=name, kind=kind, depends_on=depends_on, on_table=on_table)
        )
    return objects


def uncovered_objects(
    schema_sql: str,
    objects: Sequence[SchemaObject] = BRIDGE_SCHEMA_OBJECTS
) -> List[str]:
    """
    Names of objects the schema creates that the drop plan does not cover.

    Args:
        schema_sql: Contents of a schema script
        objects: Declared schema objects

    Returns:
        Sorted names missing from objects
    """
    declared = {obj.name for obj in objects}
    return sorted(obj.name for obj in introspect_schema(schema_sql) if obj.name not in declared)

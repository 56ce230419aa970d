"""DDL SQL generation for extracted tables."""

from __future__ import annotations

from typing import Dict, List

from sql_mapper.infrastructure.schema.core import Column, Table

from ..dialects.base import Dialect


def _column_definition(col: Column, dialect: Dialect) -> str:
    db_type, default = dialect.translate_type(col.logical_type, col.precision, col.default)
    if col.db_type:
        db_type = col.db_type

    parts = [dialect.quote(col.name), db_type]
    if col.unique and not col.unique_group:
        parts.append("UNIQUE")
    if col.autoincrement:
        clause = dialect.autoincrement_clause()
        if clause:
            parts.append(clause)
    if not col.nullable:
        parts.append("NOT NULL")
    # identity columns generate their own values
    if col.has_default and not col.autoincrement:
        parts.append(f"DEFAULT {default}")
    return " ".join(parts)


def create_table_sql(table: Table, dialect: Dialect) -> str:
    """
    Generate the CREATE TABLE statement for a table.

    Column definitions come first in table order, followed by the PRIMARY KEY
    clause, one CONSTRAINT ... UNIQUE clause per unique group (groups and
    their columns in first-seen order) and one FOREIGN KEY clause per
    referencing column.

    Raises:
        UnsupportedTypeError: If a column's logical type has no mapping
    """
    definitions: List[str] = []
    primaries: List[str] = []
    unique_groups: Dict[str, List[str]] = {}
    foreign_keys: List[str] = []

    for col in table.columns:
        definitions.append(_column_definition(col, dialect))
        quoted = dialect.quote(col.name)
        if col.primary_key:
            primaries.append(quoted)
        if col.unique and col.unique_group:
            unique_groups.setdefault(col.unique_group, []).append(quoted)
        if col.has_foreign_key:
            foreign_keys.append(
                f"FOREIGN KEY({quoted}) REFERENCES {col.foreign_table}({col.foreign_column})"
            )

    if primaries:
        definitions.append(f"PRIMARY KEY ({', '.join(primaries)})")
    for name, columns in unique_groups.items():
        definitions.append(f"CONSTRAINT {name} UNIQUE ({', '.join(columns)})")
    definitions.extend(foreign_keys)

    body = ",\n".join(f"    {line}" for line in definitions)
    return f"CREATE TABLE IF NOT EXISTS {dialect.quote(table.name)} (\n{body}\n);"


__all__ = ["create_table_sql"]

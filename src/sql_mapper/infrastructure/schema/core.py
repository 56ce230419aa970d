"""Core schema types: the table description extracted from a dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from sql_mapper.infrastructure.sql.core.columns import ColumnNames


@dataclass(frozen=True)
class Column:
    """Definition of a single mapped column.

    ``precision`` is dialect-defined: a length for string/char types, or
    ``"precision,scale"`` for floats. ``db_type`` bypasses type translation
    when set. ``unique_group`` is only meaningful when ``unique`` is set: empty
    means a per-column UNIQUE, otherwise the column joins a named multi-column
    constraint. ``foreign_table``/``foreign_column`` are both set or both empty.
    """

    name: str
    logical_type: str
    precision: str = ""
    db_type: str = ""
    primary_key: bool = False
    autoincrement: bool = False
    nullable: bool = True
    has_default: bool = False
    default: str = ""
    unique: bool = False
    unique_group: str = ""
    foreign_table: str = ""
    foreign_column: str = ""
    field_path: Tuple[str, ...] = field(default=(), compare=False, repr=False)

    @property
    def has_foreign_key(self) -> bool:
        return bool(self.foreign_table)

    def value_from(self, instance: Any) -> Any:
        """Read this column's value from a dataclass instance."""
        value = instance
        for attr in self.field_path:
            value = getattr(value, attr)
        return value


@dataclass(frozen=True)
class Table:
    """A mapped dataclass: table name plus columns in field order."""

    name: str
    columns: Tuple[Column, ...] = ()
    model: Optional[type] = field(default=None, compare=False, repr=False)

    def column(self, name: str) -> Column:
        for col in self.columns:
            if col.name == name:
                return col
        raise KeyError(f"Column '{name}' not found in table '{self.name}'")

    def column_names(self, *excepts: str) -> ColumnNames:
        """Column names in table order, minus ``excepts``."""
        return ColumnNames(c.name for c in self.columns if c.name not in excepts)

    @property
    def primary_keys(self) -> ColumnNames:
        return ColumnNames(c.name for c in self.columns if c.primary_key)

    def bind(self, instance: Any) -> Dict[str, Any]:
        """
        Build named parameters for an instance of the mapped dataclass.

        Example:
            >>> table.bind(User(id=1, name="ann"))
            {'id': 1, 'name': 'ann'}
        """
        return {col.name: col.value_from(instance) for col in self.columns}


__all__ = [
    "Column",
    "Table",
]

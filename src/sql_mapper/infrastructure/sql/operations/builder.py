"""
SQL statement builders.

``StatementBuilder`` renders DDL and named-parameter DML for dataclasses
using a SchemaExtractor and a Dialect. Statements are plain text; executing
them is the caller's concern.

Example:
    >>> builder = StatementBuilder(SchemaExtractor(), PostgreSQLDialect())
    >>> builder.insert(User)
    'INSERT INTO user(id, name, email) VALUES(:id, :name, :email)'
    >>> builder.update(User, where=["id"])
    'UPDATE user SET name = :name, email = :email WHERE id = :id'
"""

from __future__ import annotations

import functools
from typing import Any, Callable, NamedTuple, Optional, Sequence

from sql_mapper.config import Settings, get_settings
from sql_mapper.infrastructure.schema.core import Table
from sql_mapper.infrastructure.schema.extractor import SchemaExtractor

from ..core.columns import ColumnNames
from ..dialects import get_dialect
from ..dialects.base import Dialect
from .cache import StatementCache
from .ddl import create_table_sql

ALL_COLUMNS = "*"


class ExistsCheck(NamedTuple):
    """One ``EXISTS(...) AS alias`` item of a multi-target existence query."""

    model: Any
    alias: str
    where: Optional[Sequence[str]] = None


def _where(conds: str) -> str:
    return f" WHERE {conds}" if conds else ""


class StatementBuilder:
    """
    High-level builder for DDL and DML statements.

    Column arguments are sequences of column names. Where-columns render as
    ``col = :col`` joined by AND; the ``*_by_conds`` variants take a raw
    condition string instead. An empty condition omits the WHERE clause.
    """

    def __init__(self, extractor: SchemaExtractor, dialect: Dialect):
        """
        Initialize the StatementBuilder.

        Args:
            extractor: Schema extractor used to resolve dataclasses to tables
            dialect: SQL dialect used for DDL generation
        """
        self.extractor = extractor
        self.dialect = dialect
        self._cache = StatementCache()

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "StatementBuilder":
        settings = settings or get_settings()
        return cls(SchemaExtractor.from_settings(settings), get_dialect(settings.dialect))

    def table(self, model: Any) -> Table:
        return self.extractor.extract(model)

    def table_columns(self, model: Any, *excepts: str) -> ColumnNames:
        return self.table(model).column_names(*excepts)

    # --- DDL -------------------------------------------------------------------
    def create_table(self, model: Any) -> str:
        """Build the CREATE TABLE IF NOT EXISTS statement for a dataclass."""
        return create_table_sql(self.table(model), self.dialect)

    # --- DML -------------------------------------------------------------------
    def query(
        self,
        model: Any,
        columns: Optional[Sequence[str]] = None,
        where: Optional[Sequence[str]] = None,
    ) -> str:
        """
        Build a SELECT statement.

        Args:
            model: Dataclass or instance
            columns: Selected columns; empty selects every column not in
                ``where``, ``["*"]`` selects every column
            where: Columns compared for equality with named parameters
        """
        table = self.table(model)
        where_cols = ColumnNames(where or ())
        cols = self._selected(table, columns, where_cols)
        return self._select(table, cols, where_cols.named_cond())

    def query_by_conds(
        self, model: Any, columns: Optional[Sequence[str]] = None, conds: str = ""
    ) -> str:
        """Build a SELECT statement with a raw WHERE condition; empty columns select all."""
        table = self.table(model)
        return self._select(table, self._selected(table, columns, ()), conds)

    def insert(self, model: Any) -> str:
        """Build an INSERT statement over every column."""
        table = self.table(model)
        cols = table.column_names()
        return f"INSERT INTO {table.name}({cols.as_list()}) VALUES({cols.named_list()})"

    def insert_if_not_exists(self, model: Any, unique_columns: Sequence[str]) -> str:
        """
        Build an INSERT that only inserts when no row matches ``unique_columns``.

        Example:
            >>> builder.insert_if_not_exists(User, ["email"])
            'INSERT INTO user(id, email) SELECT :id, :email WHERE NOT EXISTS(SELECT 1 FROM user WHERE email = :email)'
        """
        table = self.table(model)
        cols = table.column_names()
        conds = ColumnNames(unique_columns).named_cond()
        return (
            f"INSERT INTO {table.name}({cols.as_list()}) "
            f"SELECT {cols.named_list()} "
            f"WHERE NOT EXISTS(SELECT 1 FROM {table.name}{_where(conds)})"
        )

    def update(
        self,
        model: Any,
        columns: Optional[Sequence[str]] = None,
        where: Optional[Sequence[str]] = None,
    ) -> str:
        """
        Build an UPDATE statement.

        Args:
            model: Dataclass or instance
            columns: Columns to set; empty sets every column not in ``where``
            where: Columns compared for equality with named parameters
        """
        table = self.table(model)
        where_cols = ColumnNames(where or ())
        cols = ColumnNames(columns or ()) or table.column_names(*where_cols)
        return self._update(table, cols, where_cols.named_cond())

    def update_by_conds(
        self, model: Any, columns: Optional[Sequence[str]] = None, conds: str = ""
    ) -> str:
        """Build an UPDATE statement with a raw WHERE condition."""
        table = self.table(model)
        cols = ColumnNames(columns or ()) or table.column_names()
        return self._update(table, cols, conds)

    def delete(self, model: Any, where: Optional[Sequence[str]] = None) -> str:
        """Build a DELETE statement; no where-columns deletes every row."""
        return self.delete_by_conds(model, ColumnNames(where or ()).named_cond())

    def delete_by_conds(self, model: Any, conds: str = "") -> str:
        """Build a DELETE statement with a raw WHERE condition."""
        table = self.table(model)
        return f"DELETE FROM {table.name}{_where(conds)}"

    def exists(self, model: Any, alias: str, where: Optional[Sequence[str]] = None) -> str:
        """Build ``SELECT EXISTS(SELECT 1 FROM t WHERE ...) AS alias``."""
        return self.multi_exists(ExistsCheck(model, alias, where))

    def multi_exists(self, *checks: ExistsCheck) -> str:
        """Build one SELECT with an ``EXISTS(...) AS alias`` item per check."""
        items = []
        for check in checks:
            table = self.table(check.model)
            conds = ColumnNames(check.where or ()).named_cond()
            items.append(f"EXISTS(SELECT 1 FROM {table.name}{_where(conds)}) AS {check.alias}")
        return f"SELECT {', '.join(items)}"

    # --- Caching -----------------------------------------------------------------
    def with_cache(self, build: Callable[["StatementBuilder"], str]) -> str:
        """
        Return the statement built by ``build``, computed once per call site.

        The cache key is the function's code object, so ``build`` must not
        depend on values captured from its enclosing scope. Arguments bound
        with ``functools.partial`` are part of the key.

        Raises:
            TypeError: If ``build`` is neither a function nor a partial of one
        """
        return self._cache.get(self._call_site(build), lambda: build(self))

    def with_cache_and_index(
        self,
        build: Callable[["StatementBuilder", int], str],
        index: int,
        capacity: int,
    ) -> str:
        """Like ``with_cache`` with one cached variant per index below ``capacity``."""
        return self._cache.get_indexed(
            self._call_site(build), index, capacity, lambda: build(self, index)
        )

    @staticmethod
    def _call_site(build: Callable[..., str]) -> Any:
        """
        Cache key for ``build``: its code object, plus the bound arguments of a
        ``functools.partial``.

        Raises:
            TypeError: If ``build`` has no code object, e.g. a callable instance
        """
        if isinstance(build, functools.partial):
            return (
                StatementBuilder._call_site(build.func),
                build.args,
                tuple(sorted(build.keywords.items())),
            )
        code = getattr(build, "__code__", None)
        if code is None:
            raise TypeError(
                f"cannot cache statements built by {build!r}: no code object identifies it"
            )
        return code

    @staticmethod
    def _selected(
        table: Table, columns: Optional[Sequence[str]], excepts: Sequence[str]
    ) -> ColumnNames:
        cols = ColumnNames(columns or ())
        if cols == [ALL_COLUMNS]:
            return table.column_names()
        return cols or table.column_names(*excepts)

    @staticmethod
    def _select(table: Table, cols: ColumnNames, conds: str) -> str:
        return f"SELECT {cols.as_list()} FROM {table.name}{_where(conds)}"

    @staticmethod
    def _update(table: Table, cols: ColumnNames, conds: str) -> str:
        return f"UPDATE {table.name} SET {cols.named_update()}{_where(conds)}"


__all__ = ["ALL_COLUMNS", "ExistsCheck", "StatementBuilder"]

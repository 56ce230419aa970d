"""Statement generation: DDL, DML and statement caching."""

from .builder import ALL_COLUMNS, ExistsCheck, StatementBuilder
from .cache import StatementCache, StatementHolder
from .ddl import create_table_sql

__all__ = [
    "ALL_COLUMNS",
    "ExistsCheck",
    "StatementBuilder",
    "StatementCache",
    "StatementHolder",
    "create_table_sql",
]

"""
SQL module for dialect-aware statement generation.

Provides column-list formatting, identifier quoting and the supported
dialects. Statement builders live in ``sql.operations``, which depends on
the schema package and is therefore not imported here.
"""

from .core.columns import ColumnNames
from .core.identifier import quote_identifier
from .dialects import (
    ConnectionConfig,
    Dialect,
    MySQLDialect,
    PostgreSQLDialect,
    SQLiteDialect,
    get_dialect,
)

__all__ = [
    "quote_identifier",
    "ColumnNames",
    "ConnectionConfig",
    "Dialect",
    "PostgreSQLDialect",
    "MySQLDialect",
    "SQLiteDialect",
    "get_dialect",
]

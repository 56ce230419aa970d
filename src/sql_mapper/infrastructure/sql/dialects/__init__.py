"""SQL dialects: one variant per supported backend."""

from typing import Dict, Type

from sql_mapper.exceptions import UnsupportedDialectError

from .base import BaseDialect, ConnectionConfig, Dialect
from .mysql import MySQLDialect
from .postgresql import PostgreSQLDialect
from .sqlite import SQLiteDialect

_DIALECTS: Dict[str, Type[BaseDialect]] = {
    "postgresql": PostgreSQLDialect,
    "postgres": PostgreSQLDialect,
    "mysql": MySQLDialect,
    "sqlite": SQLiteDialect,
    "sqlite3": SQLiteDialect,
}


def get_dialect(name: str) -> BaseDialect:
    """
    Resolve a dialect by name or alias.

    Raises:
        UnsupportedDialectError: If the name is unknown
    """
    try:
        return _DIALECTS[name.lower()]()
    except KeyError:
        raise UnsupportedDialectError(name, sorted(_DIALECTS)) from None


__all__ = [
    "BaseDialect",
    "ConnectionConfig",
    "Dialect",
    "MySQLDialect",
    "PostgreSQLDialect",
    "SQLiteDialect",
    "get_dialect",
]

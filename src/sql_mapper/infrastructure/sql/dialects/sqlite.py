"""
SQLite-specific SQL dialect implementation.

SQLite stores values by affinity, so every integer width collapses to
INTEGER and every string kind to TEXT.
"""

from typing import Tuple

from sql_mapper.exceptions import UnsupportedTypeError

from .base import BaseDialect, ConnectionConfig

_INTEGER_KINDS = frozenset(
    {
        "bool",
        "int",
        "int8",
        "int16",
        "int32",
        "int64",
        "uint",
        "uint8",
        "uint16",
        "uint32",
        "uint64",
    }
)


class SQLiteDialect(BaseDialect):
    """SQLite SQL dialect implementation."""

    name = "sqlite"
    MEMORY_LOCATOR = ":memory:"

    def translate_type(
        self, logical_type: str, precision: str = "", default: str = ""
    ) -> Tuple[str, str]:
        """Translate a logical type into a SQLite column type and default literal."""
        if logical_type in _INTEGER_KINDS:
            return "INTEGER", self.default_literal("0", default, False)
        if logical_type in ("float32", "float64", "float"):
            return "FLOAT", self.default_literal("0", default, False)
        if logical_type in ("string", "text", "char"):
            return "TEXT", self.default_literal("", default, True)
        if logical_type == "blob":
            return "BLOB", self.default_literal("x''", default, False)
        raise UnsupportedTypeError(self.name, logical_type)

    def build_connection_string(self, config: ConnectionConfig) -> str:
        """
        Build a SQLite URI filename, or an in-memory locator without a database.

        The result is meant for ``sqlite3.connect(locator, uri=True)``, not for
        SQLAlchemy's ``create_engine``, which expects ``sqlite:///<path>``.

        Examples:
            >>> SQLiteDialect().build_connection_string(ConnectionConfig())
            ':memory:'
            >>> SQLiteDialect().build_connection_string(
            ...     ConnectionConfig(dbname="app.db", options={"mode": "ro"})
            ... )
            'file:app.db?mode=ro'
        """
        if not config.dbname:
            return self.MEMORY_LOCATOR
        return self._with_options(f"file:{config.dbname}", config)

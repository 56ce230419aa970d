"""
PostgreSQL-specific SQL dialect implementation.

Provides PostgreSQL column types, default literals (``E''`` strings when
escaping is needed), identity columns and libpq connection URIs.
"""

from typing import Tuple

from sql_mapper.exceptions import UnsupportedTypeError

from .base import BaseDialect, ConnectionConfig

_INTEGER_TYPES = {
    "int": "BIGINT",
    "int8": "SMALLINT",
    "int16": "SMALLINT",
    "int32": "INTEGER",
    "int64": "BIGINT",
    "uint": "BIGINT",
    "uint8": "SMALLINT",
    "uint16": "INTEGER",
    "uint32": "BIGINT",
    "uint64": "BIGINT",
}


class PostgreSQLDialect(BaseDialect):
    """PostgreSQL SQL dialect implementation."""

    name = "postgresql"
    DEFAULT_HOST = "localhost"
    DEFAULT_PORT = 5432

    def quote_literal(self, value: str) -> str:
        if "'" in value:
            escaped = value.replace("\\", "\\\\").replace("'", "\\'")
            return f"E'{escaped}'"
        return f"'{value}'"

    def translate_type(
        self, logical_type: str, precision: str = "", default: str = ""
    ) -> Tuple[str, str]:
        """
        Translate a logical type into a PostgreSQL column type.

        Args:
            logical_type: Logical type name (int32, string, blob, ...)
            precision: Length for string/char, "precision,scale" for floats
            default: Raw default value, empty for the type's zero value

        Returns:
            Tuple of (column type, default literal)

        Raises:
            UnsupportedTypeError: If the logical type has no mapping
        """
        if logical_type == "bool":
            return "BOOLEAN", self.default_literal("false", default, False)
        if logical_type in _INTEGER_TYPES:
            return _INTEGER_TYPES[logical_type], self.default_literal("0", default, False)
        if logical_type in ("float32", "float64", "float"):
            if precision:
                db_type = f"NUMERIC({precision})"
            elif logical_type == "float32":
                db_type = "REAL"
            else:
                db_type = "DOUBLE PRECISION"
            return db_type, self.default_literal("0", default, False)
        if logical_type == "string":
            length = precision or self.DEFAULT_STRING_LENGTH
            return f"VARCHAR({length})", self.default_literal("", default, True)
        if logical_type == "char":
            length = precision or self.DEFAULT_STRING_LENGTH
            return f"CHAR({length})", self.default_literal("", default, True)
        if logical_type == "text":
            return "TEXT", self.default_literal("", default, True)
        if logical_type == "blob":
            return "BYTEA", self.default_literal("E'\\\\000'", default, False)
        raise UnsupportedTypeError(self.name, logical_type)

    def autoincrement_clause(self) -> str:
        return "GENERATED BY DEFAULT AS IDENTITY"

    def build_connection_string(self, config: ConnectionConfig) -> str:
        """
        Build a libpq connection URI.

        The URI is accepted by libpq and psycopg directly, and by SQLAlchemy's
        ``create_engine`` with its default PostgreSQL driver.

        Examples:
            >>> PostgreSQLDialect().build_connection_string(
            ...     ConnectionConfig(user="app", password="pw", dbname="main")
            ... )
            'postgresql://app:pw@localhost:5432/main'
        """
        host = config.host or self.DEFAULT_HOST
        port = config.port or self.DEFAULT_PORT
        locator = f"postgresql://{self._credentials(config)}{host}:{port}/{config.dbname}"
        return self._with_options(locator, config)

"""
MySQL-specific SQL dialect implementation.

MySQL is the only supported backend with unsigned integer columns, and it
requires explicit precision on FLOAT/DOUBLE columns here.
"""

from typing import Tuple

from sql_mapper.exceptions import UnsupportedTypeError

from .base import BaseDialect, ConnectionConfig

_INTEGER_TYPES = {
    "int": "BIGINT",
    "int8": "TINYINT",
    "int16": "SMALLINT",
    "int32": "INT",
    "int64": "BIGINT",
    "uint": "BIGINT UNSIGNED",
    "uint8": "TINYINT UNSIGNED",
    "uint16": "SMALLINT UNSIGNED",
    "uint32": "INT UNSIGNED",
    "uint64": "BIGINT UNSIGNED",
}


class MySQLDialect(BaseDialect):
    """MySQL SQL dialect implementation."""

    name = "mysql"
    DEFAULT_HOST = "localhost"
    DEFAULT_PORT = 3306
    DEFAULT_FLOAT_PRECISION = "32,4"
    DEFAULT_DOUBLE_PRECISION = "64,4"

    def translate_type(
        self, logical_type: str, precision: str = "", default: str = ""
    ) -> Tuple[str, str]:
        """Translate a logical type into a MySQL column type and default literal."""
        if logical_type == "bool":
            return "BOOLEAN", self.default_literal("false", default, False)
        if logical_type in _INTEGER_TYPES:
            return _INTEGER_TYPES[logical_type], self.default_literal("0", default, False)
        if logical_type in ("float32", "float64", "float"):
            if logical_type == "float32":
                db_type = "FLOAT"
                precision = precision or self.DEFAULT_FLOAT_PRECISION
            else:
                db_type = "DOUBLE"
                precision = precision or self.DEFAULT_DOUBLE_PRECISION
            return f"{db_type}({precision})", self.default_literal("0", default, False)
        if logical_type == "string":
            length = precision or self.DEFAULT_STRING_LENGTH
            return f"VARCHAR({length})", self.default_literal("", default, True)
        if logical_type == "char":
            length = precision or self.DEFAULT_STRING_LENGTH
            return f"CHAR({length})", self.default_literal("", default, True)
        if logical_type == "text":
            return "MEDIUMTEXT", self.default_literal("", default, True)
        if logical_type == "blob":
            return "MEDIUMBLOB", self.default_literal("''", default, False)
        raise UnsupportedTypeError(self.name, logical_type)

    def quote_literal(self, value: str) -> str:
        """Quote a string literal; backslash is an escape character in MySQL."""
        escaped = value.replace("\\", "\\\\").replace("'", "''")
        return f"'{escaped}'"

    def autoincrement_clause(self) -> str:
        return "AUTO_INCREMENT"

    def build_connection_string(self, config: ConnectionConfig) -> str:
        """
        Build a MySQL connection URL.

        The URL names no driver; SQLAlchemy callers add one to the scheme,
        e.g. ``mysql+pymysql://``.

        Examples:
            >>> MySQLDialect().build_connection_string(
            ...     ConnectionConfig(user="root", dbname="shop", options={"charset": "utf8mb4"})
            ... )
            'mysql://root@localhost:3306/shop?charset=utf8mb4'
        """
        host = config.host or self.DEFAULT_HOST
        port = config.port or self.DEFAULT_PORT
        locator = f"mysql://{self._credentials(config)}{host}:{port}/{config.dbname}"
        return self._with_options(locator, config)

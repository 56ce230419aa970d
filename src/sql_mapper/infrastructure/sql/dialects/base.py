"""
Dialect protocol and shared helpers.

A dialect translates logical column types into concrete SQL types with a
properly quoted default literal, quotes identifiers, and builds a connection
string from a ``ConnectionConfig``. Dialects are stateless.
"""

from typing import Dict, Optional, Protocol, Tuple
from urllib.parse import quote

from pydantic import BaseModel, Field

from ..core.identifier import quote_identifier


class ConnectionConfig(BaseModel):
    """Connection descriptor translated by a dialect into a connection string.

    Pool hints are carried for the caller's connection pool; dialects ignore
    them.
    """

    host: str = Field(default="", description="Database host")
    port: int = Field(default=0, description="Database port, 0 for the dialect default")
    dbname: str = Field(default="", description="Database name or file path")
    user: str = Field(default="", description="Database user")
    password: str = Field(default="", description="Database password")
    max_idle: int = Field(default=0, description="Pool hint: idle connections")
    max_open: int = Field(default=0, description="Pool hint: open connections")
    conn_max_lifetime: Optional[float] = Field(
        default=None, description="Pool hint: connection lifetime in seconds"
    )
    options: Dict[str, str] = Field(default_factory=dict, description="Driver options")

    def join_options(self, kv_sep: str = "=", sep: str = "&") -> str:
        """Render options sorted by key, e.g. ``sslmode=disable&timeout=5``."""
        return sep.join(
            f"{key}{kv_sep}{value}" for key, value in sorted(self.options.items())
        )


class Dialect(Protocol):
    """Protocol for SQL dialects."""

    name: str

    def quote(self, identifier: str) -> str: ...
    def translate_type(
        self, logical_type: str, precision: str = "", default: str = ""
    ) -> Tuple[str, str]: ...
    def autoincrement_clause(self) -> str: ...
    def build_connection_string(self, config: ConnectionConfig) -> str: ...


class BaseDialect:
    """Behaviour shared by the concrete dialects."""

    name = ""
    DEFAULT_STRING_LENGTH = "64"

    def quote(self, identifier: str) -> str:
        """Quote an identifier using this dialect's syntax."""
        return quote_identifier(identifier, dialect=self.name)

    def autoincrement_clause(self) -> str:
        return ""

    def quote_literal(self, value: str) -> str:
        """Quote a string literal, doubling embedded single quotes."""
        return "'" + value.replace("'", "''") + "'"

    def default_literal(self, fallback: str, value: str, quoted: bool) -> str:
        """Render a DEFAULT literal, using ``fallback`` when ``value`` is empty."""
        if value == "":
            value = fallback
        if quoted:
            return self.quote_literal(value)
        return value

    @staticmethod
    def _credentials(config: ConnectionConfig) -> str:
        if not config.user:
            return ""
        user_pass = quote(config.user, safe="")
        if config.password:
            user_pass += ":" + quote(config.password, safe="")
        return user_pass + "@"

    @staticmethod
    def _with_options(locator: str, config: ConnectionConfig) -> str:
        options = config.join_options("=", "&")
        if options:
            return f"{locator}?{options}"
        return locator

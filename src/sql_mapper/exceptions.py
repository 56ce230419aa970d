"""Exceptions raised by schema extraction, dialect translation and execution.

Every error carries enough context to be logged as a structured event via
``to_dict()``.
"""

from typing import Dict, Optional


class SqlMapperError(Exception):
    """Base class for all sql_mapper errors."""

    def to_dict(self) -> Dict[str, str]:
        """Convert to structured dict for logging."""
        return {
            "error_type": type(self).__name__,
            "message": str(self),
        }


class InvalidStructureError(SqlMapperError, TypeError):
    """Raised when a schema is requested for something that is not a dataclass."""

    def __init__(self, value: object):
        self.value_type = type(value).__name__ if not isinstance(value, type) else value.__name__
        super().__init__(
            f"invalid argument type {self.value_type!r}, expected a dataclass or dataclass instance"
        )


class TagError(SqlMapperError, ValueError):
    """Raised when a field tag violates the tag grammar."""

    def __init__(self, field: str, key: str, value: str, message: str):
        self.field = field
        self.key = key
        self.value = value
        super().__init__(message)

    def __str__(self) -> str:
        return f"field '{self.field}': {self.args[0]}"

    def to_dict(self) -> Dict[str, str]:
        return {
            "error_type": "TagError",
            "field": self.field,
            "key": self.key,
            "value": self.value,
            "message": str(self),
        }


class UnsupportedTypeError(SqlMapperError, ValueError):
    """Raised when a dialect has no mapping for a logical type."""

    def __init__(self, dialect: str, type_name: str):
        self.dialect = dialect
        self.type_name = type_name
        super().__init__(f"{dialect}: unsupported type: {type_name}")


class UnsupportedDialectError(SqlMapperError, ValueError):
    """Raised when a dialect name cannot be resolved."""

    def __init__(self, name: str, available: list):
        self.name = name
        super().__init__(f"Dialect '{name}' not supported. Available: {available}")


class ExecutionError(SqlMapperError):
    """Wraps an executor failure with the table it was operating on."""

    def __init__(self, table: str, original_error: Exception, sql: Optional[str] = None):
        self.table = table
        self.original_error = original_error
        self.sql = sql
        super().__init__(f"{table}: {original_error}")

    def to_dict(self) -> Dict[str, str]:
        return {
            "error_type": "ExecutionError",
            "table": self.table,
            "message": str(self),
            "original_error_type": type(self.original_error).__name__,
            "original_error_message": str(self.original_error),
        }

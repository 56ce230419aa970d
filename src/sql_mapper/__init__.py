"""
sql_mapper: map dataclasses to table schemas and generate dialect-specific SQL.

Usage:
    >>> from dataclasses import dataclass
    >>> from sql_mapper import SchemaExtractor, StatementBuilder, PostgreSQLDialect, column
    >>> @dataclass
    ... class User:
    ...     id: int = column("pk", default=0)
    ...     name: str = ""
    >>> builder = StatementBuilder(SchemaExtractor(), PostgreSQLDialect())
    >>> builder.query(User, ["name"], ["id"])
    'SELECT name FROM user WHERE id = :id'
"""

from sql_mapper.exceptions import (
    ExecutionError,
    InvalidStructureError,
    SqlMapperError,
    TagError,
    UnsupportedDialectError,
    UnsupportedTypeError,
)
from sql_mapper.infrastructure.schema import (
    Column,
    SchemaExtractor,
    Table,
    column,
    embedded,
    float32,
    float64,
    int8,
    int16,
    int32,
    int64,
    uint,
    uint8,
    uint16,
    uint32,
    uint64,
)
from sql_mapper.infrastructure.sql import (
    ColumnNames,
    ConnectionConfig,
    Dialect,
    MySQLDialect,
    PostgreSQLDialect,
    SQLiteDialect,
    get_dialect,
)
from sql_mapper.infrastructure.sql.operations import (
    ALL_COLUMNS,
    ExistsCheck,
    StatementBuilder,
    StatementCache,
    StatementHolder,
    create_table_sql,
)
from sql_mapper.io import SQLAlchemyExecutor, StatementExecutor, create_tables

__all__ = [
    "SqlMapperError",
    "InvalidStructureError",
    "TagError",
    "UnsupportedTypeError",
    "UnsupportedDialectError",
    "ExecutionError",
    "Column",
    "Table",
    "SchemaExtractor",
    "column",
    "embedded",
    "int8",
    "int16",
    "int32",
    "int64",
    "uint",
    "uint8",
    "uint16",
    "uint32",
    "uint64",
    "float32",
    "float64",
    "ColumnNames",
    "ConnectionConfig",
    "Dialect",
    "PostgreSQLDialect",
    "MySQLDialect",
    "SQLiteDialect",
    "get_dialect",
    "ALL_COLUMNS",
    "ExistsCheck",
    "StatementBuilder",
    "StatementCache",
    "StatementHolder",
    "create_table_sql",
    "SQLAlchemyExecutor",
    "StatementExecutor",
    "create_tables",
]

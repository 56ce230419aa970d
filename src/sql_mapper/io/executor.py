"""
Execution collaborator for generated statements.

The core only renders SQL text. Running it happens on a connection the
caller owns: the caller opens it, manages its pool and commits or rolls
back. ``SQLAlchemyExecutor`` adapts a SQLAlchemy Connection, whose ``text()``
constructs bind ``:name`` placeholders natively.

Example:
    >>> from sqlalchemy import create_engine
    >>> engine = create_engine("sqlite://")
    >>> with engine.begin() as conn:
    ...     executor = SQLAlchemyExecutor(conn)
    ...     create_tables(executor, builder, User)
    ...     executor.execute(builder.insert(User), builder.table(User).bind(user))
"""

from typing import Any, List, Mapping, Optional, Protocol, Sequence, Union

from sqlalchemy import Connection, text

from sql_mapper.exceptions import ExecutionError
from sql_mapper.infrastructure.sql.operations.builder import StatementBuilder
from sql_mapper.infrastructure.sql.operations.ddl import create_table_sql
from sql_mapper.utils.logging import bind_context

Params = Union[Mapping[str, Any], Sequence[Mapping[str, Any]]]


class StatementExecutor(Protocol):
    """Runs one statement and reports the affected row count."""

    def execute(self, sql: str, params: Optional[Params] = None) -> int: ...


class SQLAlchemyExecutor:
    """StatementExecutor backed by a SQLAlchemy Connection."""

    def __init__(self, connection: Connection) -> None:
        """
        Args:
            connection: SQLAlchemy Connection. Caller owns transaction lifecycle.
        """
        self.connection = connection

    def execute(self, sql: str, params: Optional[Params] = None) -> int:
        """
        Execute a statement.

        Without params the text goes to the driver untouched, so literals in
        DDL (``DEFAULT 'a:b'``) are never mistaken for bind parameters.
        A sequence of mappings runs as executemany.
        """
        if params is None:
            result = self.connection.exec_driver_sql(sql)
        elif isinstance(params, Mapping):
            result = self.connection.execute(text(sql), dict(params))
        else:
            result = self.connection.execute(text(sql), [dict(p) for p in params])
        return result.rowcount


def create_tables(
    executor: StatementExecutor, builder: StatementBuilder, *models: Any
) -> List[str]:
    """
    Create the tables for ``models`` in order.

    Returns:
        Names of the tables whose DDL was executed

    Raises:
        ExecutionError: If the executor fails, wrapping the original error
            with the table name
    """
    created: List[str] = []
    for model in models:
        table = builder.table(model)
        log = bind_context(table=table.name, dialect=builder.dialect.name)
        sql = create_table_sql(table, builder.dialect)
        try:
            executor.execute(sql)
        except Exception as exc:
            log.error("ddl.failed", error=str(exc), error_type=type(exc).__name__)
            raise ExecutionError(table.name, exc, sql) from exc
        log.info("ddl.executed", column_count=len(table.columns))
        created.append(table.name)
    return created

"""I/O boundary: hands generated SQL to a caller-owned connection."""

from .executor import SQLAlchemyExecutor, StatementExecutor, create_tables

__all__ = ["SQLAlchemyExecutor", "StatementExecutor", "create_tables"]

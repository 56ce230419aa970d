"""
Statement text memoization.

Generated SQL for a given statement shape never changes, so callers cache it
by an identifier of their choosing. The text is computed outside the lock;
only the check-and-insert is serialized, so concurrent first use may compute
more than once but every caller sees the single stored entry afterwards.
"""

import threading
from typing import Callable, Dict, Generic, Hashable, Optional, TypeVar

from sql_mapper.utils.logging import get_logger

logger = get_logger(__name__)

B = TypeVar("B")


class StatementCache:
    """Statement text keyed by a caller-supplied hashable identifier."""

    def __init__(self) -> None:
        self._statements: Dict[Hashable, str] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._statements)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._statements

    def get(self, key: Hashable, compute: Callable[[], str]) -> str:
        """Return the text stored under ``key``, computing it on first use."""
        sql = self._statements.get(key)
        if sql is not None:
            return sql

        sql = compute()
        with self._lock:
            stored = self._statements.setdefault(key, sql)
        if stored is sql:
            logger.debug("statement.cached", key=repr(key), cache_size=len(self._statements))
        return stored

    def get_indexed(
        self, key: Hashable, index: int, capacity: int, compute: Callable[[], str]
    ) -> str:
        """
        Cache one variant per ``index`` below ``capacity``.

        Indices outside ``[0, capacity)`` are computed on every call and
        never stored.
        """
        if 0 <= index < capacity:
            return self.get((key, index), compute)
        return compute()

    def clear(self) -> None:
        with self._lock:
            self._statements.clear()


class StatementHolder(Generic[B]):
    """A single lazily generated statement, typically a module-level constant.

    Example:
        >>> FIND_USER = StatementHolder()
        >>> FIND_USER.sql(builder, lambda b: b.query(User, ["id"], ["email"]))
        'SELECT id FROM user WHERE email = :email'
    """

    def __init__(self) -> None:
        self._sql: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def computed(self) -> bool:
        return self._sql is not None

    def sql(self, builder: B, build: Callable[[B], str]) -> str:
        if self._sql is not None:
            return self._sql
        sql = build(builder)
        with self._lock:
            if self._sql is None:
                self._sql = sql
            return self._sql


__all__ = ["StatementCache", "StatementHolder"]

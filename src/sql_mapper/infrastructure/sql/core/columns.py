"""
Column-list formatting.

``ColumnNames`` renders an ordered list of column names into SQL fragments.
The traversal is shared; a ``JoinRule`` decides the separator and what each
column contributes, so new statement shapes only need a new rule.

Examples:
    >>> cols = ColumnNames(["name", "email"])
    >>> cols.as_list()
    'name, email'
    >>> cols.named_list()
    ':name, :email'
    >>> cols.named_update()
    'name = :name, email = :email'
    >>> cols.named_cond()
    'name = :name AND email = :email'
    >>> cols.cond("OR", "!=")
    'name != ? OR email != ?'
"""

from dataclasses import dataclass
from typing import Iterable, List, Protocol


class JoinRule(Protocol):
    """How a column list is joined into one SQL fragment."""

    separator: str

    def append(self, parts: List[str], column: str) -> None: ...


@dataclass(frozen=True)
class JoinAsList:
    separator: str = ", "

    def append(self, parts: List[str], column: str) -> None:
        parts.append(column)


@dataclass(frozen=True)
class JoinAsNamedList:
    separator: str = ", "

    def append(self, parts: List[str], column: str) -> None:
        parts.append(f":{column}")


@dataclass(frozen=True)
class JoinAsUpdate:
    separator: str = ", "

    def append(self, parts: List[str], column: str) -> None:
        parts.append(f"{column} = ?")


@dataclass(frozen=True)
class JoinAsNamedUpdate:
    separator: str = ", "

    def append(self, parts: List[str], column: str) -> None:
        parts.append(f"{column} = :{column}")


class JoinAsCond:
    """``col <check> ?`` predicates joined by ``cond``."""

    def __init__(self, cond: str = "AND", check: str = "="):
        self.separator = f" {cond} "
        self.check = check

    def append(self, parts: List[str], column: str) -> None:
        parts.append(f"{column} {self.check} ?")


class JoinAsNamedCond(JoinAsCond):
    """``col <check> :col`` predicates joined by ``cond``."""

    def append(self, parts: List[str], column: str) -> None:
        parts.append(f"{column} {self.check} :{column}")


@dataclass(frozen=True)
class JoinAsPlaceholders:
    separator: str = ", "

    def append(self, parts: List[str], column: str) -> None:
        parts.append("?")


class ColumnNames(list):
    """An ordered list of column names with SQL rendering helpers."""

    def join(self, rule: JoinRule) -> str:
        parts: List[str] = []
        for column in self:
            if parts:
                parts.append(rule.separator)
            rule.append(parts, column)
        return "".join(parts)

    def as_list(self) -> str:
        return self.join(JoinAsList())

    def named_list(self) -> str:
        return self.join(JoinAsNamedList())

    def update(self) -> str:
        return self.join(JoinAsUpdate())

    def named_update(self) -> str:
        return self.join(JoinAsNamedUpdate())

    def cond(self, cond: str = "AND", check: str = "=") -> str:
        return self.join(JoinAsCond(cond, check))

    def named_cond(self, cond: str = "AND", check: str = "=") -> str:
        return self.join(JoinAsNamedCond(cond, check))

    def placeholders(self) -> str:
        return self.join(JoinAsPlaceholders())

    def without(self, columns: Iterable[str]) -> "ColumnNames":
        """Return a copy with the given columns removed, order preserved."""
        excluded = set(columns)
        return ColumnNames(c for c in self if c not in excluded)

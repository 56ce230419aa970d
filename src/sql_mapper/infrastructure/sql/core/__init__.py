"""Core SQL utilities package."""

from .columns import (
    ColumnNames,
    JoinAsCond,
    JoinAsList,
    JoinAsNamedCond,
    JoinAsNamedList,
    JoinAsNamedUpdate,
    JoinAsPlaceholders,
    JoinAsUpdate,
    JoinRule,
)
from .identifier import quote_identifier

__all__ = [
    "quote_identifier",
    "ColumnNames",
    "JoinRule",
    "JoinAsList",
    "JoinAsNamedList",
    "JoinAsUpdate",
    "JoinAsNamedUpdate",
    "JoinAsCond",
    "JoinAsNamedCond",
    "JoinAsPlaceholders",
]

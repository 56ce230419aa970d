"""Shared utilities: structured logging and name mapping."""

from .naming import NameMapper, identity, snake_case

__all__ = ["NameMapper", "identity", "snake_case"]

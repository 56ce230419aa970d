"""Configuration management for sql_mapper.

Usage:
    >>> from sql_mapper.config import get_settings
    >>> settings = get_settings()
    >>> settings.dialect
    'postgresql'
"""

from sql_mapper.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]

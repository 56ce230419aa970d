"""
SQL identifier handling utilities.

Provides quoting of table and column names for DDL output, following the
quoting rules of each supported dialect.
"""

_BACKTICK_DIALECTS = frozenset({"mysql"})


def quote_identifier(name: str, dialect: str = "postgresql") -> str:
    """
    Quote a SQL identifier (table or column name).

    Args:
        name: The identifier to quote
        dialect: Database dialect ("postgresql", "mysql", "sqlite")

    Returns:
        Properly quoted identifier

    Examples:
        >>> quote_identifier("user_account")
        '"user_account"'
        >>> quote_identifier("order", dialect="mysql")
        '`order`'
        >>> quote_identifier('we"ird', dialect="sqlite")
        '"we""ird"'
    """
    if dialect in _BACKTICK_DIALECTS:
        escaped = name.replace("`", "``")
        return f"`{escaped}`"
    # PostgreSQL and SQLite follow the SQL standard
    escaped = name.replace('"', '""')
    return f'"{escaped}"'

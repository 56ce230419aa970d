"""
Name mapping functions for deriving table and column names.

A name mapper is any ``Callable[[str], str]``; SchemaExtractor applies it to
dataclass names and field names. ``snake_case`` is the default.
"""

from typing import Callable

NameMapper = Callable[[str], str]


def snake_case(name: str) -> str:
    """
    Convert a CamelCase name into lower snake_case.

    An underscore is inserted before every uppercase character that follows a
    non-uppercase character, so runs of capitals stay together. Names without
    any uppercase character are returned unchanged.

    Examples:
        >>> snake_case("UserAccount")
        'user_account'
        >>> snake_case("AbcdEEf")
        'abcd_eef'
        >>> snake_case("abcdEEfF")
        'abcd_eef_f'
        >>> snake_case("HTTPServer")
        'httpserver'
    """
    if not any(ch.isupper() for ch in name):
        return name

    parts = []
    prev_upper = False
    for i, ch in enumerate(name):
        is_upper = ch.isupper()
        if is_upper and i != 0 and not prev_upper:
            parts.append("_")
        parts.append(ch.lower() if is_upper else ch)
        prev_upper = is_upper
    return "".join(parts)


def identity(name: str) -> str:
    """Keep names exactly as declared."""
    return name

"""Field declaration helpers and fixed-width logical types.

Dataclass fields are mapped by annotation. Python's ``int``/``float`` carry
no width, so the fixed-width kinds are provided as ``NewType`` aliases:

    >>> from dataclasses import dataclass
    >>> from sql_mapper import column, embedded, int32, uint8
    >>> @dataclass
    ... class Audit:
    ...     created_at: int = 0
    >>> @dataclass
    ... class User:
    ...     id: int32 = column("pk autoincr", default=0)
    ...     age: uint8 = 0
    ...     name: str = column("precision:128 notnull", default="")
    ...     audit: Audit = embedded(Audit)
"""

from dataclasses import MISSING, field
from typing import Any, Dict, NewType

DEFAULT_TAG_KEY = "sqldb"
EMBEDDED_KEY = "sqldb.embedded"

int8 = NewType("int8", int)
int16 = NewType("int16", int)
int32 = NewType("int32", int)
int64 = NewType("int64", int)
uint = NewType("uint", int)
uint8 = NewType("uint8", int)
uint16 = NewType("uint16", int)
uint32 = NewType("uint32", int)
uint64 = NewType("uint64", int)
float32 = NewType("float32", float)
float64 = NewType("float64", float)

LOGICAL_TYPES: Dict[Any, str] = {
    bool: "bool",
    int: "int",
    float: "float64",
    str: "string",
    bytes: "blob",
    bytearray: "blob",
    int8: "int8",
    int16: "int16",
    int32: "int32",
    int64: "int64",
    uint: "uint",
    uint8: "uint8",
    uint16: "uint16",
    uint32: "uint32",
    uint64: "uint64",
    float32: "float32",
    float64: "float64",
}


def column(tag: str, *, key: str = DEFAULT_TAG_KEY, **kwargs: Any) -> Any:
    """Declare a dataclass field carrying a column tag.

    Args:
        tag: Space-separated ``key[:value]`` tokens, e.g. ``"pk col:user_id"``
        key: Metadata key, must match the extractor's ``field_tag``
        **kwargs: Forwarded to ``dataclasses.field``
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[key] = tag
    return field(metadata=metadata, **kwargs)


def embedded(cls: type, **kwargs: Any) -> Any:
    """Declare a field whose dataclass fields are flattened into the parent table."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[EMBEDDED_KEY] = cls
    if kwargs.get("default", MISSING) is MISSING:
        kwargs.setdefault("default_factory", cls)
    return field(metadata=metadata, **kwargs)

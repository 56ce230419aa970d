"""Schema model and extraction: dataclass -> Table."""

from .core import Column, Table
from .extractor import SchemaExtractor, logical_type_of
from .fields import (
    DEFAULT_TAG_KEY,
    column,
    embedded,
    float32,
    float64,
    int8,
    int16,
    int32,
    int64,
    uint,
    uint8,
    uint16,
    uint32,
    uint64,
)

__all__ = [
    "Column",
    "Table",
    "SchemaExtractor",
    "logical_type_of",
    "DEFAULT_TAG_KEY",
    "column",
    "embedded",
    "int8",
    "int16",
    "int32",
    "int64",
    "uint",
    "uint8",
    "uint16",
    "uint32",
    "uint64",
    "float32",
    "float64",
]

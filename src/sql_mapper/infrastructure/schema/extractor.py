"""
Schema extraction from dataclasses.

``SchemaExtractor`` walks the fields of a dataclass once, applies the column
tag grammar, flattens embedded dataclasses and caches the resulting ``Table``
per dataclass type.

Tag grammar (dataclass field metadata under ``field_tag``, default "sqldb"):
space-separated ``key[:value]`` tokens.

    table:<name>      table name for the whole dataclass (last one wins)
    col:<name>        column name, ``col:-`` skips the field
    type:<name>       logical type override (char, text, int32, ...)
    precision:<p>     length for string/char, "precision,scale" for floats
    dbtype:<type>     final database type, overrides type and precision
    pk                primary key (``pk:true`` too)
    autoincr          auto increment
    notnull           NOT NULL
    default:<value>   default value, ``default:-`` disables it
    unique[:<group>]  unique, optionally grouped into a named constraint
    fk:<table>.<col>  foreign key

A metadata value of exactly "-" skips the field as well. Fields whose
annotation cannot be resolved (a name only imported under TYPE_CHECKING,
for instance) are treated like fields of unsupported types and ignored.
"""

from __future__ import annotations

import dataclasses
import sys
import threading
import types
import typing
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from sql_mapper.config import Settings, get_settings
from sql_mapper.exceptions import InvalidStructureError, SqlMapperError, TagError
from sql_mapper.utils.logging import get_logger
from sql_mapper.utils.naming import NameMapper, snake_case

from .core import Column, Table
from .fields import DEFAULT_TAG_KEY, EMBEDDED_KEY, LOGICAL_TYPES

logger = get_logger(__name__)

_REQUIRED_VALUE_KEYS = {
    "type": ("logical_type", "invalid column type"),
    "precision": ("precision", "invalid column precision"),
    "dbtype": ("db_type", "invalid column db type"),
}
_BOOLEAN_KEYS = {
    "pk": "primary_key",
    "autoincr": "autoincrement",
}


@dataclass(frozen=True)
class _FieldRef:
    path: Tuple[str, ...]
    field: dataclasses.Field
    annotation: Any


def _unwrap(annotation: Any) -> Any:
    """Strip ``Annotated`` and ``Optional`` wrappers from an annotation."""
    origin = typing.get_origin(annotation)
    if origin is typing.Annotated:
        return _unwrap(typing.get_args(annotation)[0])
    if origin in (typing.Union, types.UnionType):
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return _unwrap(args[0])
    return annotation


def logical_type_of(annotation: Any) -> Optional[str]:
    """Logical type name for an annotation, or None if it cannot be mapped."""
    try:
        return LOGICAL_TYPES.get(_unwrap(annotation))
    except TypeError:  # unhashable annotation objects
        return None


_UNRESOLVED = object()


def _embedded_class(field: dataclasses.Field) -> Optional[type]:
    """The class recorded by ``embedded(cls)``, needed when the annotation is a string."""
    value = field.metadata.get(EMBEDDED_KEY)
    return value if isinstance(value, type) else None


def _field_hint(cls: type, field: dataclasses.Field) -> Any:
    """Resolve a single field annotation, or ``_UNRESOLVED`` if it names nothing in scope."""
    if not isinstance(field.type, str):
        return field.type
    owner = next(
        (k for k in cls.__mro__ if field.name in k.__dict__.get("__annotations__", {})),
        cls,
    )
    module = sys.modules.get(owner.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    holder = types.SimpleNamespace(__annotations__={field.name: field.type})
    try:
        hints = typing.get_type_hints(holder, globalns, dict(vars(owner)), include_extras=True)
    except (NameError, AttributeError, TypeError, SyntaxError):
        logger.debug(
            "schema.annotation_unresolved",
            model=cls.__name__,
            field=field.name,
            annotation=field.type,
        )
        return _UNRESOLVED
    return hints[field.name]


def _type_hints(cls: type) -> Dict[str, Any]:
    """Field annotations of ``cls``; unresolvable ones are left out, not raised."""
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except (NameError, AttributeError, TypeError, SyntaxError):
        pass
    hints: Dict[str, Any] = {}
    for field in dataclasses.fields(cls):
        hint = _field_hint(cls, field)
        if hint is not _UNRESOLVED:
            hints[field.name] = hint
    return hints


def _tag_bool(value: str) -> bool:
    # bare key or "true" only
    return value in ("", "true")


class SchemaExtractor:
    """
    Derives and caches ``Table`` descriptions from dataclasses.

    The cache is owned by the instance. Concurrent first use of the same
    dataclass may build the table more than once; the build runs outside the
    lock and only the insert is serialized, so the map never sees a partial
    write. Failed extractions are not cached.

    Example:
        >>> extractor = SchemaExtractor(table_prefix="app_")
        >>> table = extractor.extract(UserAccount)
        >>> table.name
        'app_user_account'
    """

    def __init__(
        self,
        *,
        field_tag: str = DEFAULT_TAG_KEY,
        emit_defaults: bool = False,
        not_null_by_default: bool = False,
        table_prefix: str = "",
        name_mapper: NameMapper = snake_case,
    ) -> None:
        """
        Initialize the extractor.

        Args:
            field_tag: Dataclass field metadata key holding column tags
            emit_defaults: Every column gets a DEFAULT clause, and literal
                values from ``default:<value>`` tags are kept
            not_null_by_default: Columns are NOT NULL unless tagged otherwise
            table_prefix: Prefix for table names derived from class names
            name_mapper: Maps class and field names to table and column names
        """
        self.field_tag = field_tag
        self.emit_defaults = emit_defaults
        self.not_null_by_default = not_null_by_default
        self.table_prefix = table_prefix
        self.name_mapper = name_mapper
        self._tables: Dict[type, Table] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "SchemaExtractor":
        settings = settings or get_settings()
        return cls(
            field_tag=settings.field_tag,
            emit_defaults=settings.emit_defaults,
            not_null_by_default=settings.not_null_by_default,
            table_prefix=settings.table_prefix,
        )

    def extract(self, model: Any) -> Table:
        """
        Get the table description for a dataclass or dataclass instance.

        Raises:
            InvalidStructureError: If ``model`` is not a dataclass (instance)
            TagError: If a field tag is malformed
        """
        cls = self._resolve(model)
        table = self._tables.get(cls)
        if table is not None:
            return table

        try:
            table = self._build_table(cls)
        except SqlMapperError as exc:
            logger.warning("schema.extraction_failed", model=cls.__name__, **exc.to_dict())
            raise

        with self._lock:
            self._tables[cls] = table
        logger.debug(
            "schema.extracted",
            model=cls.__name__,
            table=table.name,
            column_count=len(table.columns),
        )
        return table

    @staticmethod
    def _resolve(model: Any) -> type:
        if isinstance(model, type):
            if dataclasses.is_dataclass(model):
                return model
        elif dataclasses.is_dataclass(model):
            return type(model)
        raise InvalidStructureError(model)

    def _build_table(self, cls: type) -> Table:
        name = self.table_prefix + self.name_mapper(cls.__name__)
        columns: List[Column] = []
        seen: Dict[str, str] = {}
        for ref in self._struct_fields(cls, (), []):
            col, table_name = self._parse_column(ref)
            if table_name is not None:
                name = table_name
            if col is None:
                continue
            if col.name in seen:
                raise TagError(
                    ref.field.name,
                    "col",
                    col.name,
                    f"duplicate column name '{col.name}' (also used by '{seen[col.name]}')",
                )
            seen[col.name] = ref.field.name
            columns.append(col)
        return Table(name=name, columns=tuple(columns), model=cls)

    def _should_ignore(self, field: dataclasses.Field, annotation: Any) -> bool:
        if field.metadata.get(self.field_tag) == "-":
            return True
        base = _unwrap(annotation)
        if isinstance(base, type) and dataclasses.is_dataclass(base):
            # named dataclass fields are not mapped, only embedded ones
            return not field.metadata.get(EMBEDDED_KEY)
        if logical_type_of(base) is None:
            return True
        return field.name.startswith("_")

    def _struct_fields(
        self, cls: type, parent_path: Tuple[str, ...], accepted: List[_FieldRef]
    ) -> List[_FieldRef]:
        """Collect mappable fields: own fields first, then embedded ones depth-first.

        A field whose name was already accepted is dropped, so shallower
        declarations shadow embedded ones.
        """
        hints = _type_hints(cls)
        embedded: List[Tuple[dataclasses.Field, type]] = []
        for field in dataclasses.fields(cls):
            annotation = _embedded_class(field)
            if annotation is None:
                annotation = hints.get(field.name, _UNRESOLVED)
            if self._should_ignore(field, annotation):
                continue
            base = _unwrap(annotation)
            if isinstance(base, type) and dataclasses.is_dataclass(base):
                embedded.append((field, base))
            elif not any(ref.field.name == field.name for ref in accepted):
                accepted.append(_FieldRef(parent_path + (field.name,), field, annotation))

        for field, base in embedded:
            self._struct_fields(base, parent_path + (field.name,), accepted)
        return accepted

    def _parse_column(self, ref: _FieldRef) -> Tuple[Optional[Column], Optional[str]]:
        """Apply the field's tag; returns (column or None if skipped, table name)."""
        field = ref.field
        attrs: Dict[str, Any] = {
            "name": self.name_mapper(field.name),
            "logical_type": logical_type_of(ref.annotation),
            "nullable": not self.not_null_by_default,
            "has_default": self.emit_defaults,
            "field_path": ref.path,
        }
        table_name: Optional[str] = None

        tag = str(field.metadata.get(self.field_tag, "")).strip()
        for token in tag.split():
            key, _, value = token.partition(":")
            if key == "table":
                if not value:
                    raise TagError(field.name, key, value, "invalid table name")
                table_name = value
            elif key == "col":
                if value == "":
                    raise TagError(field.name, key, value, "invalid column name")
                if value == "-":
                    return None, table_name
                attrs["name"] = value
            elif key in _REQUIRED_VALUE_KEYS:
                attr, message = _REQUIRED_VALUE_KEYS[key]
                if value == "":
                    raise TagError(field.name, key, value, f"{message}: {attrs['name']}")
                attrs[attr] = value
            elif key in _BOOLEAN_KEYS:
                attrs[_BOOLEAN_KEYS[key]] = _tag_bool(value)
            elif key == "notnull":
                attrs["nullable"] = not _tag_bool(value)
            elif key == "default":
                attrs["has_default"] = value != "-"
                if self.emit_defaults and value != "-":
                    attrs["default"] = value
            elif key == "unique":
                attrs["unique"] = True
                attrs["unique_group"] = value
            elif key == "fk":
                foreign_table, sep, foreign_column = value.partition(".")
                if not sep or not foreign_table or not foreign_column:
                    raise TagError(field.name, key, value, f"invalid foreign key: {value}")
                attrs["foreign_table"] = foreign_table
                attrs["foreign_column"] = foreign_column
            else:
                raise TagError(field.name, key, value, f"unsupported tag: {key}")

        return Column(**attrs), table_name

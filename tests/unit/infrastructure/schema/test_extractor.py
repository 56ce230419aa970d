"""
Unit tests for SchemaExtractor: field walking, tag grammar and caching.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import pytest

from sql_mapper import (
    Column,
    InvalidStructureError,
    SchemaExtractor,
    Table,
    TagError,
    column,
    embedded,
)
from sql_mapper.utils.naming import identity
from tests.fixtures.models import (
    Account,
    AllSkipped,
    Article,
    Customer,
    Document,
    Model,
    Timestamps,
)
from tests.fixtures.postponed import Priced, make_local_document

pytestmark = pytest.mark.unit


@dataclass
class BadFk:
    owner: int = column("fk:users", default=0)


@dataclass
class EmptyFkColumn:
    owner: int = column("fk:users.", default=0)


@dataclass
class EmptyFkTable:
    owner: int = column("fk:.id", default=0)


@dataclass
class UnknownTag:
    name: str = column("index", default="")


@dataclass
class EmptyType:
    name: str = column("type:", default="")


@dataclass
class EmptyPrecision:
    name: str = column("precision:", default="")


@dataclass
class EmptyDbType:
    name: str = column("dbtype:", default="")


@dataclass
class EmptyColumnName:
    name: str = column("col:", default="")


@dataclass
class DuplicateColumn:
    first: str = column("col:name", default="")
    second: str = column("col:name", default="")


@dataclass
class BooleanFlags:
    a: int = column("pk:true autoincr:true", default=0)
    b: int = column("pk:yes autoincr:1", default=0)
    c: str = column("notnull:false", default="")
    d: str = column("notnull:true", default="")


@dataclass
class CustomTag:
    id: int = column("pk", key="db", default=0)
    name: str = column("col:label", key="db", default="")


@dataclass
class Shadowed:
    updated_at: str = column("col:modified", default="")
    stamps: Timestamps = embedded(Timestamps)


@dataclass
class UserAccount:
    user_id: int = 0


@dataclass
class Audited:
    id: int = column("pk", default=0)
    _audit: Timestamps = embedded(Timestamps)
    _note: str = ""


class TestExtractInput:
    """Accepted and rejected inputs."""

    def test_accepts_class_and_instance(self, extractor):
        """A dataclass and one of its instances resolve to the same table."""
        assert extractor.extract(Model) is extractor.extract(Model())

    @pytest.mark.parametrize("value", [1, "model", object(), int, {"id": 1}])
    def test_rejects_non_dataclass(self, extractor, value):
        """Anything but a dataclass (instance) is an invalid structure."""
        with pytest.raises(InvalidStructureError) as exc_info:
            extractor.extract(value)
        assert "expected a dataclass" in str(exc_info.value)
        assert isinstance(exc_info.value, TypeError)


class TestFieldWalking:
    """Which fields become columns and in which order."""

    def test_simple_model(self, extractor):
        table = extractor.extract(Model)
        assert table.name == "model"
        assert table.column_names() == ["id", "name", "email", "password"]
        assert table.column("id").primary_key is True
        assert table.column("id").logical_type == "string"

    def test_ignored_fields_and_logical_types(self, extractor):
        """Named dataclasses, unsupported types, private and skipped fields are ignored."""
        table = extractor.extract(Customer)

        assert table.name == "customer"
        assert table.column_names() == [
            "customer_id",
            "full_name",
            "avatar",
            "score",
            "level",
            "ratio",
            "port",
            "active",
        ]
        types = {c.name: c.logical_type for c in table.columns}
        assert types == {
            "customer_id": "int",
            "full_name": "string",
            "avatar": "blob",
            "score": "float64",
            "level": "int8",
            "ratio": "float32",
            "port": "uint16",
            "active": "bool",
        }

    def test_embedded_fields_follow_own_fields(self, extractor):
        """Embedded fields are spliced after the parent's own fields, depth-first."""
        table = extractor.extract(Document)
        assert table.column_names() == [
            "id",
            "title",
            "created_at",
            "owner_id",
            "owner_name",
            "updated_at",
        ]

    def test_shallow_field_overrides_embedded(self, extractor):
        """A directly declared field shadows an embedded field of the same name."""
        table = extractor.extract(Document)
        created = [c for c in table.columns if c.name == "created_at"]
        assert len(created) == 1
        assert created[0].nullable is False
        assert created[0].field_path == ("created_at",)

    def test_shadowing_uses_field_name_not_column_name(self, extractor):
        """The shallow field keeps its own configuration, including its rename."""
        table = extractor.extract(Shadowed)
        assert table.column_names() == ["modified", "created_at"]

    def test_field_path_through_embedding(self, extractor):
        table = extractor.extract(Document)
        assert table.column("updated_at").field_path == ("owner", "stamps", "updated_at")
        assert table.column("owner_name").field_path == ("owner", "name")

    def test_private_embedded_field_is_flattened(self, extractor):
        """The underscore rule applies to scalar fields, not embedded dataclasses."""
        table = extractor.extract(Audited)
        assert table.column_names() == ["id", "created_at", "updated_at"]
        assert table.column("created_at").field_path == ("_audit", "created_at")
        assert table.bind(Audited(id=1)) == {"id": 1, "created_at": 0, "updated_at": 0}

    def test_unresolvable_annotation_is_ignored(self, extractor):
        """A name only imported under TYPE_CHECKING drops the field, not the table."""
        table = extractor.extract(Priced)
        assert table.column_names() == ["id", "label"]
        assert table.column("id").logical_type == "int32"
        assert table.column("label").logical_type == "string"

    def test_local_embedded_class_with_string_annotations(self, extractor):
        """embedded(cls) supplies the class when its annotation cannot be resolved."""
        local_doc = make_local_document()
        table = extractor.extract(local_doc)
        assert table.name == "local_doc"
        assert table.column_names() == ["id", "created_at"]
        assert table.column("created_at").field_path == ("stamps", "created_at")

    def test_all_fields_skipped(self, extractor):
        """Skipping every field yields an empty table without error."""
        table = extractor.extract(AllSkipped)
        assert table.columns == ()
        assert table.name == "all_skipped"


class TestTagGrammar:
    """Column tags and their validation."""

    def test_table_tag_sets_table_name(self, extractor):
        assert extractor.extract(Account).name == "accounts"

    def test_unique_groups_and_foreign_key(self, extractor):
        table = extractor.extract(Account)

        assert table.column("login").unique_group == "uq_login_realm"
        assert table.column("realm").unique_group == "uq_login_realm"
        assert table.column("email").unique is True
        assert table.column("email").unique_group == ""
        owner = table.column("owner_id")
        assert (owner.foreign_table, owner.foreign_column) == ("users", "id")

    def test_type_precision_dbtype(self, extractor):
        table = extractor.extract(Article)

        assert table.column("body").logical_type == "text"
        assert table.column("code").logical_type == "char"
        assert table.column("code").precision == "8"
        assert table.column("price").precision == "10,2"
        assert table.column("payload").db_type == "JSONB"
        assert table.column("id").autoincrement is True

    def test_boolean_convention(self, extractor):
        """Bare key or ``true`` is true; any other explicit value is false."""
        table = extractor.extract(BooleanFlags)

        assert table.column("a").primary_key is True
        assert table.column("a").autoincrement is True
        assert table.column("b").primary_key is False
        assert table.column("b").autoincrement is False
        assert table.column("c").nullable is True
        assert table.column("d").nullable is False

    def test_default_literal_dropped_without_emit_defaults(self, extractor):
        table = extractor.extract(Article)

        assert table.column("status").has_default is True
        assert table.column("status").default == ""
        assert table.column("views").has_default is False
        assert table.column("body").has_default is False

    def test_default_literal_kept_with_emit_defaults(self):
        table = SchemaExtractor(emit_defaults=True).extract(Article)

        assert table.column("status").has_default is True
        assert table.column("status").default == "draft"
        assert table.column("views").has_default is False
        assert table.column("body").has_default is True

    def test_not_null_by_default(self):
        table = SchemaExtractor(not_null_by_default=True).extract(Model)
        assert all(not c.nullable for c in table.columns)

    @pytest.mark.parametrize("model", [BadFk, EmptyFkColumn, EmptyFkTable])
    def test_invalid_foreign_key(self, extractor, model):
        with pytest.raises(TagError) as exc_info:
            extractor.extract(model)
        assert "invalid foreign key" in str(exc_info.value)
        assert exc_info.value.key == "fk"

    def test_unsupported_tag(self, extractor):
        with pytest.raises(TagError) as exc_info:
            extractor.extract(UnknownTag)
        assert "unsupported tag: index" in str(exc_info.value)
        assert exc_info.value.to_dict()["field"] == "name"

    @pytest.mark.parametrize(
        "model, message",
        [
            (EmptyType, "invalid column type"),
            (EmptyPrecision, "invalid column precision"),
            (EmptyDbType, "invalid column db type"),
            (EmptyColumnName, "invalid column name"),
        ],
    )
    def test_empty_required_values(self, extractor, model, message):
        with pytest.raises(TagError, match=message):
            extractor.extract(model)

    def test_duplicate_column_name(self, extractor):
        with pytest.raises(TagError, match="duplicate column name 'name'"):
            extractor.extract(DuplicateColumn)

    def test_custom_tag_key(self):
        table = SchemaExtractor(field_tag="db").extract(CustomTag)
        assert table.column_names() == ["id", "label"]
        assert table.column("id").primary_key is True


class TestNaming:
    def test_table_prefix(self):
        table = SchemaExtractor(table_prefix="app_").extract(UserAccount)
        assert table.name == "app_user_account"

    def test_table_tag_ignores_prefix(self):
        assert SchemaExtractor(table_prefix="app_").extract(Account).name == "accounts"

    def test_custom_name_mapper(self):
        table = SchemaExtractor(name_mapper=identity).extract(Customer)
        assert table.name == "Customer"
        assert table.column_names()[:2] == ["CustomerID", "FullName"]


class TestCaching:
    """Per-instance, per-type caching."""

    def test_idempotent_and_built_once(self, extractor, monkeypatch):
        calls = []
        original = extractor._build_table

        def counting(cls):
            calls.append(cls)
            return original(cls)

        monkeypatch.setattr(extractor, "_build_table", counting)

        first = extractor.extract(Document)
        second = extractor.extract(Document())
        assert first == second
        assert calls == [Document]

    def test_instances_have_independent_caches(self):
        a, b = SchemaExtractor(), SchemaExtractor(table_prefix="x_")
        assert a.extract(Model).name == "model"
        assert b.extract(Model).name == "x_model"

    def test_failed_extraction_not_cached(self, extractor, monkeypatch):
        original = extractor._build_table
        attempts = []

        def flaky(cls):
            attempts.append(cls)
            if len(attempts) == 1:
                raise TagError("id", "pk", "", "transient")
            return original(cls)

        monkeypatch.setattr(extractor, "_build_table", flaky)

        with pytest.raises(TagError):
            extractor.extract(Model)
        assert extractor.extract(Model).name == "model"
        assert len(attempts) == 2

    def test_concurrent_first_use(self, extractor):
        """Concurrent first lookups all observe an equal, consistently cached table."""
        models = [Model, Document, Account, Customer] * 16
        with ThreadPoolExecutor(max_workers=8) as pool:
            tables = list(pool.map(extractor.extract, models))

        for model, table in zip(models, tables):
            assert isinstance(table, Table)
            assert table == extractor.extract(model)
        assert set(extractor._tables) == {Model, Document, Account, Customer}


def test_column_equality_ignores_field_path():
    a = Column(name="id", logical_type="int", field_path=("id",))
    b = Column(name="id", logical_type="int", field_path=("inner", "id"))
    assert a == b


def test_bind_reads_embedded_values(extractor):
    doc = Document(id=7, title="t")
    doc.owner.stamps.updated_at = 42
    params = extractor.extract(Document).bind(doc)
    assert params == {
        "id": 7,
        "title": "t",
        "created_at": 0,
        "owner_id": 0,
        "owner_name": "",
        "updated_at": 42,
    }

"""
Unit tests for CREATE TABLE generation.
"""

import pytest

from sql_mapper import (
    Column,
    SchemaExtractor,
    Table,
    UnsupportedTypeError,
    create_table_sql,
)
from tests.fixtures.models import Account, Article, Document

pytestmark = pytest.mark.unit


class TestCreateTableSQL:
    def test_constraint_clauses(self, extractor, postgres):
        """One PRIMARY KEY, one grouped UNIQUE, one FOREIGN KEY, no trailing comma."""
        sql = create_table_sql(extractor.extract(Account), postgres)

        assert sql == (
            'CREATE TABLE IF NOT EXISTS "accounts" (\n'
            '    "id" BIGINT,\n'
            '    "login" VARCHAR(64),\n'
            '    "realm" VARCHAR(64),\n'
            '    "email" VARCHAR(64) UNIQUE,\n'
            '    "owner_id" BIGINT,\n'
            '    PRIMARY KEY ("id"),\n'
            '    CONSTRAINT uq_login_realm UNIQUE ("login", "realm"),\n'
            '    FOREIGN KEY("owner_id") REFERENCES users(id)\n'
            ");"
        )
        assert sql.count("PRIMARY KEY") == 1
        assert sql.count("CONSTRAINT") == 1
        assert sql.count("FOREIGN KEY") == 1
        assert ",\n);" not in sql

    def test_types_overrides_and_defaults(self, extractor, postgres):
        sql = create_table_sql(extractor.extract(Article), postgres)

        assert '"id" BIGINT GENERATED BY DEFAULT AS IDENTITY,' in sql
        assert '"body" TEXT,' in sql
        assert '"code" CHAR(8),' in sql
        assert '"price" NUMERIC(10,2),' in sql
        assert '"payload" JSONB,' in sql
        assert "\"status\" VARCHAR(64) DEFAULT '',\n" in sql
        assert '"views" BIGINT,' in sql
        assert sql.endswith('    PRIMARY KEY ("id")\n);')

    def test_emit_defaults(self, postgres):
        table = SchemaExtractor(emit_defaults=True).extract(Article)
        sql = create_table_sql(table, postgres)

        assert "\"status\" VARCHAR(64) DEFAULT 'draft'," in sql
        assert "\"body\" TEXT DEFAULT ''," in sql
        assert '"views" BIGINT,' in sql
        # identity columns carry no DEFAULT
        assert '"id" BIGINT GENERATED BY DEFAULT AS IDENTITY,' in sql

    def test_not_null(self, extractor, mysql):
        sql = create_table_sql(extractor.extract(Document), mysql)

        assert "`id` INT AUTO_INCREMENT," in sql
        assert "`title` VARCHAR(200) NOT NULL," in sql
        assert "`created_at` BIGINT NOT NULL," in sql
        assert sql.startswith("CREATE TABLE IF NOT EXISTS `document` (\n")

    def test_multiple_unique_groups_in_first_seen_order(self, postgres):
        table = Table(
            name="t",
            columns=(
                Column("a", "int", unique=True, unique_group="uq_b"),
                Column("b", "int", unique=True, unique_group="uq_a"),
                Column("c", "int", unique=True, unique_group="uq_b"),
            ),
        )
        sql = create_table_sql(table, postgres)
        assert (
            '    CONSTRAINT uq_b UNIQUE ("a", "c"),\n'
            '    CONSTRAINT uq_a UNIQUE ("b")\n'
        ) in sql

    def test_composite_primary_key(self, sqlite):
        table = Table(
            name="pairs",
            columns=(
                Column("left_id", "int64", primary_key=True),
                Column("right_id", "int64", primary_key=True),
            ),
        )
        sql = create_table_sql(table, sqlite)
        assert sql.endswith('    PRIMARY KEY ("left_id", "right_id")\n);')

    def test_unsupported_type(self, postgres):
        table = Table(name="t", columns=(Column("v", "uuid"),))
        with pytest.raises(UnsupportedTypeError):
            create_table_sql(table, postgres)

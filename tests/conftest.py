"""Shared pytest fixtures for sql_mapper tests."""

from __future__ import annotations

from typing import Generator

import pytest
from sqlalchemy import Connection, create_engine

from sql_mapper import (
    MySQLDialect,
    PostgreSQLDialect,
    SchemaExtractor,
    SQLiteDialect,
    StatementBuilder,
)
from sql_mapper.config import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings() -> Generator[None, None, None]:
    """Settings are lru_cached; tests that patch the environment need a clean cache."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def extractor() -> SchemaExtractor:
    return SchemaExtractor()


@pytest.fixture
def postgres() -> PostgreSQLDialect:
    return PostgreSQLDialect()


@pytest.fixture
def mysql() -> MySQLDialect:
    return MySQLDialect()


@pytest.fixture
def sqlite() -> SQLiteDialect:
    return SQLiteDialect()


@pytest.fixture
def builder(extractor: SchemaExtractor, postgres: PostgreSQLDialect) -> StatementBuilder:
    return StatementBuilder(extractor, postgres)


@pytest.fixture
def sqlite_connection() -> Generator[Connection, None, None]:
    """In-memory SQLite connection inside a transaction rolled back afterwards."""
    engine = create_engine("sqlite://")
    with engine.connect() as conn:
        trans = conn.begin()
        yield conn
        trans.rollback()
    engine.dispose()

"""
Configuration management for sql_mapper.

Settings are read from environment variables using Pydantic BaseSettings.
Every field except LOG_LEVEL is read with the SQLMAPPER_ prefix, for example
SQLMAPPER_DIALECT=mysql or SQLMAPPER_EMIT_DEFAULTS=true.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Schema extraction and statement generation settings.

    These values seed a SchemaExtractor and a StatementBuilder through their
    ``from_settings`` constructors. Applications that build those objects by
    hand never need to instantiate this class.
    """

    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level (uppercase)",
    )

    dialect: Literal["postgresql", "mysql", "sqlite"] = Field(
        default="postgresql", description="Target SQL dialect"
    )
    field_tag: str = Field(
        default="sqldb", description="Dataclass field metadata key holding column tags"
    )
    emit_defaults: bool = Field(
        default=False,
        description="Give every column a DEFAULT clause and keep tag default literals",
    )
    not_null_by_default: bool = Field(
        default=False, description="Columns are NOT NULL unless tagged otherwise"
    )
    table_prefix: str = Field(
        default="", description="Prefix prepended to derived table names"
    )

    model_config = SettingsConfigDict(
        env_prefix="SQLMAPPER_",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance loaded from the environment
    """
    return Settings()

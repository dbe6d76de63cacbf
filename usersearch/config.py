"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import AnyHttpUrl, BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MAX_PAGE_SIZE = 25


class ServerSettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = Field(default=8080, ge=1, le=65535)
    dataset_path: Path = Field(
        default=Path("dataset.xml"),
        description="XML file with <row> elements loaded once on first request.",
    )
    access_token: SecretStr | None = Field(
        default=None,
        description="Bearer token required from clients; unset disables the check.",
    )
    @field_validator("access_token", mode="before")
    @classmethod
    def _empty_token_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ClientSettings(BaseModel):
    url: AnyHttpUrl = Field(default="http://127.0.0.1:8080/search")
    access_token: SecretStr | None = None
    timeout_seconds: float = Field(default=1.0, gt=0, le=60)
    max_page_size: int = Field(default=DEFAULT_MAX_PAGE_SIZE, ge=1)

    @field_validator("access_token", mode="before")
    @classmethod
    def _empty_token_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class SearchSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="USERSEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    environment: Literal["dev", "staging", "prod"] = "dev"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    server: ServerSettings = Field(default_factory=ServerSettings)
    client: ClientSettings = Field(default_factory=ClientSettings)


@lru_cache
def get_settings() -> SearchSettings:
    """Return cached settings instance."""

    return SearchSettings()


__all__ = [
    "ClientSettings",
    "DEFAULT_MAX_PAGE_SIZE",
    "SearchSettings",
    "ServerSettings",
    "get_settings",
]

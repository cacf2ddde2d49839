"""Runtime configuration based on environment variables."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal

from pydantic import AnyHttpUrl, BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SearchApiSettings(BaseModel):
    base_url: AnyHttpUrl = Field(
        default="https://hn.algolia.com/api/v1",
        description="Root of the Algolia Hacker News search API.",
    )
    request_timeout_seconds: int = Field(default=10, ge=1, le=60)
    encode_query: bool = Field(
        default=False,
        description="Percent-encode the search term instead of inserting it verbatim.",
    )
    retry_attempts: int = Field(default=1, ge=1, le=5)
    retry_base_delay: float = Field(default=0.5, ge=0)

    def search_base(self) -> str:
        return str(self.base_url).rstrip("/")


class RenderSettings(BaseModel):
    max_items: int = Field(default=20, ge=1, le=100)
    show_urls: bool = True


class RequestLimitSettings(BaseModel):
    max_requests: int = Field(default=5, ge=0)
    interval_seconds: int = Field(default=10, ge=1)


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="HNSEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    environment: Literal["dev", "staging", "prod"] = "dev"
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"
    telegram_token: SecretStr | None = None
    telegram_proxy: str | None = None
    default_query: str = "tampa"
    default_filter: str = ""
    max_sessions: int = Field(default=1000, ge=1)

    search_api: SearchApiSettings = Field(default_factory=SearchApiSettings)
    render: RenderSettings = Field(default_factory=RenderSettings)
    request_limit: RequestLimitSettings = Field(default_factory=RequestLimitSettings)

    @field_validator("telegram_token", "telegram_proxy", mode="before")
    @classmethod
    def _empty_str_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)


@lru_cache
def get_settings() -> AppSettings:
    """Return cached settings instance."""

    return AppSettings()


__all__ = [
    "AppSettings",
    "RenderSettings",
    "RequestLimitSettings",
    "SearchApiSettings",
    "get_settings",
]

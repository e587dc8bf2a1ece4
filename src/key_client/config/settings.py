from __future__ import annotations

from functools import lru_cache

import httpx
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from key_client.client import Config


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file='.env',
        env_prefix='KEY_CLIENT_',
        extra='ignore',
    )

    base_url: str | None = None
    auth_token: str | None = None
    user_agent: str | None = None
    timeout_seconds: float = 10.0
    log_level: str = 'INFO'

    @field_validator('base_url', 'auth_token', 'user_agent', mode='before')
    @classmethod
    def _blank_as_unset(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator('timeout_seconds')
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError('timeout_seconds must be positive')
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def load_config(settings: Settings | None = None) -> Config:
    """Build a client Config from environment-backed settings."""

    settings = settings or get_settings()
    return Config(
        base_url=settings.base_url,
        auth_token=settings.auth_token,
        user_agent=settings.user_agent,
        http_client=httpx.Client(timeout=settings.timeout_seconds),
    )


__all__ = ["Settings", "get_settings", "load_config"]

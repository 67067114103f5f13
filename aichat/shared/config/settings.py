# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

_INSECURE_SECRETS = ("dev", "development", "test", "")

_ENV = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    validate_by_name=True,
    extra="ignore",
)


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///aichat.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = _ENV


class SecurityConfig(BaseSettings):
    # Session cookie
    cookie_name: str = Field("sid", alias="SESSION_COOKIE_NAME")
    cookie_samesite: str = Field("Lax", alias="SESSION_COOKIE_SAMESITE")
    session_lifetime: int = Field(60 * 60 * 24, ge=1, alias="SESSION_LIFETIME")
    session_backend: Literal["database", "memory"] = Field(
        "database", alias="SESSION_BACKEND"
    )

    # Password hashing
    bcrypt_rounds: int = Field(10, ge=4, le=31, alias="BCRYPT_ROUNDS")

    # CORS
    allowed_origins: Annotated[list[str], NoDecode] = Field(
        ["https://ai-chat-lake-beta.vercel.app"], alias="ALLOWED_ORIGINS"
    )

    model_config = _ENV

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    secret_key: str = Field("dev", alias="SESSION_SECRET")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(3001, ge=1, le=65535, alias="PORT")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)

    model_config = _ENV

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if self.is_production() and self.secret_key in _INSECURE_SECRETS:
            raise ValueError(
                "SESSION_SECRET must be a strong random value in production"
            )
        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")

    @property
    def cookie_secure(self) -> bool:
        # Secure cookies follow the deployment mode only.
        return self.is_production()


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = ["AppConfig", "DatabaseConfig", "SecurityConfig", "load_config"]

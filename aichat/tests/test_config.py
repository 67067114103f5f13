from __future__ import annotations

import pytest
from pydantic import ValidationError

from aichat.shared.config import AppConfig, SecurityConfig

_ENV_KEYS = (
    "APP_ENV",
    "SESSION_SECRET",
    "PORT",
    "DATABASE_URL",
    "ALLOWED_ORIGINS",
    "SESSION_BACKEND",
    "BCRYPT_ROUNDS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    config = AppConfig()

    assert config.port == 3001
    assert config.is_production() is False
    assert config.cookie_secure is False
    assert config.database.url == "sqlite:///aichat.db"
    assert config.security.cookie_name == "sid"
    assert config.security.session_lifetime == 86400
    assert config.security.bcrypt_rounds == 10
    assert config.security.allowed_origins == ["https://ai-chat-lake-beta.vercel.app"]


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///other.db")
    monkeypatch.setenv("SESSION_BACKEND", "memory")

    config = AppConfig()

    assert config.port == 8080
    assert config.database.url == "sqlite:///other.db"
    assert config.security.session_backend == "memory"


def test_allowed_origins_from_comma_separated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example ,")

    assert SecurityConfig().allowed_origins == ["https://a.example", "https://b.example"]


@pytest.mark.parametrize("secret", ["dev", "test", ""])
def test_production_rejects_insecure_secret(secret: str) -> None:
    with pytest.raises(ValidationError):
        AppConfig(APP_ENV="production", SESSION_SECRET=secret)


def test_production_enables_secure_cookie() -> None:
    config = AppConfig(APP_ENV="production", SESSION_SECRET="a-long-production-secret")

    assert config.is_production() is True
    assert config.cookie_secure is True


def test_unknown_session_backend_is_rejected() -> None:
    with pytest.raises(ValidationError):
        SecurityConfig(SESSION_BACKEND="redis")

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from aichat.infrastructure.db import Database
from aichat.shared.config import AppConfig, DatabaseConfig, SecurityConfig


@pytest.fixture(autouse=True)
def isolated_log_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "app.log"))


@pytest.fixture()
def make_config(tmp_path: Path) -> Callable[..., AppConfig]:
    def _make(app_env: str = "test", secret: str = "test-secret", **security: object) -> AppConfig:
        return AppConfig(
            APP_ENV=app_env,
            SESSION_SECRET=secret,
            database=DatabaseConfig(DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}"),
            security=SecurityConfig(**{"BCRYPT_ROUNDS": 4, **security}),
        )

    return _make


@pytest.fixture()
def config(make_config: Callable[..., AppConfig]) -> AppConfig:
    return make_config()


@pytest.fixture()
def database(config: AppConfig) -> Iterator[Database]:
    db = Database(config.database)
    db.init_schema()
    yield db
    db.drop_schema()
    db.dispose()

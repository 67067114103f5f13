# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from aichat.shared.config import DatabaseConfig
from aichat.shared.logging import logger


class Base(DeclarativeBase):
    pass


def create_db_engine(config: DatabaseConfig) -> Engine:
    url = make_url(config.url)
    kwargs: dict[str, Any] = {"echo": False, "pool_pre_ping": True}

    if url.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {
            "check_same_thread": False,
            "timeout": int(config.pool_timeout),
        }
        if url.database in (None, "", ":memory:"):
            # One shared connection, otherwise every checkout sees an empty db.
            kwargs["poolclass"] = StaticPool
            return create_engine(url, **kwargs)

    kwargs.update(
        pool_size=config.pool_size,
        max_overflow=config.max_overflow,
        pool_timeout=config.pool_timeout,
    )
    return create_engine(url, **kwargs)


class Database:
    """Engine plus session factory, built once per application."""

    def __init__(self, config: DatabaseConfig) -> None:
        self.engine = create_db_engine(config)
        self.session_factory = sessionmaker(
            bind=self.engine, autoflush=False, autocommit=False, expire_on_commit=False
        )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        session = self.session_factory()
        logger.debug("db.session: opened session")
        try:
            yield session
            session.commit()
            logger.debug("db.session: committed session")
        except Exception as exc:
            logger.warning(f"db.session: rolling back after {type(exc).__name__}")
            session.rollback()
            raise
        finally:
            session.close()
            logger.debug("db.session: closed session")

    def init_schema(self) -> None:
        from aichat.infrastructure.db import models  # noqa: F401 (registers tables)

        Base.metadata.create_all(bind=self.engine)
        logger.info("Database schema ensured")

    def drop_schema(self) -> None:
        Base.metadata.drop_all(bind=self.engine)

    def ping(self) -> bool:
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True

    def dispose(self) -> None:
        self.engine.dispose()

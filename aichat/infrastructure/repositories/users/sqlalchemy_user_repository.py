# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError

from aichat.domain.users.entities import Session as DomainSession
from aichat.domain.users.entities import User as DomainUser
from aichat.domain.users.entities import normalize_email
from aichat.domain.users.exceptions import InsufficientCreditsError, UserAlreadyExistsError
from aichat.domain.users.repositories import SessionRepository, UserRepository
from aichat.infrastructure.db.models import SessionRecord, User
from aichat.infrastructure.db.session import Database
from aichat.shared.logging import logger


def _aware(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _to_domain_user(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        email=row.email,
        password_hash=row.password_hash,
        credits=row.credits,
        is_premium=row.is_premium,
        created_at=_aware(row.created_at),
    )


def _to_domain_session(row: SessionRecord) -> DomainSession:
    return DomainSession(
        session_id=row.session_id,
        user_id=row.user_id,
        created_at=_aware(row.created_at),
        expires_at=_aware(row.expires_at),
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, database: Database) -> None:
        self._db = database

    def find_by_email(self, email: str) -> DomainUser | None:
        with self._db.session_scope() as session:
            row = session.scalars(
                select(User).where(User.email == normalize_email(email))
            ).first()
            return _to_domain_user(row) if row else None

    def find_by_id(self, user_id: str) -> DomainUser | None:
        with self._db.session_scope() as session:
            row = session.get(User, user_id)
            return _to_domain_user(row) if row else None

    def add(self, email: str, password_hash: str) -> DomainUser:
        try:
            with self._db.session_scope() as session:
                row = User(email=normalize_email(email), password_hash=password_hash)
                session.add(row)
                session.flush()
                session.refresh(row)
                user = _to_domain_user(row)
        except IntegrityError as exc:
            logger.info("users.add: unique constraint rejected email")
            raise UserAlreadyExistsError() from exc
        logger.info(f"users.add: created user_id={user.id}")
        return user

    def spend_credit(self, user_id: str) -> DomainUser | None:
        with self._db.session_scope() as session:
            result = session.execute(
                update(User)
                .where(User.id == user_id, User.credits > 0)
                .values(credits=User.credits - 1)
            )
            row = session.get(User, user_id)
            if row is not None:
                session.refresh(row)
            spent = result.rowcount == 1
            user = _to_domain_user(row) if row else None

        if user is not None and not spent:
            raise InsufficientCreditsError()
        return user

    def add_credits(self, user_id: str, amount: int) -> DomainUser | None:
        if amount <= 0:
            raise ValueError("amount must be positive")
        with self._db.session_scope() as session:
            session.execute(
                update(User)
                .where(User.id == user_id)
                .values(credits=User.credits + amount)
            )
            row = session.get(User, user_id)
            if row is None:
                return None
            session.refresh(row)
            return _to_domain_user(row)

    def set_premium(self, user_id: str, value: bool) -> DomainUser | None:
        with self._db.session_scope() as session:
            row = session.get(User, user_id)
            if row is None:
                return None
            row.is_premium = value
            session.flush()
            return _to_domain_user(row)


class SqlAlchemySessionRepository(SessionRepository):
    def __init__(self, database: Database) -> None:
        self._db = database

    def add(self, session: DomainSession) -> None:
        with self._db.session_scope() as db_session:
            db_session.add(
                SessionRecord(
                    session_id=session.session_id,
                    user_id=session.user_id,
                    created_at=session.created_at,
                    expires_at=session.expires_at,
                )
            )

    def get(self, session_id: str) -> DomainSession | None:
        with self._db.session_scope() as db_session:
            row = db_session.scalars(
                select(SessionRecord).where(SessionRecord.session_id == session_id)
            ).first()
            return _to_domain_session(row) if row else None

    def delete(self, session_id: str) -> None:
        with self._db.session_scope() as db_session:
            db_session.execute(
                delete(SessionRecord).where(SessionRecord.session_id == session_id)
            )

    def delete_expired(self, now: datetime) -> int:
        with self._db.session_scope() as db_session:
            result = db_session.execute(
                delete(SessionRecord).where(SessionRecord.expires_at <= now)
            )
            return result.rowcount or 0

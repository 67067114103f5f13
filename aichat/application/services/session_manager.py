# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Server-side sessions bound to a user id."""

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from aichat.domain.users.entities import Session
from aichat.domain.users.exceptions import SessionDestroyError
from aichat.domain.users.repositories import SessionRepository
from aichat.shared.logging import logger

DEFAULT_LIFETIME = timedelta(hours=24)
DEFAULT_PURGE_INTERVAL = timedelta(hours=1)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SessionManager:
    """Issues, validates and destroys sessions.

    A session lives for a fixed ``lifetime`` from issuance; validation does not
    extend it. Issuing a session never touches the user's other sessions, so a
    user may stay logged in from several devices at once.
    """

    def __init__(
        self,
        *,
        sessions: SessionRepository,
        lifetime: timedelta = DEFAULT_LIFETIME,
        clock: Callable[[], datetime] = _utcnow,
        purge_interval: timedelta = DEFAULT_PURGE_INTERVAL,
    ) -> None:
        self._sessions = sessions
        self._lifetime = lifetime
        self._clock = clock
        self._purge_interval = purge_interval
        self._last_purge: datetime | None = None

    @property
    def lifetime(self) -> timedelta:
        return self._lifetime

    def issue(self, user_id: str) -> str:
        now = self._clock()
        self._maybe_purge(now)
        session = Session(
            session_id=self._generate_session_id(),
            user_id=user_id,
            created_at=now,
            expires_at=now + self._lifetime,
        )
        self._sessions.add(session)
        logger.info(
            f"SessionManager: session issued user_id={user_id} "
            f"exp={session.expires_at.isoformat()}"
        )
        return session.session_id

    def validate(self, session_id: str | None) -> str | None:
        if not session_id:
            return None

        session = self._sessions.get(session_id)
        if session is None:
            logger.debug("SessionManager: session not found")
            return None

        if session.is_expired(self._clock()):
            logger.info(f"SessionManager: session expired user_id={session.user_id}")
            self._sessions.delete(session_id)
            return None

        return session.user_id

    def destroy(self, session_id: str | None) -> None:
        if not session_id:
            return
        try:
            self._sessions.delete(session_id)
        except Exception as exc:
            logger.exception("SessionManager: failed to destroy session")
            raise SessionDestroyError() from exc
        logger.info("SessionManager: session destroyed")

    def purge_expired(self) -> int:
        now = self._clock()
        self._last_purge = now
        removed = self._sessions.delete_expired(now)
        if removed:
            logger.info(f"SessionManager: purged {removed} expired sessions")
        return removed

    def _maybe_purge(self, now: datetime) -> None:
        # Abandoned sessions never reach validate(), so sweep on issue.
        if self._last_purge is None or now - self._last_purge >= self._purge_interval:
            self.purge_expired()

    def _generate_session_id(self) -> str:
        return secrets.token_urlsafe(32)

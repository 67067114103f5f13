# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import wraps

from flask import g, request

from aichat.application.services.session_manager import SessionManager
from aichat.domain.users.exceptions import UnauthenticatedError
from aichat.interfaces.http.session_cookie import SessionCookie
from aichat.shared.logging import logger


class AccessGuard:
    """Per-request session check in front of protected handlers.

    Nothing is cached between requests: every call re-reads the cookie and
    asks the session manager again.
    """

    def __init__(self, *, sessions: SessionManager, cookie: SessionCookie) -> None:
        self._sessions = sessions
        self._cookie = cookie

    def resolve(self) -> str | None:
        session_id = self._cookie.read(request)
        if session_id is None:
            return None
        user_id = self._sessions.validate(session_id)
        if user_id is not None:
            g.session_id = session_id
            g.user_id = user_id
        return user_id

    def require(self, f):
        @wraps(f)
        def inner(*a, **kw):
            user_id = self.resolve()
            if user_id is None:
                logger.warning(
                    f"Auth failed (no valid session) on {request.method} {request.path}"
                )
                raise UnauthenticatedError()

            logger.debug(f"Auth OK: user={user_id} {request.method} {request.path}")
            return f(*a, **kw)

        return inner


def current_user_id() -> str:
    """User id attached by :meth:`AccessGuard.require` for this request."""
    return g.user_id

"""Use-case for ending a session."""

from __future__ import annotations

from aichat.application.services.session_manager import SessionManager


class LogoutUserUseCase:
    def __init__(self, *, sessions: SessionManager) -> None:
        self._sessions = sessions

    def execute(self, session_id: str | None) -> None:
        # No session means the caller is already logged out.
        if session_id:
            self._sessions.destroy(session_id)

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets

from aichat.application.services.session_manager import SessionManager
from aichat.domain.users.entities import User
from aichat.domain.users.exceptions import InvalidCredentialsError
from aichat.domain.users.repositories import PasswordHasher, UserRepository
from aichat.shared.errors.base import ValidationError
from aichat.shared.logging import logger


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionManager,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._password_hasher = password_hasher
        # Unknown emails still pay for one hash comparison.
        self._dummy_hash = password_hasher.hash(secrets.token_urlsafe(16))

    def execute(self, email: str, password: str) -> tuple[User, str]:
        if not email or not password:
            raise ValidationError()

        user = self._users.find_by_email(email)
        hashed = user.password_hash if user is not None else self._dummy_hash
        password_valid = self._password_hasher.verify(password, hashed)

        if user is None or not password_valid:
            logger.warning("auth.login: invalid credentials")
            raise InvalidCredentialsError()

        session_id = self._sessions.issue(user.id)
        return user, session_id

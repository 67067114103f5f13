# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from aichat.application.services.session_manager import SessionManager
from aichat.domain.users.entities import User, normalize_email
from aichat.domain.users.exceptions import UserAlreadyExistsError
from aichat.domain.users.repositories import PasswordHasher, UserRepository
from aichat.shared.errors.base import ValidationError
from aichat.shared.logging import logger


class RegisterUserUseCase:
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

    def execute(self, email: str, password: str) -> tuple[User, str]:
        email = normalize_email(email or "")
        if not email or not password:
            raise ValidationError()

        # Fast path only; the unique constraint in the store decides races.
        if self._users.find_by_email(email):
            logger.info("auth.register: email already taken")
            raise UserAlreadyExistsError()

        hashed = self._password_hasher.hash(password)
        user = self._users.add(email, hashed)
        session_id = self._sessions.issue(user.id)
        return user, session_id

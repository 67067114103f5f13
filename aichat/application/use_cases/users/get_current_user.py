# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from aichat.domain.users.entities import User
from aichat.domain.users.exceptions import UnauthenticatedError, UserNotFoundError
from aichat.domain.users.repositories import UserRepository


class GetCurrentUserUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, user_id: str | None) -> User:
        if not user_id:
            raise UnauthenticatedError()

        user = self._users.find_by_id(user_id)
        if user is None:
            # The session outlived its user.
            raise UserNotFoundError()
        return user

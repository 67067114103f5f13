# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Application dependency container."""

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from aichat.application.services.password_hashing import BcryptPasswordHasher
from aichat.application.services.session_manager import SessionManager
from aichat.application.use_cases.users.get_current_user import GetCurrentUserUseCase
from aichat.application.use_cases.users.login_user import LoginUserUseCase
from aichat.application.use_cases.users.logout_user import LogoutUserUseCase
from aichat.application.use_cases.users.register_user import RegisterUserUseCase
from aichat.domain.users.repositories import SessionRepository
from aichat.infrastructure.db import Database
from aichat.infrastructure.repositories.users.memory_session_repository import \
    InMemorySessionRepository
from aichat.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemySessionRepository, SqlAlchemyUserRepository)
from aichat.interfaces.http.access_guard import AccessGuard
from aichat.interfaces.http.controllers.auth_controller import AuthController
from aichat.interfaces.http.controllers.misc_controller import MiscController
from aichat.interfaces.http.session_cookie import SessionCookie
from aichat.shared.config import AppConfig


class Container:
    def __init__(self, config: AppConfig) -> None:
        self.config = config

    @cached_property
    def database(self) -> Database:
        return Database(self.config.database)

    @cached_property
    def password_hasher(self) -> BcryptPasswordHasher:
        return BcryptPasswordHasher(rounds=self.config.security.bcrypt_rounds)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.database)

    @cached_property
    def session_repository(self) -> SessionRepository:
        if self.config.security.session_backend == "memory":
            return InMemorySessionRepository()
        return SqlAlchemySessionRepository(self.database)

    @cached_property
    def session_manager(self) -> SessionManager:
        return SessionManager(
            sessions=self.session_repository,
            lifetime=timedelta(seconds=self.config.security.session_lifetime),
        )

    @cached_property
    def session_cookie(self) -> SessionCookie:
        security = self.config.security
        return SessionCookie(
            secret_key=self.config.secret_key,
            name=security.cookie_name,
            max_age=security.session_lifetime,
            secure=self.config.cookie_secure,
            samesite=security.cookie_samesite,
        )

    @cached_property
    def access_guard(self) -> AccessGuard:
        return AccessGuard(sessions=self.session_manager, cookie=self.session_cookie)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            sessions=self.session_manager,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            sessions=self.session_manager,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(sessions=self.session_manager)

    @cached_property
    def get_current_user_use_case(self) -> GetCurrentUserUseCase:
        return GetCurrentUserUseCase(users=self.user_repository)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            current_user_use_case=self.get_current_user_use_case,
            guard=self.access_guard,
            cookie=self.session_cookie,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(database=self.database)

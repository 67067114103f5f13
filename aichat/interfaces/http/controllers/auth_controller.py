# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from aichat.application.use_cases.users.get_current_user import GetCurrentUserUseCase
from aichat.application.use_cases.users.login_user import LoginUserUseCase
from aichat.application.use_cases.users.logout_user import LogoutUserUseCase
from aichat.application.use_cases.users.register_user import RegisterUserUseCase
from aichat.domain.users.entities import User
from aichat.interfaces.http.access_guard import AccessGuard, current_user_id
from aichat.interfaces.http.dto.auth import (LoginRequestDTO, MessageDTO,
                                             RegisterRequestDTO, UserDTO,
                                             UserEnvelopeDTO)
from aichat.interfaces.http.session_cookie import SessionCookie
from aichat.shared.errors.validation import invalid_fields, raise_validation_error
from aichat.shared.logging import logger


def _user_response(user: User) -> Response:
    envelope = UserEnvelopeDTO(user=UserDTO.model_validate(user))
    return jsonify(envelope.payload())


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        current_user_use_case: GetCurrentUserUseCase,
        guard: AccessGuard,
        cookie: SessionCookie,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._current_user_use_case = current_user_use_case
        self._guard = guard
        self._cookie = cookie

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            logger.info(f"auth.register: invalid payload fields={invalid_fields(exc)}")
            raise_validation_error(exc)

        user, session_id = self._register_use_case.execute(dto.email, dto.password)

        response = _user_response(user)
        self._cookie.attach(response, session_id)
        logger.info(f"auth.register: ok user_id={user.id}")
        return response, 201

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            logger.info(f"auth.login: invalid payload fields={invalid_fields(exc)}")
            raise_validation_error(exc)

        user, session_id = self._login_use_case.execute(dto.email, dto.password)

        response = _user_response(user)
        self._cookie.attach(response, session_id)
        logger.info(f"auth.login: ok user_id={user.id}")
        return response, 200

    def me(self) -> tuple[Response, int]:
        user = self._current_user_use_case.execute(current_user_id())
        return _user_response(user), 200

    def logout(self) -> tuple[Response, int]:
        session_id = self._cookie.read(request)

        self._logout_use_case.execute(session_id)

        response = jsonify(MessageDTO(message="Logged out successfully").model_dump())
        self._cookie.clear(response)
        logger.info("auth.logout: ok")
        return response, 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/me", view_func=self._guard.require(self.me), methods=["GET"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        return bp

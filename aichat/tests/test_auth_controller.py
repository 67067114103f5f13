from __future__ import annotations

from datetime import UTC, datetime
from typing import cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from aichat.application.services.session_manager import SessionManager
from aichat.application.use_cases.users.get_current_user import GetCurrentUserUseCase
from aichat.application.use_cases.users.login_user import LoginUserUseCase
from aichat.application.use_cases.users.register_user import RegisterUserUseCase
from aichat.domain.users.entities import User
from aichat.domain.users.exceptions import InvalidCredentialsError
from aichat.infrastructure.repositories.users.memory_session_repository import \
    InMemorySessionRepository
from aichat.interfaces.http.access_guard import AccessGuard
from aichat.interfaces.http.controllers.auth_controller import AuthController
from aichat.interfaces.http.session_cookie import SessionCookie
from aichat.shared.middleware.error_handler import configure_error_handling


def _user(email: str = "alice@example.com") -> User:
    return User(
        id="u1",
        email=email,
        password_hash="$2b$10$secret-hash",
        credits=10,
        is_premium=False,
        created_at=datetime.now(UTC),
    )


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    return app


@pytest.fixture()
def sessions() -> SessionManager:
    return SessionManager(sessions=InMemorySessionRepository())


@pytest.fixture()
def cookie() -> SessionCookie:
    return SessionCookie(secret_key="test-secret")


def _controller(
    sessions: SessionManager,
    cookie: SessionCookie,
    **use_cases: object,
) -> AuthController:
    return AuthController(
        register_use_case=use_cases.get("register", MagicMock()),  # type: ignore[arg-type]
        login_use_case=use_cases.get("login", MagicMock()),  # type: ignore[arg-type]
        logout_use_case=use_cases.get("logout", MagicMock()),  # type: ignore[arg-type]
        current_user_use_case=use_cases.get("current", MagicMock()),  # type: ignore[arg-type]
        guard=AccessGuard(sessions=sessions, cookie=cookie),
        cookie=cookie,
    )


def test_register_endpoint_sets_cookie(
    flask_app: Flask, sessions: SessionManager, cookie: SessionCookie
) -> None:
    register_called: dict[str, tuple[str, str]] = {}

    class StubRegister:
        def execute(self, email: str, password: str) -> tuple[User, str]:
            register_called["args"] = (email, password)
            return _user(email), "session123"

    controller = _controller(
        sessions, cookie, register=cast(RegisterUserUseCase, StubRegister())
    )
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/register",
            json={"email": " Alice@Example.com", "password": "hunter2"},
        )

    assert response.status_code == 201
    assert register_called["args"] == ("alice@example.com", "hunter2")
    assert response.get_json() == {
        "user": {"id": "u1", "email": "alice@example.com", "credits": 10, "isPremium": False}
    }
    set_cookie = response.headers["Set-Cookie"]
    assert set_cookie.startswith(f"sid={cookie.sign('session123')}")
    assert "HttpOnly" in set_cookie
    assert "SameSite=Lax" in set_cookie
    assert "Max-Age=86400" in set_cookie
    assert "Secure" not in set_cookie


@pytest.mark.parametrize(
    "body",
    [{}, {"email": "alice@example.com"}, {"password": "hunter2"}, {"email": "", "password": "x"}],
)
def test_register_missing_fields_returns_400(
    flask_app: Flask, sessions: SessionManager, cookie: SessionCookie, body: dict
) -> None:
    register = MagicMock()
    controller = _controller(sessions, cookie, register=register)
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/auth/register", json=body)

    assert response.status_code == 400
    assert response.get_json() == {"message": "Email and password are required"}
    register.execute.assert_not_called()


def test_register_rejects_password_bcrypt_cannot_hash(
    flask_app: Flask, sessions: SessionManager, cookie: SessionCookie
) -> None:
    controller = _controller(sessions, cookie)
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/register", json={"email": "a@b.com", "password": "x" * 73}
        )

    assert response.status_code == 400
    assert response.get_json() == {"message": "Password is too long"}


def test_login_invalid_credentials_returns_400(
    flask_app: Flask, sessions: SessionManager, cookie: SessionCookie
) -> None:
    login = MagicMock()
    login.execute.side_effect = InvalidCredentialsError()
    controller = _controller(sessions, cookie, login=cast(LoginUserUseCase, login))
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/login", json={"email": "a@b.com", "password": "nope"}
        )

    assert response.status_code == 400
    assert response.get_json() == {"message": "Invalid credentials"}
    assert "Set-Cookie" not in response.headers


def test_me_without_cookie_is_401(
    flask_app: Flask, sessions: SessionManager, cookie: SessionCookie
) -> None:
    current = MagicMock()
    controller = _controller(sessions, cookie, current=current)
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.get("/api/auth/me")

    assert response.status_code == 401
    assert response.get_json() == {"message": "Not authenticated"}
    current.execute.assert_not_called()


def test_me_rejects_unsigned_session_id(
    flask_app: Flask, sessions: SessionManager, cookie: SessionCookie
) -> None:
    session_id = sessions.issue("u1")
    controller = _controller(sessions, cookie)
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        client.set_cookie("sid", session_id)
        response = client.get("/api/auth/me")

    assert response.status_code == 401


def test_me_with_signed_cookie_passes_user_id(
    flask_app: Flask, sessions: SessionManager, cookie: SessionCookie
) -> None:
    session_id = sessions.issue("u1")
    current = MagicMock()
    current.execute.return_value = _user()
    controller = _controller(
        sessions, cookie, current=cast(GetCurrentUserUseCase, current)
    )
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        client.set_cookie("sid", cookie.sign(session_id))
        response = client.get("/api/auth/me")

    assert response.status_code == 200
    current.execute.assert_called_once_with("u1")
    assert "passwordHash" not in response.get_data(as_text=True)
    assert "password_hash" not in response.get_data(as_text=True)


def test_unexpected_error_becomes_generic_500(
    flask_app: Flask, sessions: SessionManager, cookie: SessionCookie
) -> None:
    login = MagicMock()
    login.execute.side_effect = RuntimeError("db exploded")
    controller = _controller(sessions, cookie, login=login)
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/login", json={"email": "a@b.com", "password": "pw"}
        )

    assert response.status_code == 500
    assert response.get_json() == {"message": "Server error"}

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services.password_hashing import BcryptPasswordHasher
from .services.session_manager import SessionManager
from .use_cases.users.get_current_user import GetCurrentUserUseCase
from .use_cases.users.login_user import LoginUserUseCase
from .use_cases.users.logout_user import LogoutUserUseCase
from .use_cases.users.register_user import RegisterUserUseCase

__all__ = [
    "BcryptPasswordHasher",
    "SessionManager",
    "GetCurrentUserUseCase",
    "LoginUserUseCase",
    "LogoutUserUseCase",
    "RegisterUserUseCase",
]

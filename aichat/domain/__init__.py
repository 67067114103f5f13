# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .users.entities import DEFAULT_CREDITS, Session, User, normalize_email
from .users.exceptions import (
    InsufficientCreditsError,
    InvalidCredentialsError,
    SessionDestroyError,
    UnauthenticatedError,
    UserAlreadyExistsError,
    UserNotFoundError,
)

__all__ = [
    "DEFAULT_CREDITS",
    "Session",
    "User",
    "normalize_email",
    "InsufficientCreditsError",
    "InvalidCredentialsError",
    "SessionDestroyError",
    "UnauthenticatedError",
    "UserAlreadyExistsError",
    "UserNotFoundError",
]

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from aichat.shared.errors.base import DomainError


class UserAlreadyExistsError(DomainError):
    code = "user_already_exists"
    message = "User already exists"


class InvalidCredentialsError(DomainError):
    # Same message for unknown email and wrong password.
    code = "invalid_credentials"
    message = "Invalid credentials"


class UnauthenticatedError(DomainError):
    code = "unauthenticated"
    status = HTTPStatus.UNAUTHORIZED
    message = "Not authenticated"


class UserNotFoundError(DomainError):
    code = "user_not_found"
    status = HTTPStatus.NOT_FOUND
    message = "User not found"


class SessionDestroyError(DomainError):
    code = "session_destroy_failed"
    status = HTTPStatus.INTERNAL_SERVER_ERROR
    message = "Could not log out"


class InsufficientCreditsError(DomainError):
    code = "insufficient_credits"
    status = HTTPStatus.PAYMENT_REQUIRED
    message = "No credits left"

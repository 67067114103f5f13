# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    message: str = "Server error"
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"message": self.message}
        if self.context:
            payload["context"] = dict(self.context)
        return payload


def _class_default(cls: type, name: str, kind: type, fallback: Any) -> Any:
    # Slot descriptors inherited from AppError are not defaults.
    value = getattr(cls, name, None)
    return value if isinstance(value, kind) else fallback


class DomainError(AppError):
    """Base for errors raised by use cases; subclasses set class-level defaults."""

    def __init__(
        self,
        *,
        code: str | None = None,
        status: HTTPStatus | None = None,
        message: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        cls = type(self)
        resolved_code = code or _class_default(cls, "code", str, "domain_error")
        resolved_status = status or _class_default(
            cls, "status", HTTPStatus, HTTPStatus.BAD_REQUEST
        )
        resolved_message = message or _class_default(cls, "message", str, "Bad request")
        super().__init__(
            code=resolved_code,
            status=resolved_status,
            message=resolved_message,
            context=context,
        )


class ValidationError(AppError):
    def __init__(
        self,
        code: str = "validation_error",
        *,
        message: str = "Email and password are required",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code,
            status=HTTPStatus.BAD_REQUEST,
            message=message,
            context=context,
        )

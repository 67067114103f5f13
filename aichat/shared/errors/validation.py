# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import ValidationError

_MESSAGES = {
    "password_too_long": "Password is too long",
}


def invalid_fields(exc: PydanticValidationError) -> list[str]:
    fields = set()
    for error in exc.errors():
        loc = error.get("loc", ())
        field_path = ".".join(str(part) for part in loc if part is not None)
        if field_path:
            fields.add(field_path)
    return sorted(fields)


def raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    """Re-raise a pydantic failure as the public 400 error."""
    for error in exc.errors():
        message = _MESSAGES.get(error.get("type", ""))
        if message:
            raise ValidationError(code=error["type"], message=message) from exc
    raise ValidationError() from exc


__all__ = [
    "invalid_fields",
    "raise_validation_error",
]

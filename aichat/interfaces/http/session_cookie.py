# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Signed session cookie carrying the server-side session id."""

from __future__ import annotations

from flask import Request, Response
from itsdangerous import BadSignature, Signer

SIGNER_SALT = "aichat.session.v1"


class SessionCookie:
    def __init__(
        self,
        *,
        secret_key: str,
        name: str = "sid",
        max_age: int = 60 * 60 * 24,
        secure: bool = False,
        samesite: str = "Lax",
    ) -> None:
        self._signer = Signer(secret_key, salt=SIGNER_SALT)
        self.name = name
        self.max_age = max_age
        self.secure = secure
        self.samesite = samesite

    def sign(self, session_id: str) -> str:
        return self._signer.sign(session_id).decode("ascii")

    def unsign(self, value: str | None) -> str | None:
        if not value:
            return None
        try:
            return self._signer.unsign(value).decode("ascii")
        except BadSignature:
            return None

    def read(self, request: Request) -> str | None:
        """Return the session id from the request, or None if absent or forged."""
        return self.unsign(request.cookies.get(self.name))

    def attach(self, response: Response, session_id: str) -> None:
        response.set_cookie(
            self.name,
            self.sign(session_id),
            max_age=self.max_age,
            httponly=True,
            secure=self.secure,
            samesite=self.samesite,
        )

    def clear(self, response: Response) -> None:
        response.delete_cookie(
            self.name,
            httponly=True,
            secure=self.secure,
            samesite=self.samesite,
        )

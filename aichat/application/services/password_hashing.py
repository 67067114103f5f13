"""Password hashing strategies."""

from __future__ import annotations

import bcrypt

from aichat.domain.users.repositories import PasswordHasher

# bcrypt ignores (or, in newer releases, rejects) input past this length.
MAX_PASSWORD_BYTES = 72


class BcryptPasswordHasher(PasswordHasher):
    def __init__(self, rounds: int = 10) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("ascii")

    def verify(self, password: str, hashed: str) -> bool:
        secret = password.encode("utf-8")
        if len(secret) > MAX_PASSWORD_BYTES:
            # Never let a truncated prefix match.
            return False
        try:
            return bcrypt.checkpw(secret, hashed.encode("ascii"))
        except ValueError:
            return False

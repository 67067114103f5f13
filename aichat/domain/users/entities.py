# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

DEFAULT_CREDITS = 10


def normalize_email(email: str) -> str:
    return email.strip().lower()


@dataclass(slots=True, frozen=True)
class User:

    id: str
    email: str
    password_hash: str
    credits: int
    is_premium: bool
    created_at: datetime


@dataclass(slots=True, frozen=True)
class Session:

    session_id: str
    user_id: str
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

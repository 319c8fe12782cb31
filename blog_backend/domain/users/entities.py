# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class User:

    id: int
    username: str
    password_hash: str
    created_at: datetime

    def public(self) -> dict[str, object]:
        return {"id": self.id, "username": self.username}


@dataclass(slots=True, frozen=True)
class SessionClaims:
    """Identity carried inside a verified session token."""

    user_id: int
    username: str
    issued_at: datetime
    expires_at: datetime

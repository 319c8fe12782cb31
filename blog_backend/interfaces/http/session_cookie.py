# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from flask import Request, Response


@dataclass(slots=True, frozen=True)
class SessionCookie:
    """One cookie policy shared by every response that sets or clears the session."""

    name: str
    max_age: int
    samesite: str = "Lax"
    secure: bool = False

    def read(self, request: Request) -> str | None:
        return request.cookies.get(self.name) or None

    def attach(self, response: Response, token: str) -> None:
        response.set_cookie(
            self.name,
            token,
            max_age=self.max_age,
            httponly=True,
            samesite=self.samesite,
            secure=self.secure,
        )

    def clear(self, response: Response) -> None:
        response.set_cookie(
            self.name,
            "",
            max_age=0,
            expires=0,
            httponly=True,
            samesite=self.samesite,
            secure=self.secure,
        )


__all__ = ["SessionCookie"]

"""Pydantic schemas for JWT session tokens."""

from __future__ import annotations

from pydantic import BaseModel


class TokenPayload(BaseModel):
    """Decoded claims of a verified token: the authenticated principal."""

    sub: str
    role: str
    iat: int
    exp: int

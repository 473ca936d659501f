"""
FastAPI dependencies — bearer-token guard and database session.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator

from fastapi import Header
from sqlalchemy.ext.asyncio import AsyncSession

from employee_manager.core.exceptions import AuthenticationError
from employee_manager.core.security import TokenError, decode_access_token
from employee_manager.db.session import async_session_factory
from employee_manager.schemas.token import TokenPayload

logger = logging.getLogger(__name__)

NO_TOKEN = "No authorization token provided"
BAD_FORMAT = "Invalid token format"
TOKEN_MISSING = "Token is missing"


# ── Database session ────────────────────────────────────────────────
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


# ── Auth dependencies ───────────────────────────────────────────────
def _extract_bearer(authorization: str | None) -> str:
    """Pull the token out of an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        raise AuthenticationError(NO_TOKEN)

    # "Bearer " arrives as bare "Bearer" once a server trims the header
    scheme, _, rest = authorization.partition(" ")
    if scheme != "Bearer":
        raise AuthenticationError(BAD_FORMAT)

    # Only the first space-separated field counts: "Bearer  x" has an empty token
    token = rest.split(" ")[0]
    if not token:
        raise AuthenticationError(TOKEN_MISSING)
    return token


async def get_current_principal(
    authorization: str | None = Header(default=None),
) -> TokenPayload:
    """Verify the bearer token and return its claims.

    Authentication only: no role check and no database lookup.
    """
    try:
        token = _extract_bearer(authorization)
    except AuthenticationError as exc:
        logger.warning("Rejected request: %s", exc.message)
        raise

    try:
        return decode_access_token(token)
    except TokenError as exc:
        logger.warning("Rejected token: %s (%s)", exc.reason, type(exc).__name__)
        raise AuthenticationError(exc.reason) from exc

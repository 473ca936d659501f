"""
JWT session token creation / verification and password hashing (bcrypt).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt
from jose.exceptions import JWTClaimsError
from passlib.context import CryptContext
from pydantic import ValidationError as PydanticValidationError

from employee_manager.core.config import settings
from employee_manager.schemas.token import TokenPayload

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class TokenError(Exception):
    """Base class for session token verification failures."""

    reason = "Authentication failed"


class TokenExpired(TokenError):
    reason = "Token has expired"


class TokenInvalid(TokenError):
    reason = "Invalid token"


class TokenVerificationFailed(TokenError):
    reason = "Authentication failed"


# ── Passwords ───────────────────────────────────────────────────────
def verify_password(plain: str, hashed: str) -> bool:
    try:
        return pwd_context.verify(plain, hashed)
    except (ValueError, TypeError):
        # Unrecognised or corrupt stored hash
        return False


def get_password_hash(plain: str) -> str:
    return pwd_context.hash(plain)


# ── JWT tokens ──────────────────────────────────────────────────────
def create_access_token(
    admin_id: str,
    role: str,
    expires_delta: timedelta | None = None,
) -> str:
    """Sign a token carrying the administrator id and role.

    ``iat`` and ``exp`` are derived from the same instant, so the lifetime
    encoded in the token is exactly ``expires_delta`` (8 hours by default).
    """
    issued_at = datetime.now(timezone.utc)
    expire = issued_at + (
        expires_delta
        if expires_delta is not None
        else timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS)
    )
    return jwt.encode(
        {"sub": str(admin_id), "role": role, "iat": issued_at, "exp": expire},
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )


def decode_access_token(token: str) -> TokenPayload:
    """Verify signature and expiry, returning the decoded claims.

    Raises:
        TokenExpired: the ``exp`` instant has passed.
        TokenInvalid: malformed token or signature mismatch.
        TokenVerificationFailed: any other verification problem.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except ExpiredSignatureError as exc:
        raise TokenExpired() from exc
    except JWTClaimsError as exc:
        raise TokenVerificationFailed() from exc
    except JWTError as exc:
        raise TokenInvalid() from exc

    try:
        return TokenPayload.model_validate(payload)
    except PydanticValidationError as exc:
        raise TokenVerificationFailed() from exc

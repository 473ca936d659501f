"""
Auth endpoints — administrator registration, login & current principal.
"""

from fastapi import APIRouter, Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy.ext.asyncio import AsyncSession

from employee_manager.api.deps import get_current_principal, get_db
from employee_manager.core.config import settings
from employee_manager.schemas.auth import (LoginRequest, LoginResponse, PrincipalRead,
                                           RegisterRequest, RegisterResponse)
from employee_manager.schemas.token import TokenPayload
from employee_manager.services.auth_service import AuthService

# Rate limiter — keyed by client IP
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
@limiter.limit(settings.REGISTER_RATE_LIMIT)
async def register_admin(
    request: Request,
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db),
) -> RegisterResponse:
    """Create an administrator account. Returns id, name and email only."""
    return await AuthService(db).register(body)


@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> LoginResponse:
    """Exchange email + password for a signed session token (8 hours)."""
    return await AuthService(db).login(body)


@router.get("/me", response_model=PrincipalRead)
async def read_current_principal(
    principal: TokenPayload = Depends(get_current_principal),
) -> PrincipalRead:
    """Return the decoded claims of the presented token."""
    return PrincipalRead(
        admin_id=principal.sub,
        role=principal.role,
        issued_at=principal.iat,
        expires_at=principal.exp,
    )

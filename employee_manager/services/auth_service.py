"""Administrator registration, login and bootstrap."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from employee_manager.core.config import settings
from employee_manager.core.exceptions import AuthenticationError, ConflictError
from employee_manager.core.security import create_access_token, get_password_hash, verify_password
from employee_manager.models.admin import Admin
from employee_manager.schemas.auth import (AdminProfile, AdminSummary, LoginRequest,
                                           LoginResponse, RegisterRequest, RegisterResponse)

logger = logging.getLogger(__name__)

# Same text for unknown email and wrong password
INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:
    """Issues session tokens. Holds no session state of its own."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_email(self, email: str) -> Admin | None:
        result = await self.session.execute(
            select(Admin).where(Admin.email == email.strip().lower())
        )
        return result.scalar_one_or_none()

    async def register(self, data: RegisterRequest) -> RegisterResponse:
        """Persist a new administrator with a hashed password.

        Raises:
            ConflictError: an administrator already uses this email
                (compared lowercased).
        """
        if await self.get_by_email(data.email) is not None:
            raise ConflictError("This email is already registered")

        admin = Admin(
            name=data.name,
            email=data.email,
            hashed_password=get_password_hash(data.password),
        )
        self.session.add(admin)
        await self.session.commit()
        await self.session.refresh(admin)
        logger.info("Registered admin %s", admin.email)
        return RegisterResponse(
            admin=AdminSummary(id=admin.id, name=admin.name, email=admin.email)
        )

    async def login(self, data: LoginRequest) -> LoginResponse:
        """Check credentials and sign a token for the administrator.

        Raises:
            AuthenticationError: unknown email or wrong password, with one
                generic message for both.
        """
        admin = await self.get_by_email(data.email)
        if admin is None or not verify_password(data.password, admin.hashed_password):
            logger.warning("Failed login for %s", data.email)
            raise AuthenticationError(INVALID_CREDENTIALS)

        token = create_access_token(admin.id, admin.role)
        logger.info("Admin %s logged in", admin.email)
        return LoginResponse(
            token=token,
            expires_in=settings.ACCESS_TOKEN_EXPIRE_HOURS * 3600,
            admin=AdminProfile.model_validate(admin),
        )

    async def ensure_admin(self, data: RegisterRequest) -> bool:
        """Create the administrator unless one with this email exists.

        Returns ``True`` when a new record was created.
        """
        if await self.get_by_email(data.email or "") is not None:
            return False
        await self.register(data)
        return True

"""Pydantic schemas for administrator registration and login."""

from __future__ import annotations

import re

from pydantic import BaseModel, model_validator

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6


class RegisterRequest(BaseModel):
    """Fields are optional at the type level so that a missing field
    reports the same ordered message as an empty one."""

    name: str | None = None
    email: str | None = None
    password: str | None = None

    @model_validator(mode="after")
    def _validate_in_order(self) -> RegisterRequest:
        if not self.name or not self.name.strip():
            raise ValueError("Name is required")
        if not self.email or not self.email.strip():
            raise ValueError("Email is required")
        if not _EMAIL_RE.match(self.email.strip()):
            raise ValueError("Invalid email format")
        if not self.password or len(self.password) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        self.name = self.name.strip()
        self.email = self.email.strip().lower()
        if len(self.name) > 200:
            raise ValueError("Name must not exceed 200 characters")
        if len(self.email) > 320:
            raise ValueError("Email must not exceed 320 characters")
        return self


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None

    @model_validator(mode="after")
    def _require_both(self) -> LoginRequest:
        if not self.email or not self.email.strip() or not self.password:
            raise ValueError("Email and password are required")
        self.email = self.email.strip().lower()
        return self


class AdminSummary(BaseModel):
    id: str
    name: str
    email: str

    model_config = {"from_attributes": True}


class AdminProfile(AdminSummary):
    role: str


class RegisterResponse(BaseModel):
    message: str = "Admin registered successfully"
    admin: AdminSummary


class LoginResponse(BaseModel):
    message: str = "Login successful"
    token: str
    token_type: str = "bearer"
    expires_in: int
    admin: AdminProfile


class PrincipalRead(BaseModel):
    """The decoded token claims of the caller."""

    admin_id: str
    role: str
    issued_at: int
    expires_at: int

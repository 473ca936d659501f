"""
Administrator model — the only principal allowed to authenticate.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String

from employee_manager.db.base import Base


def _new_id() -> str:
    return uuid.uuid4().hex


class Admin(Base):
    __tablename__ = "admins"

    id: str = Column(String(32), primary_key=True, default=_new_id)  # type: ignore[assignment]
    name: str = Column(String(200), nullable=False)  # type: ignore[assignment]
    # Always stored lowercased; used as the login key
    email: str = Column(String(320), unique=True, nullable=False, index=True)  # type: ignore[assignment]
    hashed_password: str = Column(String(128), nullable=False)  # type: ignore[assignment]
    role: str = Column(  # type: ignore[assignment]
        String(20),
        nullable=False,
        default="admin",
        server_default="admin",
    )
    created_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )

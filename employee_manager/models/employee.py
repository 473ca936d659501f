"""
Employee model — the managed business record.

Independent of ``admins``: a record carries no reference to the
administrator who created it.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, String

from employee_manager.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Employee(Base):
    __tablename__ = "employees"

    id: str = Column(String(32), primary_key=True, default=lambda: uuid.uuid4().hex)  # type: ignore[assignment]
    name: str = Column(String(200), nullable=False)  # type: ignore[assignment]
    # Unique as stored (case-sensitive)
    email: str = Column(String(320), unique=True, nullable=False, index=True)  # type: ignore[assignment]
    position: str = Column(String(100), nullable=False)  # type: ignore[assignment]
    department: str = Column(String(100), nullable=False)  # type: ignore[assignment]
    salary: float = Column(Float, nullable=False)  # type: ignore[assignment]
    created_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=_utcnow,
        index=True,
    )
    updated_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
    )

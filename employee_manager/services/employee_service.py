"""Employee CRUD over the ``employees`` table.

Every operation is a single persistence call followed by a commit; there
are no retries and no optimistic-concurrency checks (last write wins).
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from employee_manager.core.exceptions import ConflictError, InternalError, NotFoundError
from employee_manager.models.employee import Employee
from employee_manager.schemas.employee import DeleteResponse, EmployeeWrite

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL = "Employee email already exists"


class EmployeeService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _email_taken(self, email: str, exclude_id: str | None = None) -> bool:
        # Exact match: employee emails are compared as stored
        query = select(Employee.id).where(Employee.email == email)
        if exclude_id is not None:
            query = query.where(Employee.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def _get_or_404(self, employee_id: str) -> Employee:
        employee = await self.session.get(Employee, employee_id)
        if employee is None:
            raise NotFoundError("Employee not found")
        return employee

    async def _commit(self) -> None:
        """Commit, rolling back and raising ``InternalError`` on a storage failure.

        ``IntegrityError`` passes through unchanged so a unique-index race
        still reports as a duplicate.
        """
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise InternalError(f"Commit failed: {exc}") from exc

    async def create(self, data: EmployeeWrite) -> Employee:
        if await self._email_taken(data.email):  # type: ignore[arg-type]
            raise ConflictError(DUPLICATE_EMAIL)

        employee = Employee(**data.model_dump())
        self.session.add(employee)
        await self._commit()
        await self.session.refresh(employee)
        logger.info("Created employee %s (%s)", employee.id, employee.email)
        return employee

    async def list_all(self) -> list[Employee]:
        """All records, most recently created first."""
        result = await self.session.execute(
            select(Employee).order_by(Employee.created_at.desc())
        )
        return list(result.scalars().all())

    async def get(self, employee_id: str) -> Employee:
        return await self._get_or_404(employee_id)

    async def update(self, employee_id: str, data: EmployeeWrite) -> Employee:
        """Replace all mutable fields. ``id`` and ``created_at`` never change."""
        employee = await self._get_or_404(employee_id)
        if await self._email_taken(data.email, exclude_id=employee_id):  # type: ignore[arg-type]
            raise ConflictError(DUPLICATE_EMAIL)

        for field, value in data.model_dump().items():
            setattr(employee, field, value)

        await self._commit()
        await self.session.refresh(employee)
        logger.info("Updated employee %s", employee_id)
        return employee

    async def delete(self, employee_id: str) -> DeleteResponse:
        employee = await self._get_or_404(employee_id)
        await self.session.delete(employee)
        await self._commit()
        logger.info("Deleted employee %s (%s)", employee_id, employee.email)
        return DeleteResponse(success=True, message="Employee deleted successfully")

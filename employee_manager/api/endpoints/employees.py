"""
Employee CRUD endpoints.

Every route requires an authenticated administrator (any valid token);
there is no per-role authorization.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from employee_manager.api.deps import get_current_principal, get_db
from employee_manager.models.employee import Employee
from employee_manager.schemas.employee import DeleteResponse, EmployeeRead, EmployeeWrite
from employee_manager.services.employee_service import EmployeeService

router = APIRouter(
    prefix="/employees",
    tags=["employees"],
    dependencies=[Depends(get_current_principal)],
)


@router.post("", response_model=EmployeeRead, status_code=201)
async def create_employee(
    body: EmployeeWrite,
    db: AsyncSession = Depends(get_db),
) -> Employee:
    return await EmployeeService(db).create(body)


@router.get("", response_model=list[EmployeeRead])
async def list_employees(db: AsyncSession = Depends(get_db)) -> list[Employee]:
    """All employees, most recently created first."""
    return await EmployeeService(db).list_all()


@router.get("/{employee_id}", response_model=EmployeeRead)
async def get_employee(
    employee_id: str,
    db: AsyncSession = Depends(get_db),
) -> Employee:
    return await EmployeeService(db).get(employee_id)


@router.put("/{employee_id}", response_model=EmployeeRead)
async def update_employee(
    employee_id: str,
    body: EmployeeWrite,
    db: AsyncSession = Depends(get_db),
) -> Employee:
    return await EmployeeService(db).update(employee_id, body)


@router.delete("/{employee_id}", response_model=DeleteResponse)
async def delete_employee(
    employee_id: str,
    db: AsyncSession = Depends(get_db),
) -> DeleteResponse:
    return await EmployeeService(db).delete(employee_id)

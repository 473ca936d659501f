"""Pydantic schemas for Employee CRUD."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, field_validator, model_validator

from employee_manager.core.config import settings

# Column sizes of the employees table
_MAX_LENGTHS = {"name": 200, "email": 320, "position": 100, "department": 100}


class EmployeeWrite(BaseModel):
    """Body of both create and update: every mutable field is required.

    Missing fields are reported together as a single message, with no
    per-field detail.
    """

    name: str | None = None
    email: str | None = None
    position: str | None = None
    department: str | None = None
    salary: float | None = None

    @field_validator("salary", mode="before")
    @classmethod
    def _reject_bool_salary(cls, value: object) -> object:
        # bool is an int subclass and would otherwise coerce to 0.0 or 1.0
        if isinstance(value, bool):
            raise ValueError("Salary must be a number")
        return value

    @model_validator(mode="after")
    def _validate(self) -> EmployeeWrite:
        texts = (self.name, self.email, self.position, self.department)
        if any(v is None or not v.strip() for v in texts) or self.salary is None:
            raise ValueError("All fields are required")
        if not 0 <= self.salary <= settings.SALARY_MAX:
            raise ValueError(f"Salary must be between 0 and {settings.SALARY_MAX}")

        self.name = self.name.strip()  # type: ignore[union-attr]
        self.email = self.email.strip()  # type: ignore[union-attr]
        self.position = self.position.strip()  # type: ignore[union-attr]
        self.department = self.department.strip()  # type: ignore[union-attr]

        for field, limit in _MAX_LENGTHS.items():
            if len(getattr(self, field)) > limit:
                raise ValueError(f"{field.capitalize()} must not exceed {limit} characters")
        return self


class EmployeeRead(BaseModel):
    id: str
    name: str
    email: str
    position: str
    department: str
    salary: float
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class DeleteResponse(BaseModel):
    success: bool
    message: str

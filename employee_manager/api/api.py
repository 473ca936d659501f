"""
API router aggregator — wires all endpoint modules together.
"""

from fastapi import APIRouter

from employee_manager.api.endpoints import auth, employees

api_router = APIRouter()

# Register, login, current principal
api_router.include_router(auth.router)

# Employee CRUD (token required)
api_router.include_router(employees.router)


@api_router.get("/health", tags=["health"])
async def health() -> dict[str, str]:
    return {"status": "ok"}

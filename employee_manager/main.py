"""
Employee Manager — application entry point.

This is the **only** file that assembles the app.  All business logic
lives in the `services/`, `api/`, `models/`, and `core/` packages.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError as PydanticValidationError

from employee_manager.api.api import api_router
from employee_manager.api.endpoints.auth import limiter
from employee_manager.core.config import settings
from employee_manager.core.exceptions import register_exception_handlers
from employee_manager.db.session import async_session_factory, create_tables, engine
from employee_manager.schemas.auth import RegisterRequest
from employee_manager.services.auth_service import AuthService

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


async def _seed_first_admin() -> None:
    if not (settings.FIRST_ADMIN_EMAIL and settings.FIRST_ADMIN_PASSWORD):
        return
    try:
        data = RegisterRequest(
            name=settings.FIRST_ADMIN_NAME,
            email=settings.FIRST_ADMIN_EMAIL,
            password=settings.FIRST_ADMIN_PASSWORD,
        )
    except PydanticValidationError as exc:
        logger.error("FIRST_ADMIN_* settings are invalid, not seeding: %s", exc)
        return

    async with async_session_factory() as session:
        if await AuthService(session).ensure_admin(data):
            logger.info("Default admin created: %s (password: <redacted>)", data.email)


# ── Lifespan ────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(_app: FastAPI):
    await create_tables()
    logger.info("Database tables initialised")

    await _seed_first_admin()

    logger.info("Employee Manager v%s started, API at %s", settings.VERSION, settings.API_PREFIX)
    yield
    await engine.dispose()
    logger.info("Shutdown complete")


# ── App factory ─────────────────────────────────────────────────────
def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.PROJECT_NAME,
        description="Employee record management behind admin login",
        version=settings.VERSION,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # slowapi looks the limiter up on app.state
    application.state.limiter = limiter

    # Global exception handlers (prevent stack-trace leakage)
    register_exception_handlers(application)

    application.include_router(api_router, prefix=settings.API_PREFIX)

    return application


app = create_app()

"""
Bootstrap an administrator account from the command line.

    employee-manager-create-admin --name khushal --email admin@example.com --password ...

Values default to the ``FIRST_ADMIN_*`` settings.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from pydantic import ValidationError as PydanticValidationError

from employee_manager.core.config import settings
from employee_manager.db.session import async_session_factory, create_tables, engine
from employee_manager.schemas.auth import RegisterRequest
from employee_manager.services.auth_service import AuthService

logger = logging.getLogger("employee_manager.create_admin")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create an administrator account")
    parser.add_argument("--name", default=settings.FIRST_ADMIN_NAME)
    parser.add_argument("--email", default=settings.FIRST_ADMIN_EMAIL)
    parser.add_argument("--password", default=settings.FIRST_ADMIN_PASSWORD)
    return parser.parse_args(argv)


async def create_admin(data: RegisterRequest) -> bool:
    await create_tables()
    try:
        async with async_session_factory() as session:
            return await AuthService(session).ensure_admin(data)
    finally:
        await engine.dispose()


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )
    args = _parse_args(argv)
    try:
        data = RegisterRequest(name=args.name, email=args.email, password=args.password)
    except PydanticValidationError as exc:
        for error in exc.errors():
            logger.error("%s", str(error["msg"]).removeprefix("Value error, "))
        return 2

    if asyncio.run(create_admin(data)):
        logger.info("Admin created successfully: %s", data.email)
    else:
        logger.info("Admin %s already exists, nothing to do", data.email)
    return 0


if __name__ == "__main__":
    sys.exit(main())

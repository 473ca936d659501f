"""
httpx client for the Employee Manager REST API.

Attaches the session token to every request and applies one global rule
to responses: any 401 discards the token and raises ``SessionExpiredError``.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from employee_manager.client.session import ClientSession

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000/api"


class ApiError(Exception):
    """Non-2xx response; ``message`` is the server-provided text."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class SessionExpiredError(ApiError):
    """The server rejected the credentials (401). The token is already gone."""

    def __init__(self, message: str) -> None:
        super().__init__(401, message)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        return str(body.get("detail") or body.get("message") or response.reason_phrase)
    return response.reason_phrase


class EmployeeApiClient:
    def __init__(
        self,
        session: ClientSession,
        base_url: str = DEFAULT_BASE_URL,
        transport: httpx.BaseTransport | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.session = session
        self._http = httpx.Client(
            base_url=base_url,
            transport=transport,
            timeout=timeout,
            event_hooks={"request": [self._attach_token]},
        )

    # ── Plumbing ─────────────────────────────────────────────────────
    def _attach_token(self, request: httpx.Request) -> None:
        # Without a token the request goes out bare and the server rejects it
        request.headers.update(self.session.auth_headers())

    def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        response = self._http.request(method, url, **kwargs)
        if response.status_code == 401:
            message = _error_message(response)
            self.session.handle_unauthorized()
            raise SessionExpiredError(message)
        if response.is_error:
            raise ApiError(response.status_code, _error_message(response))
        return response.json()

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> EmployeeApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ── Auth ─────────────────────────────────────────────────────────
    def register(self, name: str, email: str, password: str) -> dict[str, Any]:
        data = self._request(
            "POST", "/auth/register", json={"name": name, "email": email, "password": password}
        )
        return data["admin"]

    def login(self, email: str, password: str) -> dict[str, Any]:
        """Authenticate and keep the issued token; returns the admin summary."""
        data = self._request("POST", "/auth/login", json={"email": email, "password": password})
        self.session.save(data["token"])
        logger.info("Logged in as %s", data["admin"]["email"])
        return data["admin"]

    def logout(self) -> None:
        # Tokens are stateless server-side; forgetting it is the whole logout
        self.session.clear()

    # ── Employees ────────────────────────────────────────────────────
    def list_employees(self) -> list[dict[str, Any]]:
        return self._request("GET", "/employees")

    def get_employee(self, employee_id: str) -> dict[str, Any]:
        return self._request("GET", f"/employees/{employee_id}")

    def create_employee(
        self, name: str, email: str, position: str, department: str, salary: float
    ) -> dict[str, Any]:
        return self._request(
            "POST",
            "/employees",
            json={
                "name": name,
                "email": email,
                "position": position,
                "department": department,
                "salary": salary,
            },
        )

    def update_employee(self, employee_id: str, **fields: Any) -> dict[str, Any]:
        """Send a full replacement; every mutable field must be present."""
        return self._request("PUT", f"/employees/{employee_id}", json=fields)

    def delete_employee(self, employee_id: str) -> dict[str, Any]:
        return self._request("DELETE", f"/employees/{employee_id}")

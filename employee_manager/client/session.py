"""
Client-side session state: the current token and where it is kept.

A ``ClientSession`` is passed explicitly to the API client instead of
living in global state, so it can be tested without real storage.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class TokenStore(Protocol):
    def load(self) -> str | None: ...

    def save(self, token: str) -> None: ...

    def clear(self) -> None: ...


class MemoryTokenStore:
    """Keeps the token for the lifetime of the process only."""

    def __init__(self, token: str | None = None) -> None:
        self._token = token

    def load(self) -> str | None:
        return self._token

    def save(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class FileTokenStore:
    """Persists the token as JSON on local disk, surviving restarts."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def load(self) -> str | None:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable token file %s: %s", self.path, exc)
            return None
        token = data.get("token") if isinstance(data, dict) else None
        return token or None

    def save(self, token: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            # The mode above only applies when the file is created
            self.path.chmod(0o600)
            fh.write(json.dumps({"token": token}))

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class ClientSession:
    """The single "current session" of a client.

    ``on_unauthorized`` is invoked after the token is discarded because the
    server answered 401; it plays the role of sending the user back to the
    login entry point.
    """

    def __init__(
        self,
        store: TokenStore | None = None,
        on_unauthorized: Callable[[], None] | None = None,
    ) -> None:
        self.store: TokenStore = store if store is not None else MemoryTokenStore()
        self.on_unauthorized = on_unauthorized

    @property
    def token(self) -> str | None:
        return self.store.load()

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def save(self, token: str) -> None:
        self.store.save(token)

    def clear(self) -> None:
        self.store.clear()

    def auth_headers(self) -> dict[str, str]:
        token = self.token
        return {"Authorization": f"Bearer {token}"} if token else {}

    def handle_unauthorized(self) -> None:
        """Drop the token unconditionally and force re-authentication."""
        logger.info("Session rejected by server, discarding token")
        self.clear()
        if self.on_unauthorized is not None:
            self.on_unauthorized()

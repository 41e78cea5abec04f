"""Auth collaborator: resolves a bearer token to an actor.

The core never issues or validates credentials.  ``TokenFileAuthenticator``
stands in for an external identity provider by reading a JSON file of
the form::

    {"<token>": {"user_id": "alice", "is_admin": false}}
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from sweetshop.domain.exceptions import StoreError, UnauthorizedError


@dataclass(frozen=True)
class Actor:
    user_id: str
    is_admin: bool = False


class Authenticator(ABC):

    @abstractmethod
    def resolve(self, token: str) -> Actor | None:
        """Return the actor the token belongs to, or None if it is unknown."""


class TokenFileAuthenticator(Authenticator):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    def resolve(self, token: str) -> Actor | None:
        if not token:
            return None
        raw = self._load_raw().get(token)
        if raw is None:
            return None
        try:
            return Actor(user_id=str(raw["user_id"]), is_admin=bool(raw.get("is_admin", False)))
        except (KeyError, TypeError, AttributeError) as exc:
            raise UnauthorizedError("Invalid authorization token") from exc

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> dict[str, dict]:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StoreError(f"Token file {self._file_path} is unreadable: {exc}") from exc
        if not isinstance(raw, dict):
            raise StoreError(f"Token file {self._file_path} must hold a JSON object")
        return raw

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("{}", encoding="utf-8")

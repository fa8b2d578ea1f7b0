from __future__ import annotations

from typing import Mapping, Optional

from ..core.constants import SESSION_KEY
from ..users.http_user_repository import user_from_payload, user_to_payload
from ..users.model import SessionInfo
from .local_store import LocalStore


class SessionStore:
    """Persisted authenticated user plus the opaque bearer token."""

    def __init__(self, store: LocalStore, *, key: str = SESSION_KEY):
        self._store = store
        self._key = key

    def save(self, session: SessionInfo) -> None:
        self._store.set(self._key, {"user": user_to_payload(session.user), "token": session.token})

    def load(self) -> Optional[SessionInfo]:
        raw = self._store.get(self._key)
        if not isinstance(raw, Mapping) or not isinstance(raw.get("user"), Mapping):
            return None
        user = user_from_payload(raw["user"])
        if not user.id:
            return None
        return SessionInfo(user=user, token=raw.get("token") or None)

    def token(self) -> Optional[str]:
        session = self.load()
        return session.token if session else None

    def clear(self) -> None:
        self._store.remove(self._key)

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

import requests

from ..core.constants import DEFAULT_HTTP_TIMEOUT
from ..core.exceptions import SessionExpiredError, TransportError

logger = logging.getLogger(__name__)


class ApiClient:
    """Thin JSON client over a shared requests.Session.

    Reads degrade softly: a network failure on GET returns None and flags the
    client as unavailable so the sync coordinator can switch to offline mode.
    A `strict` read raises TransportError instead; collections that are
    rewritten in full after the read must never be mistaken for empty.
    Writes are fire-and-confirm and raise TransportError instead.
    """

    def __init__(
        self,
        base_url: str,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        token_provider: Optional[Callable[[], Optional[str]]] = None,
        on_session_expired: Optional[Callable[[], None]] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._timeout = float(timeout)
        self._token_provider = token_provider
        self._on_session_expired = on_session_expired
        self._unavailable = False

    @property
    def unavailable(self) -> bool:
        return self._unavailable

    def reset_availability(self) -> None:
        self._unavailable = False

    def url(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    def _headers(self) -> dict:
        headers = {"Accept": "application/json"}
        token = self._token_provider() if self._token_provider else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def check_health(self) -> bool:
        try:
            res = self._session.get(self.url("/health"), timeout=self._timeout)
        except requests.RequestException:
            return False
        return bool(res.ok)

    def get_json(self, path: str, *, context: str, strict: bool = False) -> Any:
        try:
            res = self._session.get(
                self.url(path),
                headers={**self._headers(), "Cache-Control": "no-store"},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.warning("%s: fetch failed (%s)", context, e)
            self._unavailable = True
            if strict:
                raise TransportError(f"{context} failed: server unreachable") from e
            return None
        return self.handle_response(res, context=context)

    def post_json(self, path: str, payload: Any, *, context: str) -> Any:
        try:
            res = self._session.post(
                self.url(path),
                json=payload,
                headers=self._headers(),
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.warning("%s: request failed (%s)", context, e)
            raise TransportError(f"{context} failed: server unreachable") from e
        return self.handle_response(res, context=context)

    def handle_response(self, res: requests.Response, *, context: str) -> Any:
        content_type = res.headers.get("content-type", "")
        is_json = "application/json" in content_type

        if res.status_code == 401:
            logger.warning("Session expired: %s returned 401", context)
            if self._on_session_expired:
                self._on_session_expired()
            raise SessionExpiredError(f"{context} failed: session expired")

        if not res.ok:
            message = None
            if is_json:
                try:
                    body = res.json()
                    message = body.get("message") or body.get("error") if isinstance(body, dict) else None
                except ValueError:
                    message = None
            logger.error(
                "Server error [%s] context=%s url=%s message=%s",
                res.status_code, context, res.url, message or res.text[:200],
            )
            raise TransportError(f"{context} failed: {res.status_code} {res.reason}")

        if not is_json:
            text = res.text or ""
            stripped = text.lstrip().lower()
            if stripped.startswith("<!doctype html") or stripped.startswith("<html"):
                logger.warning("%s: %s returned HTML; backend unreachable or misconfigured", context, res.url)
                raise TransportError(f"SERVER_OFFLINE: {context} received HTML instead of JSON")
            return text or None

        try:
            return res.json()
        except ValueError as e:
            raise TransportError(f"{context} failed: response marked as JSON could not be parsed") from e

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Dict, Optional, TypeVar

import requests
from pydantic import ValidationError

from .config import (
    LOCAL_URL,
    LOGIN_PATH,
    REGISTER_PATH,
    CHARACTER_CREATE_PATH,
    CHARACTER_DELETE_PATH,
    DEFAULT_HEADERS,
)
from .errors import ConnectionFailure, DecodeError, ServerError, TransportError
from .models import Character, Empty, Session


logger = logging.getLogger(__name__)

T = TypeVar("T")

SERVER_UNAVAILABLE = "Unable to connect to server, try again later"
CONNECT_FAILED = "Failed to connect to server"


class Host(Enum):
    LOCAL = "local"
    CUSTOM = "custom"

    @property
    def label(self) -> str:
        return "Local Server" if self is Host.LOCAL else "Custom"


def resolve_base_url(host: Host, custom_host: str = "") -> str:
    if host is Host.LOCAL:
        return LOCAL_URL
    return custom_host


def _describe(err: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in e['loc']) or 'body'}: {e['msg']}" for e in err.errors()
    )


class LauncherAPI:
    """Thin HTTP client for the launcher endpoints.

    Every call is a JSON POST against the selected host. The outcome of the
    most recent call is kept in ``last_error``: the failure message, or None
    after a success. There is no retry and no timeout beyond the defaults of
    ``requests``.
    """

    def __init__(self, host: Host = Host.LOCAL, custom_host: str = ""):
        self.host = host
        self.custom_host = custom_host
        self.session = requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)
        self.last_error: Optional[str] = None

    @property
    def base_url(self) -> str:
        return resolve_base_url(self.host, self.custom_host)

    def url_for(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    # --- Auth ---
    def login(self, username: str, password: str) -> Optional[Session]:
        payload = {"username": username, "password": password}
        return self.post(LOGIN_PATH, payload, Session.model_validate)

    def register(self, username: str, password: str) -> Optional[Session]:
        payload = {"username": username, "password": password}
        return self.post(REGISTER_PATH, payload, Session.model_validate)

    # --- Characters ---
    def create_character(self, token: str) -> Optional[Character]:
        return self.post(CHARACTER_CREATE_PATH, {"token": token}, Character.model_validate)

    def delete_character(self, token: str, char_id: int) -> bool:
        result = self.post(CHARACTER_DELETE_PATH, {"token": token, "charId": char_id}, Empty.model_validate)
        return result is not None

    # --- Core request ---
    def post(self, path: str, body: Optional[Dict[str, Any]], decode: Callable[[Any], T]) -> Optional[T]:
        """Run ``request`` and record its outcome in ``last_error``.

        Returns the decoded value, or None when the call failed.
        """
        try:
            result = self.request(path, body, decode)
        except TransportError as e:
            logger.debug("POST /%s failed: %s", path, e.message)
            self.last_error = e.message
            return None
        self.last_error = None
        return result

    def request(self, path: str, body: Optional[Dict[str, Any]], decode: Callable[[Any], T]) -> T:
        url = self.url_for(path)
        logger.debug("POST %s", url)
        try:
            resp = self.session.post(url, json=body if body is not None else {})
        except requests.exceptions.RequestException as e:
            logger.debug("No response from %s: %s", url, e)
            raise ConnectionFailure(CONNECT_FAILED) from e
        if not 200 <= resp.status_code < 300:
            text = resp.text or ""
            raise ServerError(resp.status_code, text if text else SERVER_UNAVAILABLE)
        return self._decode(resp, decode)

    def clear_error(self) -> None:
        self.last_error = None

    # --- Helpers ---
    @staticmethod
    def _decode(resp: requests.Response, decode: Callable[[Any], T]) -> T:
        try:
            data = resp.json()
        except ValueError as e:
            raise DecodeError(e) from e
        try:
            return decode(data)
        except ValidationError as e:
            raise DecodeError(_describe(e)) from e

"""OAuth client-credentials bearer tokens."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, MutableMapping
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from requests import PreparedRequest
from requests.auth import HTTPBasicAuth

from ..config import ClientConfig
from ..exceptions import ApiError, AuthError, TransportError
from ..http import ExplicitHeaders, HttpMethod
from .base import AuthStrategy

logger = logging.getLogger(__name__)

# Seconds subtracted from `expires_in` when computing `expires_at`.
EXPIRY_MARGIN = 10

Requester = Callable[..., Any]
Clock = Callable[[], float]


@dataclass(frozen=True, slots=True)
class AuthorizationToken:
    """Bearer credential issued by the OAuth endpoint."""

    token_type: str
    access_token: str
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return self.expires_at <= now

    @property
    def header_value(self) -> str:
        return f"{self.token_type} {self.access_token}"

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any], *, issued_at: float) -> AuthorizationToken:
        try:
            return cls(
                token_type=str(payload["token_type"]),
                access_token=str(payload["access_token"]),
                expires_at=issued_at + int(payload.get("expires_in", 0)) - EXPIRY_MARGIN,
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise AuthError(
                "MangoPay token endpoint returned an unexpected payload", details=payload
            ) from exc


class TokenStorage(ABC):
    """Where issued tokens are cached between requests."""

    @abstractmethod
    def get(self, key: str) -> AuthorizationToken | None: ...

    @abstractmethod
    def store(self, key: str, token: AuthorizationToken) -> None: ...

    @abstractmethod
    def clear(self, key: str) -> None: ...


class MemoryTokenStorage(TokenStorage):
    """Keep tokens in a dict; instances may be shared across clients."""

    def __init__(self) -> None:
        self._tokens: dict[str, AuthorizationToken] = {}

    def get(self, key: str) -> AuthorizationToken | None:
        return self._tokens.get(key)

    def store(self, key: str, token: AuthorizationToken) -> None:
        self._tokens[key] = token

    def clear(self, key: str) -> None:
        self._tokens.pop(key, None)


class FileTokenStorage(TokenStorage):
    """Persist tokens as JSON files in a directory shared between processes."""

    def __init__(self, directory: str | os.PathLike[str]) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        slug = "".join(ch if ch.isalnum() else "_" for ch in key)
        return self.directory / f"MangoPay.AuthorizationToken.{slug}.json"

    def get(self, key: str) -> AuthorizationToken | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
            return AuthorizationToken(**payload)
        except (OSError, ValueError, TypeError) as exc:
            logger.warning("Ignoring unreadable MangoPay token cache %s: %s", path, exc)
            return None

    def store(self, key: str, token: AuthorizationToken) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=".token-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(asdict(token), handle)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def clear(self, key: str) -> None:
        self.path_for(key).unlink(missing_ok=True)


_SHARED_STORAGE = MemoryTokenStorage()
_REFRESH_LOCKS: dict[str, threading.Lock] = {}
_REGISTRY_LOCK = threading.Lock()


def default_storage(config: ClientConfig) -> TokenStorage:
    """File storage when `temp_dir` is configured, else the process-wide memory cache."""

    if config.temp_dir:
        return FileTokenStorage(config.temp_dir)
    return _SHARED_STORAGE


def refresh_lock(key: str) -> threading.Lock:
    """Return the process-wide lock guarding refreshes for `key`."""

    with _REGISTRY_LOCK:
        return _REFRESH_LOCKS.setdefault(key, threading.Lock())


class TokenManager(AuthStrategy):
    """Fetch, cache and refresh the bearer token for one client configuration.

    ``requester`` is the dispatcher entry point (``MangoPayClient.request``);
    the exchange goes through it with explicit empty headers so no
    authorization is injected recursively.

    Refresh is serialized: callers that find the token missing or expired
    queue on a lock, and whoever enters after the first exchange reuses the
    stored result instead of issuing another one.
    """

    def __init__(
        self,
        config: ClientConfig,
        requester: Requester,
        *,
        storage: TokenStorage | None = None,
        clock: Clock = time.time,
    ) -> None:
        self._config = config
        self._requester = requester
        self._storage = storage if storage is not None else default_storage(config)
        self._clock = clock
        self._key = config.cache_key()
        self._lock = refresh_lock(self._key)

    @property
    def storage(self) -> TokenStorage:
        return self._storage

    def get_token(self) -> AuthorizationToken:
        token = self._storage.get(self._key)
        if token is not None and not token.is_expired(self._clock()):
            return token
        with self._lock:
            token = self._storage.get(self._key)
            if token is not None and not token.is_expired(self._clock()):
                return token
            token = self._exchange()
            self._storage.store(self._key, token)
            return token

    def apply(self, headers: MutableMapping[str, str]) -> None:
        headers["Authorization"] = self.get_token().header_value

    def invalidate(self) -> None:
        with self._lock:
            self._storage.clear(self._key)

    def _exchange(self) -> AuthorizationToken:
        logger.info(
            "Requesting MangoPay OAuth token (client_id=%s)", self._config.client_id
        )
        issued_at = self._clock()
        try:
            payload = self._requester(
                HttpMethod.POST,
                self._config.token_path,
                headers=ExplicitHeaders({}),
                before_request=self._client_credentials,
            )
        except ApiError as exc:
            raise AuthError(
                f"MangoPay token request failed with status {exc.status_code}",
                status_code=exc.status_code,
                details=exc.details,
            ) from exc
        except TransportError as exc:
            raise AuthError(f"MangoPay token request failed: {exc}", details=exc.details) from exc
        if not isinstance(payload, Mapping):
            raise AuthError("MangoPay token endpoint returned an unexpected payload", details=payload)
        return AuthorizationToken.from_payload(payload, issued_at=issued_at)

    def _client_credentials(self, request: PreparedRequest) -> None:
        body = "grant_type=client_credentials"
        HTTPBasicAuth(self._config.client_id, self._config.client_passphrase)(request)
        request.headers["Content-Type"] = "application/x-www-form-urlencoded"
        request.body = body
        request.prepare_content_length(body)

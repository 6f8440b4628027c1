"""Common helpers for resource wrappers."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import TYPE_CHECKING, Any

from ..http import BeforeRequestHook, HttpMethod

if TYPE_CHECKING:  # pragma: no cover - import-time guard
    from ..client import MangoPayClient


class ResourceBase:
    """Provide shared helpers for resource modules.

    Paths passed to the helpers are relative to the client-scoped API prefix
    (``/v2.01/<client_id>``).
    """

    def __init__(self, client: MangoPayClient) -> None:
        self._client = client

    def _url(self, path: str) -> str:
        normalized = path if path.startswith("/") else f"/{path}"
        return f"{self._client.config.api_path}{normalized}"

    def _get(self, path: str) -> Any:
        return self._client.request(HttpMethod.GET, self._url(path))

    def _list(self, path: str, filters: MutableMapping[str, Any] | None = None) -> list[dict[str, Any]]:
        """GET a collection; ``filters`` also receives the pagination totals."""

        result = self._client.request(
            HttpMethod.GET,
            self._url(path),
            filters=filters if filters is not None else {},
        )
        return result if isinstance(result, list) else []

    def _post(
        self,
        path: str,
        payload: Mapping[str, Any],
        *,
        idempotency_key: str | None = None,
        before_request: BeforeRequestHook | None = None,
    ) -> Any:
        return self._client.request(
            HttpMethod.POST,
            self._url(path),
            params=payload,
            headers=idempotency_key,
            before_request=before_request,
        )

    def _put(self, path: str, payload: Mapping[str, Any]) -> Any:
        return self._client.request(HttpMethod.PUT, self._url(path), params=payload)

"""High-level MangoPay REST client."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, MutableMapping
from typing import Any

import requests

from .auth.base import AuthStrategy
from .auth.token import TokenManager, TokenStorage
from .config import ClientConfig
from .diagnostics import USER_AGENT, client_info_headers
from .exceptions import ApiError
from .http import (
    BeforeRequestHook,
    ExplicitHeaders,
    HeaderSpec,
    HttpMethod,
    IdempotencyKey,
    build_url,
    encode_json,
    parse_response,
    resolve_header_spec,
)
from .http import send as http_send
from .resources import (
    CardRegistrationsResource,
    CardsResource,
    DisputesResource,
    EventsResource,
    HooksResource,
    KycDocumentsResource,
    PayInsResource,
    TransfersResource,
    UsersResource,
    WalletsResource,
)

logger = logging.getLogger(__name__)

PAGINATION_HEADERS = {
    "x-number-of-pages": "total_pages",
    "x-number-of-items": "total_items",
}

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class MangoPayClient:
    """Wrap MangoPay REST endpoints with helper methods."""

    def __init__(
        self,
        *,
        client_id: str,
        client_passphrase: str,
        preproduction: bool = False,
        root_url: str | None = None,
        temp_dir: str | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
        auth_strategy: AuthStrategy | None = None,
        token_storage: TokenStorage | None = None,
    ) -> None:
        self.config = ClientConfig(
            client_id=client_id,
            client_passphrase=client_passphrase,
            preproduction=preproduction,
            root_url=root_url,
            temp_dir=temp_dir,
            timeout=timeout,
        )
        self._session = session or requests.Session()
        self._auth = auth_strategy or TokenManager(self.config, self.request, storage=token_storage)
        self.users = UsersResource(self)
        self.wallets = WalletsResource(self)
        self.card_registrations = CardRegistrationsResource(self)
        self.cards = CardsResource(self)
        self.transfers = TransfersResource(self)
        self.payins = PayInsResource(self)
        self.hooks = HooksResource(self)
        self.events = EventsResource(self)
        self.disputes = DisputesResource(self)
        self.kyc_documents = KycDocumentsResource(self)

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs: Any) -> MangoPayClient:
        return cls(
            client_id=config.client_id,
            client_passphrase=config.client_passphrase,
            preproduction=config.preproduction,
            root_url=config.root_url,
            temp_dir=config.temp_dir,
            timeout=config.timeout,
            **kwargs,
        )

    # Context manager helpers -------------------------------------------------
    def __enter__(self) -> MangoPayClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # pragma: no cover - passthrough
        self.close()

    # Public API --------------------------------------------------------------
    @property
    def auth(self) -> AuthStrategy:
        return self._auth

    def request(
        self,
        method: HttpMethod | str,
        path: str,
        params: Mapping[str, Any] | None = None,
        filters: MutableMapping[str, Any] | None = None,
        headers: HeaderSpec | Mapping[str, str] | str = None,
        before_request: BeforeRequestHook | None = None,
    ) -> Any:
        """Send one API call and return the decoded JSON body.

        - ``params`` is JSON encoded into the body for every method, GET and
          DELETE included.
        - ``filters`` becomes the query string; after a successful call it
          also receives ``total_pages``/``total_items`` from the pagination
          headers.
        - ``headers`` is either a full header mapping sent as-is (no
          authorization added), an idempotency key string, or ``None``.
        - ``before_request`` is called with the prepared request just before
          it is sent.

        Raises `ApiError` for any status other than 200.
        """
        http_method = HttpMethod.coerce(method)
        if filters is None:
            filters = {}
        url = build_url(self.config.resolved_root_url, path, filters)
        outgoing = self._prepare_headers(resolve_header_spec(headers))
        body = encode_json(params if params is not None else {})
        self._log_request(http_method, url)
        response = parse_response(
            http_send(
                self._session,
                http_method,
                url,
                headers=outgoing,
                body=body,
                before_request=before_request,
                timeout=self.config.timeout,
            )
        )

        if response.status_code != 200:
            raise ApiError(url, response.status_code, response.data)

        self._copy_pagination(response.headers, filters)
        return response.data

    def fetch_response(self, idempotency_key: str) -> Any:
        """Return the response previously recorded for ``idempotency_key``."""

        return self.request(
            HttpMethod.GET, f"{self.config.api_path}/responses/{idempotency_key}"
        )

    def close(self) -> None:
        self._session.close()

    # Internal helpers -------------------------------------------------------
    def _prepare_headers(self, spec: HeaderSpec) -> dict[str, str]:
        if isinstance(spec, ExplicitHeaders):
            return dict(spec.headers)
        headers: dict[str, str] = {
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        }
        self._auth.apply(headers)
        headers.update(client_info_headers())
        if isinstance(spec, IdempotencyKey) and spec.key is not None:
            headers["Idempotency-Key"] = spec.key
        return headers

    @staticmethod
    def _copy_pagination(
        headers: Mapping[str, str], filters: MutableMapping[str, Any]
    ) -> None:
        for header, key in PAGINATION_HEADERS.items():
            value = headers.get(header)
            if value is not None:
                filters[key] = _leading_int(value)

    def _log_request(self, method: HttpMethod, url: str) -> None:
        logger.info(
            "MangoPay request %s %s (client_id=%s)",
            method.value,
            url,
            self.config.client_id,
        )


def _leading_int(value: str) -> int:
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else 0

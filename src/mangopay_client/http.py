"""HTTP utilities for MangoPay API access."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union
from urllib.parse import urlencode

import requests
from requests import PreparedRequest, Response, Session

from .exceptions import TransportError

BeforeRequestHook = Callable[[PreparedRequest], None]


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @classmethod
    def coerce(cls, method: HttpMethod | str) -> HttpMethod:
        if isinstance(method, cls):
            return method
        try:
            return cls(str(method).upper())
        except ValueError:
            raise ValueError(f"Unsupported HTTP method: {method!r}") from None


@dataclass(frozen=True, slots=True)
class ExplicitHeaders:
    """Headers sent verbatim; the caller owns authentication."""

    headers: Mapping[str, str]


@dataclass(frozen=True, slots=True)
class IdempotencyKey:
    """Synthesized headers plus an optional `Idempotency-Key`."""

    key: str | None


HeaderSpec = Union[ExplicitHeaders, IdempotencyKey, None]


def resolve_header_spec(value: HeaderSpec | Mapping[str, str] | str) -> HeaderSpec:
    """Normalize a loose header argument into a `HeaderSpec` variant."""

    if value is None or isinstance(value, (ExplicitHeaders, IdempotencyKey)):
        return value
    if isinstance(value, Mapping):
        return ExplicitHeaders(dict(value))
    return IdempotencyKey(str(value))


@dataclass(frozen=True, slots=True)
class DecodeResult:
    """Outcome of decoding a response body."""

    ok: bool
    value: Any = None
    error: Exception | None = None


@dataclass(slots=True)
class HttpResponse:
    """Status code, decoded body and headers of one API response."""

    status_code: int
    data: Any
    headers: Mapping[str, str]


def encode_json(value: Any) -> str:
    return json.dumps(value)


def decode_json(raw: bytes | str | None) -> DecodeResult:
    """Decode a JSON document without raising."""

    try:
        return DecodeResult(ok=True, value=json.loads(raw or b""))
    except (ValueError, TypeError) as exc:
        return DecodeResult(ok=False, error=exc)


def build_url(root_url: str, path: str, filters: Mapping[str, Any] | None = None) -> str:
    """Join root URL and path, appending `filters` as a form-encoded query."""

    url = f"{root_url}{path}"
    if filters:
        url = f"{url}?{urlencode(list(filters.items()), doseq=True)}"
    return url


def send(
    session: Session,
    method: HttpMethod,
    url: str,
    *,
    headers: Mapping[str, str],
    body: str,
    before_request: BeforeRequestHook | None = None,
    timeout: float | None = None,
) -> Response:
    """Prepare, optionally mutate, and transmit a request."""

    prepared = requests.Request(
        method=method.value,
        url=url,
        headers=dict(headers),
        data=body.encode("utf-8"),
    ).prepare()
    if before_request is not None:
        before_request(prepared)

    try:
        settings = session.merge_environment_settings(prepared.url, {}, None, None, None)
        response = session.send(prepared, timeout=timeout, **settings)
    except requests.RequestException as exc:
        reason = str(exc).strip() or exc.__class__.__name__
        raise TransportError(
            f"Failed to communicate with MangoPay API: {reason}", details=reason
        ) from exc

    return response


def parse_response(response: Response) -> HttpResponse:
    """Wrap a response, degrading an undecodable body to an empty mapping."""

    decoded = decode_json(response.content)
    data = decoded.value if decoded.ok else {}
    return HttpResponse(status_code=response.status_code, data=data, headers=response.headers)

"""Custom exception hierarchy for the MangoPay client."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class MangoPayError(RuntimeError):
    """Base error for MangoPay failures."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        details: Any | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class AuthError(MangoPayError):
    """Raised when the client-credentials exchange fails."""


class TransportError(MangoPayError):
    """Raised when an HTTP request cannot reach the API."""


class ApiError(MangoPayError):
    """Raised when the API answers with any status other than 200."""

    def __init__(self, uri: str, status_code: int, details: Mapping[str, Any] | Any) -> None:
        self.uri = uri
        super().__init__(
            self._compose_message(uri, status_code, details),
            status_code=status_code,
            details=details,
        )

    @property
    def type(self) -> str | None:
        return self._detail("Type")

    @property
    def api_message(self) -> str | None:
        return self._detail("Message")

    @property
    def errors(self) -> Mapping[str, Any] | None:
        value = self._detail("errors")
        return value if isinstance(value, Mapping) else None

    def _detail(self, key: str) -> Any:
        if isinstance(self.details, Mapping):
            return self.details.get(key)
        return None

    @staticmethod
    def _compose_message(uri: str, status_code: int, details: Any) -> str:
        message = f"MangoPay API error {status_code} for {uri}"
        if not isinstance(details, Mapping):
            return message
        api_message = details.get("Message")
        if api_message:
            message += f": {api_message}"
        errors = details.get("errors")
        if isinstance(errors, Mapping):
            message += "".join(f" {key}: {value}" for key, value in sorted(errors.items()))
        return message

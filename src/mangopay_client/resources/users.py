"""User helpers."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any

from .base import ResourceBase

USER_KINDS = ("natural", "legal")


class UsersResource(ResourceBase):
    """Work with natural and legal users."""

    def create_natural(
        self, payload: Mapping[str, Any], *, idempotency_key: str | None = None
    ) -> dict[str, Any]:
        return self._post("/users/natural", payload, idempotency_key=idempotency_key)

    def create_legal(
        self, payload: Mapping[str, Any], *, idempotency_key: str | None = None
    ) -> dict[str, Any]:
        return self._post("/users/legal", payload, idempotency_key=idempotency_key)

    def get(self, user_id: str) -> dict[str, Any]:
        return self._get(f"/users/{user_id}")

    def update(self, user_id: str, payload: Mapping[str, Any], *, kind: str = "natural") -> dict[str, Any]:
        """Update a user; ``kind`` selects the natural or legal endpoint."""

        if kind not in USER_KINDS:
            raise ValueError(f"kind must be one of {', '.join(USER_KINDS)}")
        return self._put(f"/users/{kind}/{user_id}", payload)

    def list(self, filters: MutableMapping[str, Any] | None = None) -> list[dict[str, Any]]:
        return self._list("/users", filters)

    def wallets(
        self, user_id: str, filters: MutableMapping[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        return self._list(f"/users/{user_id}/wallets", filters)

    def transactions(
        self, user_id: str, filters: MutableMapping[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        return self._list(f"/users/{user_id}/transactions", filters)

    def cards(
        self, user_id: str, filters: MutableMapping[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        return self._list(f"/users/{user_id}/cards", filters)

    def bank_accounts(
        self, user_id: str, filters: MutableMapping[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        return self._list(f"/users/{user_id}/bankaccounts", filters)

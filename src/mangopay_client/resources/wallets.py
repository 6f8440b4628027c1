"""Wallet helpers."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any

from .base import ResourceBase


class WalletsResource(ResourceBase):
    """Create and inspect e-wallets."""

    def create(
        self, payload: Mapping[str, Any], *, idempotency_key: str | None = None
    ) -> dict[str, Any]:
        return self._post("/wallets", payload, idempotency_key=idempotency_key)

    def get(self, wallet_id: str) -> dict[str, Any]:
        return self._get(f"/wallets/{wallet_id}")

    def update(self, wallet_id: str, payload: Mapping[str, Any]) -> dict[str, Any]:
        return self._put(f"/wallets/{wallet_id}", payload)

    def transactions(
        self, wallet_id: str, filters: MutableMapping[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        return self._list(f"/wallets/{wallet_id}/transactions", filters)

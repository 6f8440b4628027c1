"""Transfer and pay-in helpers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .base import ResourceBase


class TransfersResource(ResourceBase):
    """Move funds between wallets."""

    def create(
        self, payload: Mapping[str, Any], *, idempotency_key: str | None = None
    ) -> dict[str, Any]:
        return self._post("/transfers", payload, idempotency_key=idempotency_key)

    def get(self, transfer_id: str) -> dict[str, Any]:
        return self._get(f"/transfers/{transfer_id}")

    def refund(
        self,
        transfer_id: str,
        payload: Mapping[str, Any],
        *,
        idempotency_key: str | None = None,
    ) -> dict[str, Any]:
        return self._post(
            f"/transfers/{transfer_id}/refunds", payload, idempotency_key=idempotency_key
        )


class PayInsResource(ResourceBase):
    """Credit wallets from external payment methods."""

    def create_card_direct(
        self, payload: Mapping[str, Any], *, idempotency_key: str | None = None
    ) -> dict[str, Any]:
        return self._post("/payins/card/direct", payload, idempotency_key=idempotency_key)

    def get(self, payin_id: str) -> dict[str, Any]:
        return self._get(f"/payins/{payin_id}")

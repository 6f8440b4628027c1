"""Dispute helpers."""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any

from .base import ResourceBase


class DisputesResource(ResourceBase):
    """Inspect and settle chargeback disputes."""

    def get(self, dispute_id: str) -> dict[str, Any]:
        return self._get(f"/disputes/{dispute_id}")

    def list(self, filters: MutableMapping[str, Any] | None = None) -> list[dict[str, Any]]:
        return self._list("/disputes", filters)

    def close(self, dispute_id: str) -> dict[str, Any]:
        return self._put(f"/disputes/{dispute_id}/close", {})

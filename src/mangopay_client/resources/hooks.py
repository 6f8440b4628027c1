"""Webhook registration helpers."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any

from .base import ResourceBase


class HooksResource(ResourceBase):
    """Register callback URLs for event types."""

    def create(
        self, payload: Mapping[str, Any], *, idempotency_key: str | None = None
    ) -> dict[str, Any]:
        return self._post("/hooks", payload, idempotency_key=idempotency_key)

    def get(self, hook_id: str) -> dict[str, Any]:
        return self._get(f"/hooks/{hook_id}")

    def update(self, hook_id: str, payload: Mapping[str, Any]) -> dict[str, Any]:
        return self._put(f"/hooks/{hook_id}", payload)

    def list(self, filters: MutableMapping[str, Any] | None = None) -> list[dict[str, Any]]:
        return self._list("/hooks", filters)


class EventsResource(ResourceBase):
    """Read the event log that hooks are fired from."""

    def list(self, filters: MutableMapping[str, Any] | None = None) -> list[dict[str, Any]]:
        return self._list("/events", filters)

"""Card registration and card helpers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .base import ResourceBase


class CardRegistrationsResource(ResourceBase):
    """Register card details for later tokenization."""

    def create(
        self, payload: Mapping[str, Any], *, idempotency_key: str | None = None
    ) -> dict[str, Any]:
        return self._post("/cardregistrations", payload, idempotency_key=idempotency_key)

    def get(self, registration_id: str) -> dict[str, Any]:
        return self._get(f"/cardregistrations/{registration_id}")

    def update(self, registration_id: str, payload: Mapping[str, Any]) -> dict[str, Any]:
        """Submit the tokenization ``RegistrationData`` returned by the card server."""

        return self._put(f"/cardregistrations/{registration_id}", payload)


class CardsResource(ResourceBase):
    """Inspect registered cards."""

    def get(self, card_id: str) -> dict[str, Any]:
        return self._get(f"/cards/{card_id}")

    def deactivate(self, card_id: str) -> dict[str, Any]:
        return self._put(f"/cards/{card_id}", {"Active": False})

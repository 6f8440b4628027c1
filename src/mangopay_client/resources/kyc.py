"""KYC document helpers."""

from __future__ import annotations

import base64
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from requests import PreparedRequest

from .base import ResourceBase


class KycDocumentsResource(ResourceBase):
    """Create KYC documents, upload their pages and submit them for review."""

    def create(
        self, user_id: str, payload: Mapping[str, Any], *, idempotency_key: str | None = None
    ) -> dict[str, Any]:
        return self._post(
            f"/users/{user_id}/KYC/documents", payload, idempotency_key=idempotency_key
        )

    def get(self, document_id: str) -> dict[str, Any]:
        return self._get(f"/KYC/documents/{document_id}")

    def submit(self, user_id: str, document_id: str) -> dict[str, Any]:
        return self._put(
            f"/users/{user_id}/KYC/documents/{document_id}", {"Status": "VALIDATION_ASKED"}
        )

    def create_page(
        self,
        user_id: str,
        document_id: str,
        content: bytes | str | os.PathLike[str],
    ) -> Any:
        """Upload one page; ``content`` is raw file bytes or a path to the file.

        The page goes out as ``{"File": "<base64>"}``, written onto the
        prepared request by a pre-send hook.
        """

        if not isinstance(content, bytes):
            content = Path(content).read_bytes()
        encoded = base64.b64encode(content)

        def install_page(request: PreparedRequest) -> None:
            body = b'{"File": "' + encoded + b'"}'
            request.body = body
            request.prepare_content_length(body)

        return self._post(
            f"/users/{user_id}/KYC/documents/{document_id}/pages",
            {},
            before_request=install_page,
        )

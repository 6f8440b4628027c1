"""Configuration helpers for the MangoPay client."""

from __future__ import annotations

from dataclasses import dataclass

VERSION = "3.0.0"
API_VERSION = "v2.01"

PRODUCTION_URL = "https://api.mangopay.com"
SANDBOX_URL = "https://api.sandbox.mangopay.com"


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Typed configuration for `MangoPayClient`."""

    client_id: str
    client_passphrase: str
    preproduction: bool = False
    root_url: str | None = None
    temp_dir: str | None = None
    timeout: float | None = None

    @property
    def resolved_root_url(self) -> str:
        if self.root_url:
            return self.root_url.rstrip("/")
        return SANDBOX_URL if self.preproduction else PRODUCTION_URL

    @property
    def api_path(self) -> str:
        return f"/{API_VERSION}/{self.client_id}"

    @property
    def token_path(self) -> str:
        return f"/{API_VERSION}/oauth/token"

    def cache_key(self) -> str:
        """Identify the token cache slot for this root URL and client."""
        return f"{self.resolved_root_url}|{self.client_id}"

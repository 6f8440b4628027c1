"""High-level MangoPay client entrypoints."""
from .client import MangoPayClient
from .config import API_VERSION, VERSION, ClientConfig
from .exceptions import ApiError, AuthError, MangoPayError, TransportError
from .http import ExplicitHeaders, HttpMethod, IdempotencyKey

__version__ = VERSION

__all__ = [
    "MangoPayClient",
    "ClientConfig",
    "MangoPayError",
    "ApiError",
    "AuthError",
    "TransportError",
    "HttpMethod",
    "ExplicitHeaders",
    "IdempotencyKey",
    "API_VERSION",
    "VERSION",
]

"""Authentication strategies for MangoPay."""
from .base import AuthStrategy
from .token import (
    AuthorizationToken,
    FileTokenStorage,
    MemoryTokenStorage,
    TokenManager,
    TokenStorage,
)

__all__ = [
    "AuthStrategy",
    "AuthorizationToken",
    "TokenManager",
    "TokenStorage",
    "MemoryTokenStorage",
    "FileTokenStorage",
]

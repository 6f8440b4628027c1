"""Client identification headers sent with every synthesized request."""

from __future__ import annotations

import logging
import platform
import sys
from collections.abc import Callable, Mapping
from typing import Any

from .config import VERSION
from .http import encode_json

logger = logging.getLogger(__name__)

USER_AGENT = f"MangoPay V2 PythonBindings/{VERSION}"
CLIENT_USER_AGENT_HEADER = "X-MangoPay-Client-User-Agent"
RAW_USER_AGENT_HEADER = "X-MangoPay-Client-Raw-User-Agent"
USER_AGENT_ERROR_HEADER = "X-MangoPay-Client-User-Agent-Error"


def get_uname() -> str:
    try:
        return " ".join(part for part in platform.uname() if part)
    except Exception:  # noqa: BLE001
        return "uname lookup failed"


def client_info() -> dict[str, Any]:
    return {
        "bindings_version": VERSION,
        "lang": "python",
        "lang_version": f"{platform.python_version()} ({platform.python_implementation()})",
        "platform": sys.platform,
        "uname": get_uname(),
    }


def client_info_headers(
    info: Mapping[str, Any] | None = None,
    *,
    encoder: Callable[[Any], str] = encode_json,
) -> dict[str, str]:
    """Describe the running client; falls back to a raw repr if encoding fails."""

    try:
        if info is None:
            info = client_info()
        return {CLIENT_USER_AGENT_HEADER: encoder(info)}
    except Exception as exc:  # noqa: BLE001 - header synthesis never aborts a request
        logger.debug("Client info could not be collected or encoded: %s", exc)
        return {
            RAW_USER_AGENT_HEADER: _safe_repr(info),
            USER_AGENT_ERROR_HEADER: f"{' '.join(str(exc).split())} ({exc.__class__.__name__})",
        }


def _safe_repr(value: Any) -> str:
    if value is None:
        return "unavailable"
    try:
        return repr(value)
    except Exception:  # noqa: BLE001
        return "unavailable"

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Optional

import httpx

logger = logging.getLogger(__name__)

ClientFactory = Callable[[], httpx.Client]


def create_client(settings, transport: Optional[httpx.BaseTransport] = None) -> httpx.Client:
    """Create a short-lived httpx client; no retries, no content-type default.

    ``request_timeout`` is only passed when configured so httpx's own default
    governs otherwise.
    """
    kwargs: dict[str, Any] = {}
    if settings.request_timeout is not None:
        kwargs["timeout"] = settings.request_timeout
    if transport is not None:
        kwargs["transport"] = transport
    return httpx.Client(**kwargs)


def client_factory_for(settings, transport: Optional[httpx.BaseTransport] = None) -> ClientFactory:
    return lambda: create_client(settings, transport=transport)


def read_json(response: httpx.Response) -> Optional[Any]:
    """Best-effort JSON body; ``None`` when the body is empty or not JSON."""
    if not response.content:
        return None
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError, ValueError):
        logger.debug("Response body (HTTP %s) is not JSON", response.status_code)
        return None


def body_message(body: Any, *keys: str) -> Optional[str]:
    """First non-empty string among ``keys`` of a JSON object body."""
    if not isinstance(body, dict):
        return None
    for key in keys:
        value = body.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return None

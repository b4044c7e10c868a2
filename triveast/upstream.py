"""
Shared GET-and-decode helper for upstream providers.

Every call carries an explicit timeout. Transport failures, non-2xx
statuses and bodies that are not JSON all surface as FetchError, so
callers only have one transport error type to handle.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from triveast.errors import FetchError

logger = logging.getLogger("triveast.upstream")

DEFAULT_HEADERS = {"User-Agent": "Mozilla/5.0 (compatible; triveast/0.1)"}


async def get_json(
    url: str,
    params: dict[str, Any] | None = None,
    *,
    timeout: float = 10.0,
    client: httpx.AsyncClient | None = None,
) -> Any:
    """GET url and return the decoded JSON body."""
    try:
        if client is not None:
            r = await client.get(url, params=params, headers=DEFAULT_HEADERS, timeout=timeout)
        else:
            async with httpx.AsyncClient(timeout=timeout) as own:
                r = await own.get(url, params=params, headers=DEFAULT_HEADERS)
        r.raise_for_status()
        return r.json()
    except httpx.HTTPStatusError as e:
        raise FetchError(f"HTTP error! status: {e.response.status_code}") from e
    except httpx.RequestError as e:
        raise FetchError(f"{type(e).__name__} calling {url}") from e
    except ValueError as e:
        # json.JSONDecodeError is a ValueError
        raise FetchError(f"Undecodable response from {url}") from e

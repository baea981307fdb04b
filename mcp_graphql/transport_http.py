"""
Outbound HTTP helpers shared by schema introspection and query forwarding.
"""

from __future__ import annotations

import contextlib
from typing import AsyncIterator, Mapping, Optional

import httpx


def merge_headers(
    configured: Optional[Mapping[str, str]] = None,
    per_call: Optional[Mapping[str, str]] = None,
) -> httpx.Headers:
    # Later sources replace earlier ones; names compare case-insensitively
    merged = httpx.Headers({"Content-Type": "application/json"})
    merged.update(dict(configured or {}))
    merged.update(dict(per_call or {}))
    return merged


@contextlib.asynccontextmanager
async def http_client(
    client: Optional[httpx.AsyncClient], timeout: float
) -> AsyncIterator[httpx.AsyncClient]:
    """Yield ``client`` when one is shared, else a short-lived client."""
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient(timeout=timeout) as owned:
        yield owned

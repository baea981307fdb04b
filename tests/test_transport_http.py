"""
Tests for the shared outbound HTTP helpers
"""

import httpx
import pytest

from mcp_graphql.transport_http import http_client, merge_headers


def test_merge_headers_precedence():
    merged = merge_headers(
        {"Authorization": "Bearer configured", "X-Team": "core", "content-type": "text/x"},
        {"authorization": "Bearer per-call"},
    )
    assert merged["Authorization"] == "Bearer per-call"
    assert merged["X-Team"] == "core"
    assert merged.get_list("content-type") == ["text/x"]
    assert merged.get_list("authorization") == ["Bearer per-call"]
    assert merge_headers()["Content-Type"] == "application/json"


@pytest.mark.asyncio
async def test_http_client_yields_shared_client_without_closing_it():
    shared = httpx.AsyncClient()
    async with http_client(shared, timeout=1.0) as client:
        assert client is shared
    assert shared.is_closed is False
    await shared.aclose()


@pytest.mark.asyncio
async def test_http_client_closes_owned_client():
    async with http_client(None, timeout=2.5) as client:
        owned = client
        assert owned.timeout.connect == 2.5
    assert owned.is_closed is True

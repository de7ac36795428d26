"""Unit tests for HTTPClient.

Tests focus on session management and mapping of responses to errors.
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from tally.reporting.core import InvalidQueryError, MalformedResponseError
from tally.reporting.runtime.rest import HTTPClient


def mock_session(status: int = 200, reason: str = "OK", body=None, json_error=None) -> MagicMock:
    response = MagicMock()
    response.status = status
    response.reason = reason
    response.json = AsyncMock(return_value=body, side_effect=json_error)

    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=response)
    context.__aexit__ = AsyncMock(return_value=False)

    session = MagicMock()
    session.closed = False
    session.get = MagicMock(return_value=context)
    session.close = AsyncMock()
    return session


class TestHTTPClientSessionManagement:
    """Test HTTPClient session management."""

    def test_init(self):
        client = HTTPClient(timeout=10.0)
        assert client.timeout.total == 10.0
        assert client._session is None

    @pytest.mark.asyncio
    async def test_session_property_creates_session(self):
        client = HTTPClient()
        session = client.session
        assert isinstance(session, aiohttp.ClientSession)
        assert client._session is session
        await client.close()

    @pytest.mark.asyncio
    async def test_close_idempotent(self):
        client = HTTPClient()
        await client.close()
        await client.close()

    @pytest.mark.asyncio
    async def test_context_manager(self):
        async with HTTPClient() as client:
            assert client.session is not None

        assert client._session is None or client._session.closed


class TestHTTPClientGet:
    """Test response handling."""

    @pytest.mark.asyncio
    async def test_success_returns_body(self):
        client = HTTPClient()
        client._session = mock_session(body={"totalResults": 0})

        data = await client.get("https://example.com/data", params={"ids": "ga:1"})

        assert data == {"totalResults": 0}
        client._session.get.assert_called_once_with(
            "https://example.com/data", params={"ids": "ga:1"}
        )

    @pytest.mark.asyncio
    async def test_error_status_raises_invalid_query(self):
        client = HTTPClient()
        client._session = mock_session(status=500, reason="Internal Server Error")

        with pytest.raises(InvalidQueryError) as exc_info:
            await client.get("https://example.com/data")

        assert exc_info.value.status_code == 500
        assert exc_info.value.reason == "Internal Server Error"

    @pytest.mark.asyncio
    async def test_undecodable_body_raises_malformed(self):
        client = HTTPClient()
        client._session = mock_session(json_error=json.JSONDecodeError("Expecting value", "", 0))

        with pytest.raises(MalformedResponseError, match="not valid JSON"):
            await client.get("https://example.com/data")

    @pytest.mark.asyncio
    async def test_non_object_body_raises_malformed(self):
        client = HTTPClient()
        client._session = mock_session(body=[1, 2])

        with pytest.raises(MalformedResponseError, match="expected object"):
            await client.get("https://example.com/data")

"""HTTP client helper."""

from __future__ import annotations

from typing import Any

import aiohttp

from ...core.exceptions import InvalidQueryError, MalformedResponseError


class HTTPClient:
    """Async HTTP client wrapper for the reporting API.

    Only a 200 response is a success. Any other status raises
    ``InvalidQueryError`` carrying the upstream reason phrase.
    """

    def __init__(self, timeout: float = 30.0) -> None:
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def get(self, url: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """GET request returning the decoded JSON object.

        Raises:
            InvalidQueryError: Non-200 status
            MalformedResponseError: Body is not a JSON object
        """
        async with self.session.get(url, params=params) as response:
            if response.status != 200:
                raise InvalidQueryError(response.reason or str(response.status), response.status)
            try:
                data = await response.json(content_type=None)
            except ValueError as e:
                raise MalformedResponseError(f"Response body is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Invalid response format: expected object, got {type(data).__name__}",
                payload=data,
            )
        return data

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()

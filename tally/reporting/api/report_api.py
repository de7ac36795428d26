"""ReportAPI facade for fetching complete reports.

The ReportAPI wires the query planner, the rate-governed page fetcher and
the page merger into one call, and owns the HTTP transport lifecycle.

Architecture:
    Data flows strictly one way:
    - QueryPlanner.build splits the query into URL-sized parameter sets
    - PageFetcher.fetch requests every page under the identity quota
    - merge_pages stitches the pages into one MergedResult

Design Decisions:
    - Transport injection allows testing with mock transports
    - Token provider injection keeps credential acquisition outside the library
    - Context manager pattern ensures proper resource cleanup
    - All-or-nothing: any failure propagates and no partial report is returned
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from ..core.clock import Clock
from ..models import MergedResult, Page, ParameterSet, Query
from ..runtime.paging import (
    PageFetcher,
    QueryPlanner,
    QuotaPolicy,
    Transport,
    UrlBudget,
    merge_pages,
)
from ..runtime.rest import HTTPClient

logger = logging.getLogger(__name__)


class TokenProvider(Protocol):
    """Source of access tokens (OAuth client, service account, ...)."""

    def get_access_token(self) -> str: ...


class ReportAPI:
    """High-level facade for fetching merged reports."""

    def __init__(
        self,
        *,
        token_provider: TokenProvider | None = None,
        transport: Transport | None = None,
        budget: UrlBudget | None = None,
        quota: QuotaPolicy | None = None,
        clock: Clock | None = None,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the ReportAPI.

        Args:
            token_provider: Optional token source stamped onto every query
            transport: Optional transport (creates an HTTPClient if not provided)
            budget: URL length budget for the planner
            quota: Per identity key quota for the fetcher
            clock: Clock used for quota throttling
            timeout: Total request timeout for the default HTTPClient
        """
        self._token_provider = token_provider
        self._owns_transport = transport is None
        self._transport: Transport = transport or HTTPClient(timeout=timeout)
        self._planner = QueryPlanner(budget)
        self._fetcher = PageFetcher(self._transport, quota=quota, clock=clock)
        self._closed = False

    def _resolve_query(self, query: Query) -> Query:
        """Stamp the provider's access token onto the query, if any."""
        if self._token_provider is None:
            return query
        return query.with_access_token(self._token_provider.get_access_token())

    def build(self, query: Query) -> list[ParameterSet]:
        """Plan the parameter sets for ``query``."""
        return self._planner.build(self._resolve_query(query))

    async def fetch_pages(self, query: Query) -> list[Page]:
        """Fetch every raw page for ``query`` without merging."""
        return await self._fetcher.fetch(self.build(query))

    async def fetch_report(self, query: Query) -> MergedResult:
        """Fetch and merge the complete report for ``query``.

        Raises:
            InvalidQueryError: The API rejected one of the requests
            MalformedResponseError: A response could not be decoded
        """
        logger.debug(
            "Fetching report",
            extra={"ids": query.normalized_ids(), "filters": len(query.filters)},
        )
        pages = await self.fetch_pages(query)
        return merge_pages(pages)

    # --- Lifecycle -----------------------------------------------------------

    async def close(self) -> None:
        """Close the API and clean up resources."""
        if self._closed:
            return
        self._closed = True
        logger.debug("Closing ReportAPI")
        if self._owns_transport and isinstance(self._transport, HTTPClient):
            await self._transport.close()

    async def __aenter__(self) -> ReportAPI:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

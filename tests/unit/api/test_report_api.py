"""Unit tests for the ReportAPI facade."""

from __future__ import annotations

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from tally.reporting import InvalidQueryError, Query, ReportAPI
from tally.reporting.runtime.paging import UrlBudget
from tally.reporting.runtime.rest import HTTPClient


def make_query(**overrides) -> Query:
    fields = {
        "ids": ["42"],
        "start_date": date(2024, 1, 1),
        "end_date": date(2024, 1, 31),
        "dimensions": ["ga:pagePath"],
        "max_results": 10,
        "user_ip": "10.0.0.1",
    }
    fields.update(overrides)
    return Query(**fields)


@pytest.fixture
def transport(page_payload):
    """Transport returning two pages per filter set."""

    async def get(url, params=None):
        start_index = params["start-index"]
        tag = params.get("filters", "all")
        return page_payload(
            start_index=start_index,
            max_results=params["max-results"],
            total_results=15,
            rows=[[tag, str(start_index)]],
            totals={"ga:pageviews": "15"},
        )

    mock = MagicMock()
    mock.get = AsyncMock(side_effect=get)
    return mock


class TestReportAPI:
    """Test the build -> fetch -> merge pipeline."""

    @pytest.mark.asyncio
    async def test_fetch_report_merges_all_pages(self, transport, fake_clock):
        api = ReportAPI(transport=transport, clock=fake_clock)

        report = await api.fetch_report(make_query())

        assert transport.get.await_count == 2
        assert report.rows == [["all", "1"], ["all", "2"]]
        assert report.totals_for_all_results == {"ga:pageviews": 15}
        assert report.total_results == 15

    @pytest.mark.asyncio
    async def test_split_filters_sum_totals(self, transport, fake_clock):
        a, b = "ga:pagePath==/a", "ga:pagePath==/b"
        query = make_query(filters=[a, b])
        base = len(query.query_to_string(query.to_params(filters=())))
        # Force one parameter set per filter
        budget = UrlBudget(limit=base + 1, overhead=0)
        api = ReportAPI(transport=transport, budget=budget, clock=fake_clock)

        report = await api.fetch_report(query)

        assert transport.get.await_count == 4
        assert [row[0] for row in report.rows] == [a, a, b, b]
        assert report.totals_for_all_results == {"ga:pageviews": 30}

    @pytest.mark.asyncio
    async def test_token_provider_stamps_access_token(self, transport, fake_clock):
        provider = MagicMock()
        provider.get_access_token.return_value = "fresh-token"
        api = ReportAPI(token_provider=provider, transport=transport, clock=fake_clock)

        sets = api.build(make_query(access_token="stale"))
        await api.fetch_pages(make_query())

        assert sets[0].params["access_token"] == "fresh-token"
        for call in transport.get.await_args_list:
            assert call.kwargs["params"]["access_token"] == "fresh-token"

    @pytest.mark.asyncio
    async def test_error_status_returns_no_report(self, fake_clock):
        transport = MagicMock()
        transport.get = AsyncMock(side_effect=InvalidQueryError("Internal Server Error", 500))
        api = ReportAPI(transport=transport, clock=fake_clock)

        with pytest.raises(InvalidQueryError, match="Internal Server Error"):
            await api.fetch_report(make_query())

    @pytest.mark.asyncio
    async def test_close_leaves_injected_transport_open(self, transport):
        transport.close = AsyncMock()

        async with ReportAPI(transport=transport):
            pass

        transport.close.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_close_closes_owned_http_client(self):
        api = ReportAPI()
        assert isinstance(api._transport, HTTPClient)
        api._transport.close = AsyncMock()

        await api.close()
        await api.close()

        api._transport.close.assert_awaited_once()

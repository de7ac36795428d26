"""Tally Reporting - paginated, rate-governed analytics report client."""

from .api import ReportAPI, TokenProvider
from .core import (
    Clock,
    InvalidQueryError,
    MalformedResponseError,
    MonotonicClock,
    ProviderError,
    ReportingError,
)
from .models import MergedResult, Page, PageQuery, ParameterSet, Query
from .runtime.paging import (
    PageFetcher,
    QueryPlanner,
    QuotaPolicy,
    RateState,
    UrlBudget,
    merge_pages,
)
from .runtime.rest import HTTPClient

__version__ = "0.1.0"

__all__ = [
    # API
    "ReportAPI",
    "TokenProvider",
    # Models
    "Query",
    "ParameterSet",
    "Page",
    "PageQuery",
    "MergedResult",
    # Paging
    "QueryPlanner",
    "PageFetcher",
    "merge_pages",
    "UrlBudget",
    "QuotaPolicy",
    "RateState",
    # Transport
    "HTTPClient",
    # Core
    "Clock",
    "MonotonicClock",
    "ReportingError",
    "ProviderError",
    "InvalidQueryError",
    "MalformedResponseError",
]

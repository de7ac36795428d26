"""Logical report query model."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from typing import Any
from urllib.parse import urlencode

from dateutil.relativedelta import relativedelta
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..config import (
    BASE_URL_API,
    DATE_FORMAT,
    DEFAULT_FILTERS_SEPARATOR,
    DEFAULT_LOOKBACK_MONTHS,
    DEFAULT_MAX_RESULTS,
    DEFAULT_METRICS,
    DEFAULT_START_INDEX,
    IDS_PREFIX,
)


def _default_start_date() -> date:
    return date.today() - relativedelta(months=DEFAULT_LOOKBACK_MONTHS)


class Query(BaseModel):
    """Report query against the reporting API.

    A query is immutable: use ``with_filters`` or ``with_access_token`` to
    derive a modified copy. Serialisation helpers are pure and take the
    filter subset and start index explicitly so the planner can measure
    request lengths without touching the query itself.
    """

    ids: tuple[str, ...]
    base_url_api: str = BASE_URL_API
    access_token: str | None = None
    start_date: date = Field(default_factory=_default_start_date)
    end_date: date = Field(default_factory=date.today)
    metrics: tuple[str, ...] = Field(default=DEFAULT_METRICS, min_length=1)
    dimensions: tuple[str, ...] = ()
    sorts: tuple[str, ...] = ()
    filters: tuple[str, ...] = ()
    filters_separator: str = DEFAULT_FILTERS_SEPARATOR
    segment: str | None = None
    start_index: int = Field(default=DEFAULT_START_INDEX, ge=1)
    max_results: int = Field(default=DEFAULT_MAX_RESULTS, ge=1)
    user_ip: str | None = None
    quota_user: str | None = None

    model_config = ConfigDict(frozen=True)

    @field_validator("ids", mode="before")
    @classmethod
    def coerce_ids(cls, v: Any) -> Any:
        """Accept numeric or padded account ids."""
        if isinstance(v, (list, tuple)):
            return tuple(str(item).strip() for item in v)
        return v

    @model_validator(mode="after")
    def validate_date_range(self) -> Query:
        """Validate start_date <= end_date."""
        if self.start_date > self.end_date:
            raise ValueError("start_date must be <= end_date")
        return self

    def normalized_ids(self) -> str:
        """Render ids as ``ga:xxxx,ga:yyyy``."""
        return ",".join(f"{IDS_PREFIX}{account_id}" for account_id in self.ids)

    def has_dimensions(self) -> bool:
        return bool(self.dimensions)

    def has_sorts(self) -> bool:
        return bool(self.sorts)

    def has_filters(self) -> bool:
        return bool(self.filters)

    def has_segment(self) -> bool:
        return self.segment is not None

    def has_user_ip(self) -> bool:
        return self.user_ip is not None

    def has_quota_user(self) -> bool:
        return self.quota_user is not None

    def with_filters(
        self, filters: Sequence[str], separator: str = DEFAULT_FILTERS_SEPARATOR
    ) -> Query:
        """Return a copy with new filters and filter separator."""
        return self.model_copy(update={"filters": tuple(filters), "filters_separator": separator})

    def with_access_token(self, access_token: str) -> Query:
        """Return a copy carrying ``access_token``."""
        return self.model_copy(update={"access_token": access_token})

    def to_params(
        self,
        filters: Sequence[str] | None = None,
        start_index: int | None = None,
    ) -> dict[str, Any]:
        """Build request query parameters.

        Args:
            filters: Filter subset to send (defaults to the query's filters)
            start_index: Start index to send (defaults to the query's start index)

        Returns:
            Ordered mapping of parameter name to value
        """
        if filters is None:
            filters = self.filters
        if start_index is None:
            start_index = self.start_index

        params: dict[str, Any] = {"ids": self.normalized_ids()}
        if self.access_token is not None:
            params["access_token"] = self.access_token
        params.update(
            {
                "metrics": ",".join(self.metrics),
                "start-date": self.start_date.strftime(DATE_FORMAT),
                "end-date": self.end_date.strftime(DATE_FORMAT),
                "start-index": start_index,
                "max-results": self.max_results,
            }
        )
        if self.has_quota_user():
            params["quotaUser"] = self.quota_user
        if self.has_user_ip():
            params["userIp"] = self.user_ip
        if self.has_segment():
            params["segment"] = self.segment
        if self.has_dimensions():
            params["dimensions"] = ",".join(self.dimensions)
        if self.has_sorts():
            params["sort"] = ",".join(self.sorts)
        if filters:
            params["filters"] = self.filters_separator.join(filters)
        return params

    def query_to_string(self, params: dict[str, Any]) -> str:
        """Render ``<base_url_api>?<form-encoded params>``."""
        return f"{self.base_url_api}?{urlencode(params)}"

    def query_length(self, params: dict[str, Any]) -> int:
        return len(self.query_to_string(params))

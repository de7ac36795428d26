"""Request-ready parameter set model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .query import Query


class ParameterSet(BaseModel):
    """One concrete request derived from a query.

    Holds the query snapshot, the filter subset packed into this request and
    the start index to request. ``params`` renders the wire parameters.
    """

    query: Query
    filters: tuple[str, ...] = ()
    start_index: int = Field(..., ge=1)

    model_config = ConfigDict(frozen=True)

    @property
    def identity_key(self) -> str | None:
        """Rate-limit partition key (the caller's ``userIp``)."""
        return self.query.user_ip

    @property
    def base_url(self) -> str:
        return self.query.base_url_api

    @property
    def params(self) -> dict[str, Any]:
        return self.query.to_params(filters=self.filters, start_index=self.start_index)

    @property
    def url(self) -> str:
        return self.query.query_to_string(self.params)

    def with_start_index(self, start_index: int) -> ParameterSet:
        """Same request parameters at another start index."""
        return self.model_copy(update={"start_index": start_index})

"""Report page and merged report models.

Field names follow Python conventions; aliases match the JSON keys of the
reporting API so pages validate straight from the response body and dump
back to the same shape with ``by_alias=True``. Unknown envelope fields
(``kind``, ``columnHeaders``, ``profileInfo``, ...) are kept verbatim.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

Total = int | float


class PageQuery(BaseModel):
    """Pagination fields echoed back by the API."""

    start_index: int = Field(..., alias="start-index", ge=1)
    max_results: int = Field(..., alias="max-results", ge=1)

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)


class Page(BaseModel):
    """One raw paginated response."""

    query: PageQuery
    total_results: int = Field(..., alias="totalResults", ge=0)
    rows: list[Any] = Field(default_factory=list)
    totals_for_all_results: dict[str, Total] = Field(
        default_factory=dict, alias="totalsForAllResults"
    )

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    @field_validator("rows", mode="before")
    @classmethod
    def default_rows(cls, v: Any) -> Any:
        """Absent or null rows mean an empty page."""
        return [] if v is None else v

    @property
    def start_index(self) -> int:
        return self.query.start_index

    @property
    def max_results(self) -> int:
        return self.query.max_results

    @property
    def is_first_page(self) -> bool:
        return self.query.start_index == 1

    @property
    def has_next_page(self) -> bool:
        """Whether more results exist past this page."""
        return self.total_results >= self.start_index * self.max_results


class MergedResult(BaseModel):
    """All pages of a run stitched into one report."""

    query: PageQuery | None = None
    total_results: int | None = Field(default=None, alias="totalResults")
    rows: list[Any] = Field(default_factory=list)
    totals_for_all_results: dict[str, Total] = Field(
        default_factory=dict, alias="totalsForAllResults"
    )

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    @property
    def is_empty(self) -> bool:
        return self.query is None and not self.rows

    def to_dict(self) -> dict[str, Any]:
        """Dump to the API's JSON shape (empty dict for an empty report)."""
        if self.is_empty:
            return {}
        return self.model_dump(by_alias=True)

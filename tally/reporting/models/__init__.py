"""Data models for report queries and responses.

Architecture:
    All models are Pydantic v2 and immutable (frozen=True). Queries are
    derived rather than mutated, which keeps the planner's length probing
    free of save/restore state.

Model Categories:
    - Requests: Query, ParameterSet
    - Responses: Page, PageQuery, MergedResult
"""

from .page import MergedResult, Page, PageQuery
from .parameter_set import ParameterSet
from .query import Query

__all__ = [
    "MergedResult",
    "Page",
    "PageQuery",
    "ParameterSet",
    "Query",
]

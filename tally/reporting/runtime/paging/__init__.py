"""Paging layer: request planning, rate-governed fetching and merging.

Architecture:
    The paging layer consists of:
    - definitions.py: URL budget, quota policy and per-run rate state
    - planners.py: Packs filter predicates into parameter sets
    - executors.py: Fetches and paginates parameter sets under the quota
    - mergers.py: Stitches pages into one report
    - telemetry.py: Structured logging

Usage:
    Data flows one way: QueryPlanner.build -> PageFetcher.fetch -> merge_pages.
"""

from __future__ import annotations

from .definitions import QuotaPolicy, RateState, UrlBudget
from .executors import PageFetcher, Transport
from .mergers import fold_totals, merge_pages, sum_totals
from .planners import QueryPlanner, request_length

__all__ = [
    "UrlBudget",
    "QuotaPolicy",
    "RateState",
    "QueryPlanner",
    "PageFetcher",
    "Transport",
    "merge_pages",
    "fold_totals",
    "sum_totals",
    "request_length",
]

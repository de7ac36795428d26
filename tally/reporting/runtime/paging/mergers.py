"""Merging of fetched pages into one report."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ...models import MergedResult, Page
from ...models.page import Total
from .telemetry import log_pages_merged


def fold_totals(pages: Sequence[Page]) -> dict[str, list[Total]]:
    """Collect per-metric totals from the first page of each parameter set.

    Continuation pages repeat the totals of their first page and are skipped
    so no total is counted twice.
    """
    collected: dict[str, list[Total]] = {}
    for page in pages:
        if not page.is_first_page:
            continue
        for metric, value in page.totals_for_all_results.items():
            collected.setdefault(metric, []).append(value)
    return collected


def sum_totals(collected: dict[str, list[Total]]) -> dict[str, Total]:
    """Sum collected values; a metric reported once keeps its own value."""
    return {
        metric: values[0] if len(values) == 1 else sum(values)
        for metric, values in collected.items()
    }


def merge_pages(pages: Sequence[Page]) -> MergedResult:
    """Merge pages into one report.

    The envelope is copied from the first page. Rows are concatenated in
    page order and totals are summed over first pages only.

    Args:
        pages: Pages in request order

    Returns:
        Merged report; empty when ``pages`` is empty
    """
    if not pages:
        return MergedResult()

    rows: list[Any] = []
    for page in pages:
        rows.extend(page.rows)

    totals = sum_totals(fold_totals(pages))

    envelope = pages[0].model_dump(by_alias=True, exclude={"rows", "totals_for_all_results"})
    merged = MergedResult.model_validate(
        {**envelope, "rows": rows, "totalsForAllResults": totals}
    )

    log_pages_merged(total_pages=len(pages), total_rows=len(rows), metrics=len(totals))
    return merged

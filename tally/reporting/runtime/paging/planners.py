"""Query planning logic for packing filters into request URLs.

This module provides the QueryPlanner class that turns one logical query
into the parameter sets to request, splitting the filter predicates so no
request URL exceeds the API's length budget.
"""

from __future__ import annotations

from collections.abc import Sequence

from ...models import ParameterSet, Query
from .definitions import UrlBudget
from .telemetry import log_oversized_filter, log_query_plan


def request_length(query: Query, filters: Sequence[str]) -> int:
    """Length of the request URL for ``query`` carrying only ``filters``."""
    return query.query_length(query.to_params(filters=filters))


class QueryPlanner:
    """Plans the parameter sets for a query.

    The running length estimate starts at the baseline (overhead plus the
    request without filters) and grows by the trial request length each time
    a filter is added to the set under construction. Once the estimate
    exceeds the budget, the filters committed so far become one parameter
    set and a new set starts with the overflowing filter.

    Note:
        A filter whose own request already exceeds the budget is still sent
        alone in its own parameter set; the API will reject that request.
        When the very first filter of a set overflows, there is nothing
        committed yet, so no empty (unfiltered) parameter set is emitted
        ahead of it.
    """

    def __init__(self, budget: UrlBudget | None = None) -> None:
        """Initialize query planner.

        Args:
            budget: URL length budget (default: API limits from config)
        """
        self._budget = budget or UrlBudget()

    @property
    def budget(self) -> UrlBudget:
        return self._budget

    def baseline_length(self, query: Query) -> int:
        """Estimated request length with no filters, overhead included."""
        return self._budget.overhead + request_length(query, ())

    def build(self, query: Query) -> list[ParameterSet]:
        """Plan parameter sets for a query.

        Args:
            query: Logical query to split

        Returns:
            Parameter sets in request order; always at least one. The filter
            lists of the sets, concatenated in order, equal ``query.filters``.
        """
        baseline = self.baseline_length(query)
        limit = self._budget.limit

        parameter_sets: list[ParameterSet] = []
        committed: list[str] = []
        candidate: list[str] = []
        current_length = baseline

        for flt in query.filters:
            candidate.append(flt)
            current_length += request_length(query, candidate)

            if current_length <= limit:
                committed.append(flt)
                continue

            # An overflow on the first filter of a set leaves nothing to emit
            if committed:
                parameter_sets.append(self._parameter_set(query, committed))

            single_length = request_length(query, [flt])
            if single_length > limit:
                log_oversized_filter(filter_length=single_length, limit=limit)

            committed = [flt]
            candidate = [flt]
            current_length = baseline + single_length

        parameter_sets.append(self._parameter_set(query, committed))

        log_query_plan(
            total_sets=len(parameter_sets),
            total_filters=len(query.filters),
            baseline_length=baseline,
        )
        return parameter_sets

    @staticmethod
    def _parameter_set(query: Query, filters: Sequence[str]) -> ParameterSet:
        return ParameterSet(query=query, filters=tuple(filters), start_index=query.start_index)

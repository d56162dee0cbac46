"""
app/services/aggregation_service.py

Daily aggregation of normalized spend rows.

Summation
---------
Every sum goes through ``math.fsum``, which rounds the exact sum once. The
result therefore does not depend on the order the rows arrive in, and two
imports holding the same multiset of rows produce identical totals.

The grand total is the fsum of the per-day totals, so a report's
``total_amount`` is always exactly the sum of the daily entries it embeds.

No I/O lives here. Persisting the per-import accumulators is the job of
DailyMetricRepository.
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from collections.abc import Iterable
from datetime import date

from app.domain.spend_import import DailyAggregate, DailyTotal, NormalizedSpendRowInput

logger = logging.getLogger(__name__)


class AggregationService:
    """
    Groups rows by date and sums their amounts.

    Stateless; a single instance may be shared between requests.
    """

    def aggregate_daily(self, rows: Iterable[NormalizedSpendRowInput]) -> DailyAggregate:
        """
        Reduce ``rows`` to ascending per-day totals plus the grand total.

        Returns
        -------
        DailyAggregate
            Empty ``daily_totals`` and ``0.0`` when ``rows`` is empty.
        """
        amounts_by_date: dict[date, list[float]] = defaultdict(list)
        row_count = 0
        for row in rows:
            amounts_by_date[row.date].append(row.amount)
            row_count += 1

        daily_totals = tuple(
            DailyTotal(date=metric_date, total_amount=math.fsum(amounts))
            for metric_date, amounts in sorted(amounts_by_date.items())
        )
        total_amount = math.fsum(entry.total_amount for entry in daily_totals)

        logger.debug(
            "Aggregated rows=%d days=%d total_amount=%s",
            row_count,
            len(daily_totals),
            total_amount,
        )
        return DailyAggregate(daily_totals=daily_totals, total_amount=total_amount)

"""
app/repositories/daily_metric_repository.py

Per-import daily spend accumulators.
"""

from __future__ import annotations

import uuid
from datetime import date

from sqlalchemy.orm import Session

from db.models.daily_metric import DailyMetric
from db.upsert import conflict_insert


class DailyMetricRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def accumulate(
        self,
        *,
        store_id: int,
        metric_date: date,
        amount: float,
        source_import_id: uuid.UUID,
    ) -> None:
        """
        Add ``amount`` to the ``(store_id, metric_date, source_import_id)``
        accumulator, creating it when absent.

        The increment happens inside the conflicting row's lock, so
        concurrent writers to one key never lose an update.
        """

        stmt = conflict_insert(self._session, DailyMetric).values(
            id=uuid.uuid4(),
            store_id=store_id,
            metric_date=metric_date,
            total_amount=amount,
            source_import_id=source_import_id,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["store_id", "metric_date", "source_import_id"],
            set_={"total_amount": DailyMetric.total_amount + stmt.excluded.total_amount},
        )
        self._session.execute(stmt)

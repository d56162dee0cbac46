"""
app/repositories/report_repository.py

Persistence for report snapshots.
"""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy.orm import Session

from app.domain.spend_import import DailyAggregate
from db.models.report import Report


def build_report_snapshot(
    *,
    store_id: int,
    import_id: uuid.UUID,
    aggregate: DailyAggregate,
) -> dict[str, Any]:
    """
    JSON-ready snapshot of one import's aggregated result.
    """

    return {
        "store_id": store_id,
        "generated_from_import_id": str(import_id),
        "daily_totals": [
            {"date": entry.date.isoformat(), "total_amount": entry.total_amount}
            for entry in aggregate.daily_totals
        ],
        "total_amount": aggregate.total_amount,
    }


class ReportRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def create_report(
        self,
        *,
        store_id: int,
        import_id: uuid.UUID,
        generated_by: str,
        aggregate: DailyAggregate,
    ) -> Report:
        report = Report(
            id=uuid.uuid4(),
            store_id=store_id,
            generated_from_import_id=import_id,
            generated_by=generated_by,
            snapshot_json=build_report_snapshot(
                store_id=store_id,
                import_id=import_id,
                aggregate=aggregate,
            ),
        )
        self._session.add(report)
        self._session.flush()
        return report

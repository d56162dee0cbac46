"""
db/models/daily_metric.py

Per-import daily spend accumulator.
"""

from __future__ import annotations

import uuid
from datetime import date

from sqlalchemy import BigInteger, Date, Double, ForeignKey, Index, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base

DAILY_METRIC_KEY_CONSTRAINT = "uq_daily_metrics_store_date_import"


class DailyMetric(Base):
    """
    Accumulated spend for one store and date, scoped to the import that
    produced it.

    The key is ``(store_id, metric_date, source_import_id)``: two imports
    covering the same date keep separate rows and never merge totals. Rows
    from the same import landing on the same date are added in place.
    """

    __tablename__ = "daily_metrics"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    store_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    metric_date: Mapped[date] = mapped_column(Date, nullable=False)
    total_amount: Mapped[float] = mapped_column(Double, nullable=False)
    source_import_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("imports.id", ondelete="CASCADE"),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint(
            "store_id",
            "metric_date",
            "source_import_id",
            name=DAILY_METRIC_KEY_CONSTRAINT,
        ),
        Index("ix_daily_metrics_store_date", "store_id", "metric_date"),
    )

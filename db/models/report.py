"""
db/models/report.py

Point-in-time report snapshot generated from one import.
"""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import BigInteger, ForeignKey, Index, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, CreatedAtMixin, JSONPayload


class Report(Base, CreatedAtMixin):
    """
    ``snapshot_json`` holds the aggregated result at generation time::

        {
            "store_id": 7,
            "generated_from_import_id": "5b0c...",
            "daily_totals": [{"date": "2026-02-01", "total_amount": 150.0}],
            "total_amount": 150.0
        }

    ``total_amount`` always equals the sum of the embedded daily totals.
    """

    __tablename__ = "reports"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    store_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    generated_from_import_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("imports.id", ondelete="CASCADE"),
        nullable=False,
    )
    generated_by: Mapped[str] = mapped_column(Text, nullable=False)
    snapshot_json: Mapped[dict[str, Any]] = mapped_column(JSONPayload, nullable=False)

    __table_args__ = (
        Index("ix_reports_store_id", "store_id"),
        Index("ix_reports_generated_from_import_id", "generated_from_import_id"),
    )

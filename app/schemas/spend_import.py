"""
app/schemas/spend_import.py

Response schemas for supplier-spend import endpoints.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime

from pydantic import BaseModel, Field

from app.domain.spend_import import ImportResult


class DailyTotalResponse(BaseModel):
    date: date
    total_amount: float


class ImportResultResponse(BaseModel):
    """
    API response model for one committed import.
    """

    import_id: uuid.UUID
    report_id: uuid.UUID
    store_id: int
    imported_by: str
    imported_at: datetime
    file_sha256: str = Field(..., min_length=64, max_length=64)
    rows_count: int = Field(..., ge=0)
    total_amount: float
    daily_totals: list[DailyTotalResponse] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: ImportResult) -> ImportResultResponse:
        return cls(
            import_id=result.import_id,
            report_id=result.report_id,
            store_id=result.store_id,
            imported_by=result.imported_by,
            imported_at=result.imported_at,
            file_sha256=result.file_sha256,
            rows_count=result.rows_count,
            total_amount=result.total_amount,
            daily_totals=[
                DailyTotalResponse(date=entry.date, total_amount=entry.total_amount)
                for entry in result.daily_totals
            ],
        )


class HealthResponse(BaseModel):
    ok: bool

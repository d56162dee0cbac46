"""
app/domain/spend_import.py

Domain models used by the supplier-spend import flow.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime


class ImportStage:
    """
    States of one import request. A request either walks every state in
    order or stops in ``failed`` at the first error; there is no resume.
    """

    RECEIVED = "received"
    NORMALIZED = "normalized"
    AGGREGATED = "aggregated"
    PERSISTED = "persisted"
    FAILED = "failed"


@dataclass(frozen=True)
class UploadedSpendFile:
    """
    File part of an upload, already extracted from the transport envelope.
    """

    content: bytes
    filename: str | None = None


@dataclass(frozen=True)
class NormalizedSpendRowInput:
    """
    One validated ``date,supplier,amount`` line.
    """

    date: date
    supplier_name: str
    amount: float


@dataclass(frozen=True)
class DailyTotal:
    date: date
    total_amount: float


@dataclass(frozen=True)
class DailyAggregate:
    """
    Per-day totals in ascending date order, plus the grand total.
    """

    daily_totals: tuple[DailyTotal, ...]
    total_amount: float

    def as_mapping(self) -> dict[date, float]:
        return {entry.date: entry.total_amount for entry in self.daily_totals}


@dataclass(frozen=True)
class ImportPersistencePayload:
    """
    Everything the persistence unit of work needs for one import.
    """

    store_id: int
    imported_by: str
    source_filename: str
    source_sha256: str
    raw_payload: str
    imported_at: datetime
    rows: tuple[NormalizedSpendRowInput, ...]
    aggregate: DailyAggregate
    import_id: uuid.UUID = field(default_factory=uuid.uuid4)


@dataclass(frozen=True)
class PersistedImport:
    import_id: uuid.UUID
    report_id: uuid.UUID


@dataclass(frozen=True)
class ImportResult:
    """
    Outcome of one committed import, handed back to the request layer.
    """

    import_id: uuid.UUID
    report_id: uuid.UUID
    store_id: int
    imported_by: str
    imported_at: datetime
    file_sha256: str
    rows_count: int
    total_amount: float
    daily_totals: list[DailyTotal] = field(default_factory=list)

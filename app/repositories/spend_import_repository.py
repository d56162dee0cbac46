"""
app/repositories/spend_import_repository.py

Persistence for import records and their normalized rows.
"""

from __future__ import annotations

import uuid

from sqlalchemy.orm import Session

from app.domain.spend_import import ImportPersistencePayload, NormalizedSpendRowInput
from db.models.spend_import import NormalizedSpendRow, SpendImport


class SpendImportRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def create_import(self, payload: ImportPersistencePayload) -> SpendImport:
        record = SpendImport(
            id=payload.import_id,
            store_id=payload.store_id,
            imported_by=payload.imported_by,
            source_filename=payload.source_filename,
            source_sha256=payload.source_sha256,
            raw_payload=payload.raw_payload,
            imported_at=payload.imported_at,
        )
        self._session.add(record)
        self._session.flush()
        return record

    def add_normalized_row(
        self,
        *,
        import_id: uuid.UUID,
        store_id: int,
        supplier_id: int,
        row: NormalizedSpendRowInput,
    ) -> NormalizedSpendRow:
        record = NormalizedSpendRow(
            id=uuid.uuid4(),
            import_id=import_id,
            store_id=store_id,
            supplier_id=supplier_id,
            metric_date=row.date,
            amount=row.amount,
        )
        self._session.add(record)
        self._session.flush()
        return record

"""
app/services/spend_import_service.py

Request-level driver for supplier-spend imports.

One call walks ``received → normalized → aggregated → persisted``. The first
failure stops the request in ``failed``; later stages never run, and nothing
is written unless the persistence transaction commits. There is no retry:
callers resubmit the whole upload.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Callable
from datetime import datetime, timezone
from functools import lru_cache
from typing import Protocol

from app.config import get_spend_import_settings
from app.domain.spend_import import (
    ImportPersistencePayload,
    ImportResult,
    ImportStage,
    PersistedImport,
    UploadedSpendFile,
)
from app.errors import InputMissingError, SpendImportError, UploadValidationError
from app.logging_utils import log_event
from app.services.aggregation_service import AggregationService
from app.services.import_persistence_service import ImportPersistenceService
from app.validators.spend_csv_validator import SpendCSVNormalizer

logger = logging.getLogger(__name__)


class ImportPersister(Protocol):
    """
    Persistence seam; ImportPersistenceService in production.
    """

    def persist(self, payload: ImportPersistencePayload) -> PersistedImport:
        ...


def sha256_hex(content: bytes) -> str:
    return hashlib.sha256(content).hexdigest()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SpendImportService:
    """
    Coordinates normalization, aggregation and persistence of one upload.
    """

    def __init__(
        self,
        *,
        persister: ImportPersister,
        normalizer: SpendCSVNormalizer | None = None,
        aggregator: AggregationService | None = None,
        default_filename: str = "upload.csv",
        max_upload_bytes: int | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._persister = persister
        self._normalizer = normalizer or SpendCSVNormalizer()
        self._aggregator = aggregator or AggregationService()
        self._default_filename = default_filename
        self._max_upload_bytes = max_upload_bytes
        self._clock = clock

    def import_upload(
        self,
        *,
        store_id: int | None,
        imported_by: str | None,
        file: UploadedSpendFile | None,
    ) -> ImportResult:
        """
        Import one upload end to end.

        Raises
        ------
        InputMissingError
            A required input is absent.
        UploadValidationError
            The payload is too large or not UTF-8 text.
        CSVRowParseError
            A data line is malformed; nothing was written.
        ImportPersistenceError
            The transaction failed and was rolled back.
        """

        try:
            return self._run(store_id=store_id, imported_by=imported_by, file=file)
        except SpendImportError as exc:
            log_event(
                logger,
                logging.WARNING,
                "spend_import.transition",
                state=ImportStage.FAILED,
                last_stage=exc.stage,
                store_id=store_id,
                error=exc.message,
            )
            raise

    def _run(
        self,
        *,
        store_id: int | None,
        imported_by: str | None,
        file: UploadedSpendFile | None,
    ) -> ImportResult:
        if store_id is None:
            raise InputMissingError("store_id is required")
        if imported_by is None:
            raise InputMissingError("imported_by is required")
        if file is None:
            raise InputMissingError("file is required")

        raw_content = self._decode(file.content)
        rows = self._normalizer.normalize(raw_content)
        log_event(
            logger,
            logging.INFO,
            "spend_import.transition",
            state=ImportStage.NORMALIZED,
            store_id=store_id,
            rows_count=len(rows),
        )

        aggregate = self._aggregator.aggregate_daily(rows)
        log_event(
            logger,
            logging.INFO,
            "spend_import.transition",
            state=ImportStage.AGGREGATED,
            store_id=store_id,
            days=len(aggregate.daily_totals),
            total_amount=aggregate.total_amount,
        )

        payload = ImportPersistencePayload(
            store_id=store_id,
            imported_by=imported_by,
            source_filename=file.filename or self._default_filename,
            source_sha256=sha256_hex(file.content),
            raw_payload=raw_content,
            imported_at=self._clock(),
            rows=tuple(rows),
            aggregate=aggregate,
        )
        persisted = self._persister.persist(payload)

        return ImportResult(
            import_id=persisted.import_id,
            report_id=persisted.report_id,
            store_id=store_id,
            imported_by=imported_by,
            imported_at=payload.imported_at,
            file_sha256=payload.source_sha256,
            rows_count=len(rows),
            total_amount=aggregate.total_amount,
            daily_totals=list(aggregate.daily_totals),
        )

    def _decode(self, content: bytes) -> str:
        if self._max_upload_bytes is not None and len(content) > self._max_upload_bytes:
            raise UploadValidationError("file exceeds the configured upload size limit")
        try:
            return content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise UploadValidationError("file must be UTF-8 text/csv") from exc


@lru_cache(maxsize=1)
def get_spend_import_service() -> SpendImportService:
    """
    Build and cache the import service with env-driven settings.
    """

    from db.session import get_session_factory

    settings = get_spend_import_settings()
    return SpendImportService(
        persister=ImportPersistenceService(session_factory=get_session_factory()),
        normalizer=SpendCSVNormalizer(delimiter=settings.delimiter),
        default_filename=settings.default_filename,
        max_upload_bytes=settings.max_upload_bytes,
    )

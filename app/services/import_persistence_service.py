"""
app/services/import_persistence_service.py

Transactional unit of work for one supplier-spend import.

All five stores are written on one session inside one transaction, in this
order:

    1. imports                        the upload itself
    2. audit_logs (IMPORT_CREATED)    references the import
    3. per row: suppliers upsert, imports_normalized insert,
       daily_metrics upsert-as-accumulate keyed (store, date, import)
    4. reports                        snapshot of the import's aggregate
    5. audit_logs (REPORT_GENERATED)  references the report

The transaction commits only when every step succeeded. Any error raised
inside it rolls the whole unit back, so an import is either fully visible or
absent.
"""

from __future__ import annotations

import logging
import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.domain.spend_import import ImportPersistencePayload, ImportStage, PersistedImport
from app.errors import ImportPersistenceError
from app.logging_utils import log_event
from app.repositories.audit_log_repository import AuditLogRepository
from app.repositories.daily_metric_repository import DailyMetricRepository
from app.repositories.report_repository import ReportRepository
from app.repositories.spend_import_repository import SpendImportRepository
from app.repositories.supplier_repository import SupplierRepository
from db.models.audit_log import AuditAction, AuditTargetType

logger = logging.getLogger(__name__)


def _error_detail(exc: Exception) -> str:
    """
    Short description of a persistence failure for callers.

    SQLAlchemy errors render the statement and its parameters, which include
    the uploaded payload; only the driver message is passed on. The full
    error is logged.
    """

    if isinstance(exc, SQLAlchemyError):
        orig = getattr(exc, "orig", None)
        return str(orig) if orig is not None else type(exc).__name__
    return str(exc) or type(exc).__name__


class PersistenceStep:
    """
    Human-readable step names used in errors and logs.
    """

    OPEN_TRANSACTION = "opening transaction"
    IMPORT = "persisting import"
    METRICS = "persisting metrics"
    REPORT = "persisting report"
    COMMIT = "committing transaction"


class ImportPersistenceService:
    """
    Writes one import and everything derived from it atomically.

    The session factory is injected so the shared connection pool is the only
    state this service holds; each call checks a connection out for the
    duration of its transaction and returns it on exit.
    """

    def __init__(self, *, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def persist(self, payload: ImportPersistencePayload) -> PersistedImport:
        """
        Persist ``payload`` in a single transaction.

        Raises ImportPersistenceError naming the failed step; nothing from
        this import is visible afterwards.
        """

        step = PersistenceStep.OPEN_TRANSACTION
        try:
            with self._session_factory() as session:
                with session.begin():
                    session.connection()

                    step = PersistenceStep.IMPORT
                    self._persist_import(session, payload)

                    step = PersistenceStep.METRICS
                    self._persist_rows_and_metrics(session, payload)

                    step = PersistenceStep.REPORT
                    report_id = self._persist_report(session, payload)

                    step = PersistenceStep.COMMIT
        except Exception as exc:
            logger.exception(
                "Import transaction rolled back step=%r import_id=%s store_id=%s",
                step,
                payload.import_id,
                payload.store_id,
            )
            raise ImportPersistenceError(context=step, detail=_error_detail(exc)) from exc

        log_event(
            logger,
            logging.INFO,
            "spend_import.transition",
            state=ImportStage.PERSISTED,
            import_id=payload.import_id,
            report_id=report_id,
            store_id=payload.store_id,
            rows_count=len(payload.rows),
        )
        return PersistedImport(import_id=payload.import_id, report_id=report_id)

    def _persist_import(self, session: Session, payload: ImportPersistencePayload) -> None:
        SpendImportRepository(session).create_import(payload)
        AuditLogRepository(session).record(
            actor=payload.imported_by,
            action=AuditAction.IMPORT_CREATED,
            target_type=AuditTargetType.IMPORTS,
            target_id=payload.import_id,
            metadata={
                "store_id": payload.store_id,
                "filename": payload.source_filename,
                "sha256": payload.source_sha256,
            },
            created_at=payload.imported_at,
        )

    def _persist_rows_and_metrics(
        self,
        session: Session,
        payload: ImportPersistencePayload,
    ) -> None:
        suppliers = SupplierRepository(session)
        imports = SpendImportRepository(session)
        metrics = DailyMetricRepository(session)

        for row in payload.rows:
            supplier_id = suppliers.resolve_id(row.supplier_name)
            imports.add_normalized_row(
                import_id=payload.import_id,
                store_id=payload.store_id,
                supplier_id=supplier_id,
                row=row,
            )
            metrics.accumulate(
                store_id=payload.store_id,
                metric_date=row.date,
                amount=row.amount,
                source_import_id=payload.import_id,
            )

    def _persist_report(
        self,
        session: Session,
        payload: ImportPersistencePayload,
    ) -> uuid.UUID:
        report = ReportRepository(session).create_report(
            store_id=payload.store_id,
            import_id=payload.import_id,
            generated_by=payload.imported_by,
            aggregate=payload.aggregate,
        )
        AuditLogRepository(session).record(
            actor=payload.imported_by,
            action=AuditAction.REPORT_GENERATED,
            target_type=AuditTargetType.REPORTS,
            target_id=report.id,
            metadata={
                "generated_from_import_id": str(payload.import_id),
                "total_amount": payload.aggregate.total_amount,
            },
        )
        return report.id

"""
tests/test_spend_import_service.py

SpendImportService: input checks, decoding, stage ordering and result shape.
"""

from __future__ import annotations

import hashlib
import uuid
from datetime import date

import pytest
from sqlalchemy.orm import Session, sessionmaker

from app.domain.spend_import import (
    DailyTotal,
    ImportPersistencePayload,
    PersistedImport,
    UploadedSpendFile,
)
from app.errors import (
    CSVRowParseError,
    ImportPersistenceError,
    InputMissingError,
    UploadValidationError,
)
from app.services.import_persistence_service import ImportPersistenceService
from app.services.spend_import_service import SpendImportService, sha256_hex
from tests.conftest import FIXED_NOW, SAMPLE_BYTES, count_all


class RecordingPersister:
    """Captures payloads instead of writing them."""

    def __init__(self, error: Exception | None = None) -> None:
        self.payloads: list[ImportPersistencePayload] = []
        self._error = error

    def persist(self, payload: ImportPersistencePayload) -> PersistedImport:
        self.payloads.append(payload)
        if self._error is not None:
            raise self._error
        return PersistedImport(import_id=payload.import_id, report_id=uuid.uuid4())


@pytest.fixture()
def persister() -> RecordingPersister:
    return RecordingPersister()


@pytest.fixture()
def svc(persister: RecordingPersister) -> SpendImportService:
    return SpendImportService(persister=persister, max_upload_bytes=1024, clock=lambda: FIXED_NOW)


def _upload(content: bytes = SAMPLE_BYTES, filename: str | None = "spend.csv") -> UploadedSpendFile:
    return UploadedSpendFile(content=content, filename=filename)


# ---------------------------------------------------------------------------
# Success
# ---------------------------------------------------------------------------


class TestImportUpload:
    def test_result_shape(self, svc: SpendImportService, persister: RecordingPersister) -> None:
        result = svc.import_upload(store_id=7, imported_by="alice", file=_upload())

        assert result.store_id == 7
        assert result.imported_by == "alice"
        assert result.imported_at == FIXED_NOW
        assert result.rows_count == 3
        assert result.total_amount == 175.0
        assert result.daily_totals == [
            DailyTotal(date=date(2026, 2, 1), total_amount=150.0),
            DailyTotal(date=date(2026, 2, 2), total_amount=25.0),
        ]
        assert result.import_id == persister.payloads[0].import_id

    def test_hash_is_sha256_of_raw_bytes(
        self, svc: SpendImportService, persister: RecordingPersister
    ) -> None:
        result = svc.import_upload(store_id=7, imported_by="alice", file=_upload())

        expected = hashlib.sha256(SAMPLE_BYTES).hexdigest()
        assert result.file_sha256 == expected
        assert persister.payloads[0].source_sha256 == expected
        assert persister.payloads[0].raw_payload == SAMPLE_BYTES.decode("utf-8")

    def test_hash_is_deterministic(self) -> None:
        assert sha256_hex(SAMPLE_BYTES) == sha256_hex(bytes(SAMPLE_BYTES))
        assert sha256_hex(SAMPLE_BYTES) != sha256_hex(SAMPLE_BYTES + b"\n")

    def test_each_upload_gets_a_fresh_import_id(self, svc: SpendImportService) -> None:
        first = svc.import_upload(store_id=7, imported_by="alice", file=_upload())
        second = svc.import_upload(store_id=7, imported_by="alice", file=_upload())

        assert first.import_id != second.import_id
        assert first.file_sha256 == second.file_sha256

    def test_filename_defaults(self, svc: SpendImportService, persister: RecordingPersister) -> None:
        svc.import_upload(store_id=7, imported_by="alice", file=_upload(filename=None))
        assert persister.payloads[0].source_filename == "upload.csv"

    def test_payload_carries_rows_and_aggregate(
        self, svc: SpendImportService, persister: RecordingPersister
    ) -> None:
        svc.import_upload(store_id=7, imported_by="alice", file=_upload())

        payload = persister.payloads[0]
        assert [row.amount for row in payload.rows] == [100.0, 50.0, 25.0]
        assert payload.aggregate.total_amount == 175.0


# ---------------------------------------------------------------------------
# Rejections before persistence
# ---------------------------------------------------------------------------


class TestRejections:
    @pytest.mark.parametrize(
        "store_id, imported_by, with_file, message",
        [
            (None, "alice", True, "store_id is required"),
            (7, None, True, "imported_by is required"),
            (7, "alice", False, "file is required"),
            (None, None, False, "store_id is required"),
        ],
    )
    def test_missing_inputs(
        self,
        svc: SpendImportService,
        persister: RecordingPersister,
        store_id: int | None,
        imported_by: str | None,
        with_file: bool,
        message: str,
    ) -> None:
        with pytest.raises(InputMissingError) as ctx:
            svc.import_upload(
                store_id=store_id,
                imported_by=imported_by,
                file=_upload() if with_file else None,
            )

        assert str(ctx.value) == message
        assert persister.payloads == []

    def test_non_utf8_payload(self, svc: SpendImportService, persister: RecordingPersister) -> None:
        with pytest.raises(UploadValidationError) as ctx:
            svc.import_upload(store_id=7, imported_by="alice", file=_upload(b"\xff\xfe\x00bad"))

        assert str(ctx.value) == "file must be UTF-8 text/csv"
        assert persister.payloads == []

    def test_oversize_payload(self, svc: SpendImportService, persister: RecordingPersister) -> None:
        with pytest.raises(UploadValidationError):
            svc.import_upload(store_id=7, imported_by="alice", file=_upload(b"x" * 2048))
        assert persister.payloads == []

    def test_parse_failure_never_reaches_persistence(
        self, svc: SpendImportService, persister: RecordingPersister
    ) -> None:
        content = b"date,supplier,amount\n2026-02-01,ACME,100\n2026-02-01,ACME"

        with pytest.raises(CSVRowParseError) as ctx:
            svc.import_upload(store_id=7, imported_by="alice", file=_upload(content))

        assert ctx.value.row_number == 3
        assert persister.payloads == []

    def test_persistence_error_propagates(self) -> None:
        error = ImportPersistenceError(context="persisting report", detail="boom")
        svc = SpendImportService(persister=RecordingPersister(error=error))

        with pytest.raises(ImportPersistenceError) as ctx:
            svc.import_upload(store_id=7, imported_by="alice", file=_upload())

        assert ctx.value is error
        assert str(ctx.value) == "failed persisting report: boom"


# ---------------------------------------------------------------------------
# End to end against SQLite
# ---------------------------------------------------------------------------


class TestEndToEnd:
    def test_rejected_upload_writes_nothing(self, session_factory: sessionmaker[Session]) -> None:
        svc = SpendImportService(persister=ImportPersistenceService(session_factory=session_factory))
        content = b"date,supplier,amount\n2026-02-01,ACME,100\n2026-02-01,ACME"

        for _ in range(2):
            with pytest.raises(CSVRowParseError):
                svc.import_upload(store_id=7, imported_by="alice", file=_upload(content))

        assert set(count_all(session_factory).values()) == {0}

    def test_committed_upload(self, session_factory: sessionmaker[Session]) -> None:
        svc = SpendImportService(persister=ImportPersistenceService(session_factory=session_factory))

        result = svc.import_upload(store_id=7, imported_by="alice", file=_upload())

        counts = count_all(session_factory)
        assert counts["imports_normalized"] == result.rows_count == 3
        assert counts["daily_metrics"] == len(result.daily_totals) == 2
        assert counts["reports"] == 1
        assert counts["audit_logs"] == 2

    def test_driver_error_surfaces_as_persistence_error(
        self, session_factory: sessionmaker[Session]
    ) -> None:
        svc = SpendImportService(persister=ImportPersistenceService(session_factory=session_factory))

        with pytest.raises(ImportPersistenceError) as ctx:
            svc.import_upload(store_id=2**70, imported_by="alice", file=_upload())

        assert ctx.value.context == "persisting import"
        assert set(count_all(session_factory).values()) == {0}

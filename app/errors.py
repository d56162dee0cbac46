"""
app/errors.py

Exceptions raised by the supplier-spend import pipeline.

Every error records ``stage``, the last pipeline state the request reached
before failing, so the logs can tell a rejected upload from a failed write.
"""

from __future__ import annotations

from app.domain.spend_import import ImportStage


class SpendImportError(Exception):
    """Base exception for import pipeline failures."""

    stage: str = ImportStage.RECEIVED

    def __init__(self, message: str, *, stage: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if stage is not None:
            self.stage = stage


class InputMissingError(SpendImportError):
    """Raised when store id, actor or file is absent from the request."""


class UploadValidationError(SpendImportError):
    """Raised when the payload is not acceptable text (encoding, size)."""


class CSVRowParseError(SpendImportError):
    """
    Raised on the first structurally or semantically invalid row.

    ``row_number`` is 1-based and counts the header line.
    """

    def __init__(
        self,
        *,
        row_number: int,
        message: str,
        column: str | None = None,
        value: str | None = None,
    ) -> None:
        super().__init__(message, stage=ImportStage.RECEIVED)
        self.row_number = row_number
        self.column = column
        self.value = value

    def to_dict(self) -> dict[str, object]:
        return {
            "message": self.message,
            "row_number": self.row_number,
            "column": self.column,
            "value": self.value,
        }


class ImportPersistenceError(SpendImportError):
    """
    Raised when the import transaction fails and is rolled back.

    ``context`` names the persistence step, e.g. ``"persisting metrics"``.
    """

    def __init__(self, *, context: str, detail: str) -> None:
        super().__init__(f"failed {context}: {detail}", stage=ImportStage.AGGREGATED)
        self.context = context
        self.detail = detail

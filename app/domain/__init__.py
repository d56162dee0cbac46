"""
app/domain package marker.
"""

from app.domain.spend_import import (
    DailyAggregate,
    DailyTotal,
    ImportPersistencePayload,
    ImportResult,
    ImportStage,
    NormalizedSpendRowInput,
    PersistedImport,
    UploadedSpendFile,
)

__all__ = [
    "DailyAggregate",
    "DailyTotal",
    "ImportPersistencePayload",
    "ImportResult",
    "ImportStage",
    "NormalizedSpendRowInput",
    "PersistedImport",
    "UploadedSpendFile",
]

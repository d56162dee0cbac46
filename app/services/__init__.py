"""
app/services package marker.
"""

from app.services.aggregation_service import AggregationService
from app.services.import_persistence_service import ImportPersistenceService, PersistenceStep
from app.services.spend_import_service import SpendImportService, get_spend_import_service

__all__ = [
    "AggregationService",
    "ImportPersistenceService",
    "PersistenceStep",
    "SpendImportService",
    "get_spend_import_service",
]

"""
app/repositories package marker.
"""

from app.repositories.audit_log_repository import AuditLogRepository
from app.repositories.daily_metric_repository import DailyMetricRepository
from app.repositories.report_repository import ReportRepository, build_report_snapshot
from app.repositories.spend_import_repository import SpendImportRepository
from app.repositories.supplier_repository import SupplierRepository

__all__ = [
    "AuditLogRepository",
    "DailyMetricRepository",
    "ReportRepository",
    "SpendImportRepository",
    "SupplierRepository",
    "build_report_snapshot",
]

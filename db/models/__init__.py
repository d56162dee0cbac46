"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.audit_log import AuditAction, AuditLogEntry, AuditTargetType
from db.models.daily_metric import DailyMetric
from db.models.report import Report
from db.models.spend_import import NormalizedSpendRow, SpendImport
from db.models.supplier import Supplier

__all__ = [
    "AuditAction",
    "AuditLogEntry",
    "AuditTargetType",
    "DailyMetric",
    "NormalizedSpendRow",
    "Report",
    "SpendImport",
    "Supplier",
]

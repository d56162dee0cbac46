"""
db/models/audit_log.py

Append-only audit trail of state-changing actions.
"""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, CreatedAtMixin, JSONPayload


class AuditAction:
    IMPORT_CREATED = "IMPORT_CREATED"
    REPORT_GENERATED = "REPORT_GENERATED"


class AuditTargetType:
    IMPORTS = "imports"
    REPORTS = "reports"


class AuditLogEntry(Base, CreatedAtMixin):
    __tablename__ = "audit_logs"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    actor: Mapped[str] = mapped_column(Text, nullable=False)
    action: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="IMPORT_CREATED, REPORT_GENERATED",
    )
    target_type: Mapped[str] = mapped_column(String(64), nullable=False)
    target_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    # "metadata" is reserved on declarative classes.
    metadata_json: Mapped[dict[str, Any]] = mapped_column(
        "metadata",
        JSONPayload,
        nullable=False,
    )

    __table_args__ = (
        Index("ix_audit_logs_target", "target_type", "target_id"),
        Index("ix_audit_logs_action", "action"),
        Index("ix_audit_logs_created_at", "created_at"),
    )

"""
app/repositories/audit_log_repository.py

Append-only audit trail writes.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from db.models.audit_log import AuditLogEntry


class AuditLogRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def record(
        self,
        *,
        actor: str,
        action: str,
        target_type: str,
        target_id: uuid.UUID,
        metadata: dict[str, Any],
        created_at: datetime | None = None,
    ) -> AuditLogEntry:
        """
        Append one entry. ``created_at`` falls back to the database clock.
        """

        entry = AuditLogEntry(
            id=uuid.uuid4(),
            actor=actor,
            action=action,
            target_type=target_type,
            target_id=target_id,
            metadata_json=metadata,
        )
        if created_at is not None:
            entry.created_at = created_at
        self._session.add(entry)
        self._session.flush()
        return entry

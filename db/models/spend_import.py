"""
db/models/spend_import.py

One accepted supplier-spend upload and the normalized rows parsed from it.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime

from sqlalchemy import (
    BigInteger,
    Date,
    DateTime,
    Double,
    ForeignKey,
    Index,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base


class SpendImport(Base):
    """
    Immutable record of one upload.

    ``source_sha256`` is the hex SHA-256 of exactly the bytes decoded into
    ``raw_payload``. It is stored for traceability only; byte-identical
    re-uploads are separate imports.
    """

    __tablename__ = "imports"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    store_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    imported_by: Mapped[str] = mapped_column(Text, nullable=False)
    source_filename: Mapped[str] = mapped_column(Text, nullable=False)
    source_sha256: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="Hex SHA-256 digest of the uploaded bytes",
    )
    raw_payload: Mapped[str] = mapped_column(Text, nullable=False)
    imported_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_imports_store_id", "store_id"),
        Index("ix_imports_source_sha256", "source_sha256"),
    )


class NormalizedSpendRow(Base):
    """
    One validated ``date,supplier,amount`` line, owned by its import.
    """

    __tablename__ = "imports_normalized"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    import_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("imports.id", ondelete="CASCADE"),
        nullable=False,
    )
    store_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    supplier_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("suppliers.id"),
        nullable=False,
    )
    metric_date: Mapped[date] = mapped_column(Date, nullable=False)
    amount: Mapped[float] = mapped_column(Double, nullable=False)

    __table_args__ = (
        Index("ix_imports_normalized_import_id", "import_id"),
        Index("ix_imports_normalized_supplier_id", "supplier_id"),
    )

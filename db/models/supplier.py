"""
db/models/supplier.py

Supplier identity, created lazily on first occurrence of a name.
"""

from __future__ import annotations

from sqlalchemy import Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from db.base import BigIntegerIdentity, Base

SUPPLIER_NAME_CONSTRAINT = "uq_suppliers_name"


class Supplier(Base):
    """
    Names are compared as exact strings (case- and whitespace-sensitive after
    trimming). The unique constraint backs the upsert-as-lookup in
    SupplierRepository.
    """

    __tablename__ = "suppliers"

    id: Mapped[int] = mapped_column(
        BigIntegerIdentity,
        primary_key=True,
        autoincrement=True,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)

    __table_args__ = (
        UniqueConstraint("name", name=SUPPLIER_NAME_CONSTRAINT),
    )

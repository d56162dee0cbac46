"""
app/repositories/supplier_repository.py

Supplier identity resolution.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from db.models.supplier import Supplier
from db.upsert import conflict_insert


class SupplierRepository:
    """
    Maps supplier names to stable ids, creating suppliers on first sight.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def resolve_id(self, name: str) -> int:
        """
        Return the id for ``name``, inserting the supplier if it is new.

        One atomic statement. Two transactions resolving the same new name
        concurrently both get the same id; the unique constraint on
        ``suppliers.name`` makes the second writer wait for the first and
        then take the conflict branch. A duplicate name is never an error.
        """

        stmt = conflict_insert(self._session, Supplier).values(name=name)
        # DO UPDATE rather than DO NOTHING: RETURNING only yields conflicting
        # rows that were touched.
        stmt = stmt.on_conflict_do_update(
            index_elements=["name"],
            set_={"name": stmt.excluded.name},
        ).returning(Supplier.id)
        return int(self._session.execute(stmt).scalar_one())

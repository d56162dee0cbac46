"""
db/upsert.py

Dialect-specific INSERT constructs for ON CONFLICT statements.
"""

from __future__ import annotations

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from db.base import Base


def conflict_insert(
    session: Session,
    model: type[Base],
) -> postgresql.Insert | sqlite.Insert:
    """
    Return an INSERT for ``model`` that supports ``on_conflict_do_update``.

    PostgreSQL is the production backend; SQLite backs the test-suite.
    """

    dialect_name = session.get_bind().dialect.name
    if dialect_name == "sqlite":
        return sqlite.insert(model)
    if dialect_name == "postgresql":
        return postgresql.insert(model)
    raise RuntimeError(f"ON CONFLICT upserts are not supported for dialect '{dialect_name}'.")

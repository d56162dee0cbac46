"""
Shared fixtures: sample uploads and an in-memory SQLite database.

SQLite stands in for PostgreSQL; the repositories compile their ON CONFLICT
statements for whichever dialect the session is bound to.
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import db.models  # noqa: F401  registers all ORM models on Base.metadata
from db.base import Base
from db.models import AuditLogEntry, DailyMetric, NormalizedSpendRow, Report, SpendImport, Supplier
from db.session import build_session_factory

SAMPLE_CSV = "date,supplier,amount\n2026-02-01,ACME,100\n2026-02-01,ACME,50\n2026-02-02,Beta,25"
SAMPLE_BYTES = SAMPLE_CSV.encode("utf-8")
FIXED_NOW = datetime(2026, 2, 3, 9, 30, tzinfo=timezone.utc)

ALL_MODELS = (SpendImport, AuditLogEntry, NormalizedSpendRow, DailyMetric, Report, Supplier)


@pytest.fixture()
def engine() -> Iterator[Engine]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return build_session_factory(engine)


def count_rows(session_factory: sessionmaker[Session], model: type[Base]) -> int:
    with session_factory() as session:
        return int(session.scalar(select(func.count()).select_from(model)) or 0)


def count_all(session_factory: sessionmaker[Session]) -> dict[str, int]:
    return {model.__tablename__: count_rows(session_factory, model) for model in ALL_MODELS}

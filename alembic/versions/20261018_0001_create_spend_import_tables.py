"""create spend import tables

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18 00:00:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20261018_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "imports",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("store_id", sa.BigInteger(), nullable=False),
        sa.Column("imported_by", sa.Text(), nullable=False),
        sa.Column("source_filename", sa.Text(), nullable=False),
        sa.Column(
            "source_sha256",
            sa.String(length=64),
            nullable=False,
            comment="Hex SHA-256 digest of the uploaded bytes",
        ),
        sa.Column("raw_payload", sa.Text(), nullable=False),
        sa.Column("imported_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_imports_store_id", "imports", ["store_id"], unique=False)
    op.create_index("ix_imports_source_sha256", "imports", ["source_sha256"], unique=False)

    op.create_table(
        "suppliers",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_suppliers_name"),
    )

    op.create_table(
        "imports_normalized",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("import_id", sa.Uuid(), nullable=False),
        sa.Column("store_id", sa.BigInteger(), nullable=False),
        sa.Column("supplier_id", sa.BigInteger(), nullable=False),
        sa.Column("metric_date", sa.Date(), nullable=False),
        sa.Column("amount", sa.Double(), nullable=False),
        sa.ForeignKeyConstraint(["import_id"], ["imports.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["supplier_id"], ["suppliers.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_imports_normalized_import_id",
        "imports_normalized",
        ["import_id"],
        unique=False,
    )
    op.create_index(
        "ix_imports_normalized_supplier_id",
        "imports_normalized",
        ["supplier_id"],
        unique=False,
    )

    op.create_table(
        "daily_metrics",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("store_id", sa.BigInteger(), nullable=False),
        sa.Column("metric_date", sa.Date(), nullable=False),
        sa.Column("total_amount", sa.Double(), nullable=False),
        sa.Column("source_import_id", sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(["source_import_id"], ["imports.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "store_id",
            "metric_date",
            "source_import_id",
            name="uq_daily_metrics_store_date_import",
        ),
    )
    op.create_index(
        "ix_daily_metrics_store_date",
        "daily_metrics",
        ["store_id", "metric_date"],
        unique=False,
    )

    op.create_table(
        "reports",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("store_id", sa.BigInteger(), nullable=False),
        sa.Column("generated_from_import_id", sa.Uuid(), nullable=False),
        sa.Column("generated_by", sa.Text(), nullable=False),
        sa.Column("snapshot_json", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["generated_from_import_id"], ["imports.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_reports_store_id", "reports", ["store_id"], unique=False)
    op.create_index(
        "ix_reports_generated_from_import_id",
        "reports",
        ["generated_from_import_id"],
        unique=False,
    )

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("actor", sa.Text(), nullable=False),
        sa.Column(
            "action",
            sa.String(length=64),
            nullable=False,
            comment="IMPORT_CREATED, REPORT_GENERATED",
        ),
        sa.Column("target_type", sa.String(length=64), nullable=False),
        sa.Column("target_id", sa.Uuid(), nullable=False),
        sa.Column("metadata", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_audit_logs_target", "audit_logs", ["target_type", "target_id"], unique=False)
    op.create_index("ix_audit_logs_action", "audit_logs", ["action"], unique=False)
    op.create_index("ix_audit_logs_created_at", "audit_logs", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_audit_logs_created_at", table_name="audit_logs")
    op.drop_index("ix_audit_logs_action", table_name="audit_logs")
    op.drop_index("ix_audit_logs_target", table_name="audit_logs")
    op.drop_table("audit_logs")
    op.drop_index("ix_reports_generated_from_import_id", table_name="reports")
    op.drop_index("ix_reports_store_id", table_name="reports")
    op.drop_table("reports")
    op.drop_index("ix_daily_metrics_store_date", table_name="daily_metrics")
    op.drop_table("daily_metrics")
    op.drop_index("ix_imports_normalized_supplier_id", table_name="imports_normalized")
    op.drop_index("ix_imports_normalized_import_id", table_name="imports_normalized")
    op.drop_table("imports_normalized")
    op.drop_table("suppliers")
    op.drop_index("ix_imports_source_sha256", table_name="imports")
    op.drop_index("ix_imports_store_id", table_name="imports")
    op.drop_table("imports")

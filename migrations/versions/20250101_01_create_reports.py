"""Create the reports table."""
from __future__ import annotations

from collections.abc import Iterable

import sqlalchemy as sa
from alembic import op

revision = "20250101_01"
down_revision = None
branch_labels = None
depends_on: Iterable[str] | None = None


def upgrade() -> None:  # noqa: D401
    """Create the reports table and its date index."""

    report_status = sa.Enum("PENDING", "COMPLETED", "FAILED", name="report_status")

    op.create_table(
        "reports",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("data", sa.JSON(), nullable=False),
        sa.Column("ai_analysis", sa.JSON()),
        sa.Column("is_auto_generated", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("generated_by", sa.String(length=128)),
        sa.Column("status", report_status, nullable=False, server_default="PENDING"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_reports_date", "reports", ["date"])


def downgrade() -> None:
    op.drop_index("ix_reports_date", table_name="reports")
    op.drop_table("reports")
    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        op.execute(sa.text("DROP TYPE IF EXISTS report_status"))

"""Initial schema - category and versioned instruks.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "category",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(80), nullable=False),
        sa.Column(
            "parent_id",
            sa.UUID(),
            sa.ForeignKey("category.id", ondelete="RESTRICT"),
            nullable=True,
        ),
    )

    op.create_table(
        "instruks",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("document_id", sa.UUID(), nullable=False),
        sa.Column("version_number", sa.Integer(), nullable=False),
        sa.Column("is_latest", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("previous_version_id", sa.UUID(), nullable=True),
        sa.Column("title", sa.String(160), nullable=False),
        sa.Column("description", sa.String(400), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "category_id",
            sa.UUID(),
            sa.ForeignKey("category.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("version_number >= 1", name="ck_instruks_version_number_positive"),
    )
    op.create_index(
        "ix_instruks_document_version",
        "instruks",
        ["document_id", "version_number"],
        unique=True,
    )
    op.create_index("ix_instruks_category_latest", "instruks", ["category_id", "is_latest"])
    op.create_index("ix_instruks_previous_version", "instruks", ["previous_version_id"])
    op.create_index(
        "ux_instruks_document_latest",
        "instruks",
        ["document_id"],
        unique=True,
        postgresql_where=sa.text("is_latest"),
    )


def downgrade() -> None:
    op.drop_index("ux_instruks_document_latest", table_name="instruks")
    op.drop_index("ix_instruks_previous_version", table_name="instruks")
    op.drop_index("ix_instruks_category_latest", table_name="instruks")
    op.drop_index("ix_instruks_document_version", table_name="instruks")
    op.drop_table("instruks")
    op.drop_table("category")

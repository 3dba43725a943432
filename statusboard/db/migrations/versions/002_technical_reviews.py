"""Technical reviews

Revision ID: 002
Revises: 001
Create Date: 2026-10-19
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "technical_reviews",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "project_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("projects.id"),
            nullable=False,
            index=True,
        ),
        sa.Column("review_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("review_type", sa.String(100), nullable=False),
        sa.Column("review_cycle_number", sa.Integer, nullable=False),
        sa.Column("executive_summary", sa.Text, nullable=True),
        sa.Column("architecture_design_review", sa.Text, nullable=True),
        sa.Column("code_quality_standards", sa.Text, nullable=True),
        sa.Column("devops_deployment_readiness", sa.Text, nullable=True),
        sa.Column("testing_qa", sa.Text, nullable=True),
        sa.Column("risk_identification", sa.Text, nullable=True),
        sa.Column("compliance_standards", sa.Text, nullable=True),
        sa.Column("action_items_recommendations", sa.Text, nullable=True),
        sa.Column("reviewer_sign_off", sa.Text, nullable=True),
        sa.Column("sqa_validation", sa.Text, nullable=True),
        sa.Column("participants", postgresql.JSONB, nullable=True),
        sa.Column("conducted_by", sa.String(100), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
            index=True,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )


def downgrade() -> None:
    op.drop_table("technical_reviews")

"""Initial schema - projects, weekly reports, LLM config, portfolio analyses

Revision ID: 001
Revises: None
Create Date: 2026-10-12
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
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
    ]


def upgrade() -> None:
    # Projects
    op.create_table(
        "projects",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(500), nullable=False, index=True),
        sa.Column("code_id", sa.String(50), nullable=False),
        sa.Column("account", sa.String(255), nullable=False),
        sa.Column("customer", sa.String(255), nullable=False),
        sa.Column("engagement_type", sa.String(100), nullable=False, server_default="Development"),
        sa.Column("delivery_model", sa.String(100), nullable=False, server_default="Managed"),
        sa.Column("billing_model", sa.String(100), nullable=False, server_default="T&M"),
        sa.Column("project_importance", sa.String(20), nullable=False, server_default="Medium"),
        sa.Column("rag_status", sa.String(10), nullable=False, server_default="Green"),
        sa.Column("scope_description", sa.Text, nullable=False, server_default=""),
        sa.Column("team_squad", sa.String(255), nullable=True),
        sa.Column("tower", sa.String(255), nullable=True, index=True),
        sa.Column("fte", sa.String(50), nullable=True),
        sa.Column("revenue", sa.String(100), nullable=True),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("planned_end_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("client_escalation", sa.Boolean, nullable=False, server_default=sa.text("false")),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.text("true")),
        sa.Column("ai_monitoring_enabled", sa.Boolean, nullable=False, server_default=sa.text("true")),
        sa.Column("project_tags", postgresql.JSONB, nullable=True),
        *_timestamps(),
    )

    # Weekly status reports
    op.create_table(
        "weekly_status_reports",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "project_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("projects.id"),
            nullable=False,
            index=True,
        ),
        sa.Column("reporting_date", sa.Date, nullable=False),
        sa.Column("week_number", sa.Integer, nullable=True),
        sa.Column("publish_status", sa.Boolean, nullable=False, server_default=sa.text("false")),
        sa.Column("health_previous_week", sa.String(10), nullable=True),
        sa.Column("health_current_week", sa.String(10), nullable=False, server_default="Green"),
        sa.Column("client_escalation", sa.Text, nullable=False, server_default="None"),
        sa.Column("update_for_current_week", sa.Text, nullable=True),
        sa.Column("plan_for_next_week", sa.Text, nullable=True),
        sa.Column("issues_challenges", sa.Text, nullable=True),
        sa.Column("path_to_green", sa.Text, nullable=True),
        sa.Column("resourcing_status", sa.Text, nullable=True),
        sa.Column("current_sdlc_phase", sa.String(100), nullable=True),
        sa.Column("fte", sa.String(50), nullable=True),
        sa.Column("revenue", sa.String(100), nullable=True),
        sa.Column("tower", sa.String(255), nullable=True),
        sa.Column("billing_model", sa.String(100), nullable=True),
        sa.Column("submitted_by", sa.String(100), nullable=True),
        sa.Column("ai_status", sa.String(10), nullable=True),
        sa.Column("ai_assessment_description", sa.Text, nullable=True),
        sa.Column("ai_summary", postgresql.JSONB, nullable=True),
        *_timestamps(),
    )
    op.create_index(
        "ix_weekly_status_reports_project_week",
        "weekly_status_reports",
        ["project_id", "week_number", "reporting_date"],
    )

    # LLM configuration
    op.create_table(
        "llm_configurations",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("provider_name", sa.String(50), nullable=False, server_default="OpenAI"),
        sa.Column("model_name", sa.String(100), nullable=False),
        sa.Column("api_key", sa.String(500), nullable=False),
        sa.Column("base_url", sa.String(500), nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.text("true"), index=True),
        sa.Column("last_updated_by", sa.String(100), nullable=True),
        *_timestamps(),
    )

    # Portfolio analyses
    op.create_table(
        "portfolio_analyses",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("overall_portfolio_rag_status", sa.String(10), nullable=False),
        sa.Column("reason", sa.Text, nullable=False),
        sa.Column("projects_analyzed", postgresql.JSONB, nullable=True),
        sa.Column("columns_used_for_analysis", postgresql.JSONB, nullable=True),
        sa.Column(
            "llm_configuration_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("llm_configurations.id"),
            nullable=True,
        ),
        *_timestamps(),
    )


def downgrade() -> None:
    op.drop_table("portfolio_analyses")
    op.drop_table("llm_configurations")
    op.drop_index("ix_weekly_status_reports_project_week", table_name="weekly_status_reports")
    op.drop_table("weekly_status_reports")
    op.drop_table("projects")

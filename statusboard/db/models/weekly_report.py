import uuid
from datetime import date

from sqlalchemy import JSON, Boolean, Date, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from statusboard.common.enums import HealthStatus
from statusboard.core.ingestion.schemas import NO_ESCALATION
from statusboard.db.base import Entity


class WeeklyStatusReport(Entity):
    __tablename__ = "weekly_status_reports"

    project_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("projects.id"), nullable=False, index=True
    )
    reporting_date: Mapped[date] = mapped_column(Date, nullable=False)
    week_number: Mapped[int | None] = mapped_column(Integer, nullable=True)
    publish_status: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    health_previous_week: Mapped[str | None] = mapped_column(String(10), nullable=True)
    health_current_week: Mapped[str] = mapped_column(
        String(10), nullable=False, default=HealthStatus.GREEN.value
    )
    client_escalation: Mapped[str] = mapped_column(Text, nullable=False, default=NO_ESCALATION)
    update_for_current_week: Mapped[str | None] = mapped_column(Text, nullable=True)
    plan_for_next_week: Mapped[str | None] = mapped_column(Text, nullable=True)
    issues_challenges: Mapped[str | None] = mapped_column(Text, nullable=True)
    path_to_green: Mapped[str | None] = mapped_column(Text, nullable=True)
    resourcing_status: Mapped[str | None] = mapped_column(Text, nullable=True)
    current_sdlc_phase: Mapped[str | None] = mapped_column(String(100), nullable=True)
    fte: Mapped[str | None] = mapped_column(String(50), nullable=True)
    revenue: Mapped[str | None] = mapped_column(String(100), nullable=True)
    tower: Mapped[str | None] = mapped_column(String(255), nullable=True)
    billing_model: Mapped[str | None] = mapped_column(String(100), nullable=True)
    submitted_by: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # LLM assessment
    ai_status: Mapped[str | None] = mapped_column(String(10), nullable=True)
    ai_assessment_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    ai_summary: Mapped[dict | None] = mapped_column(
        JSON().with_variant(JSONB, "postgresql"), nullable=True
    )

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from statusboard.common.enums import HealthStatus, ProjectImportance
from statusboard.db.base import Entity


class Project(Entity):
    __tablename__ = "projects"

    name: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    code_id: Mapped[str] = mapped_column(String(50), nullable=False)
    account: Mapped[str] = mapped_column(String(255), nullable=False)
    customer: Mapped[str] = mapped_column(String(255), nullable=False)
    engagement_type: Mapped[str] = mapped_column(String(100), nullable=False, default="Development")
    delivery_model: Mapped[str] = mapped_column(String(100), nullable=False, default="Managed")
    billing_model: Mapped[str] = mapped_column(String(100), nullable=False, default="T&M")
    project_importance: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ProjectImportance.MEDIUM.value
    )
    rag_status: Mapped[str] = mapped_column(
        String(10), nullable=False, default=HealthStatus.GREEN.value
    )
    scope_description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    team_squad: Mapped[str | None] = mapped_column(String(255), nullable=True)
    tower: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    fte: Mapped[str | None] = mapped_column(String(50), nullable=True)
    revenue: Mapped[str | None] = mapped_column(String(100), nullable=True)
    start_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    planned_end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    client_escalation: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    ai_monitoring_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    project_tags: Mapped[list | None] = mapped_column(
        JSON().with_variant(JSONB, "postgresql"), nullable=True
    )

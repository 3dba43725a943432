import uuid
from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from statusboard.db.base import Entity


class TechnicalReview(Entity):
    __tablename__ = "technical_reviews"

    project_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("projects.id"), nullable=False, index=True
    )
    review_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    review_type: Mapped[str] = mapped_column(String(100), nullable=False)
    review_cycle_number: Mapped[int] = mapped_column(Integer, nullable=False)

    # Review sections
    executive_summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    architecture_design_review: Mapped[str | None] = mapped_column(Text, nullable=True)
    code_quality_standards: Mapped[str | None] = mapped_column(Text, nullable=True)
    devops_deployment_readiness: Mapped[str | None] = mapped_column(Text, nullable=True)
    testing_qa: Mapped[str | None] = mapped_column(Text, nullable=True)
    risk_identification: Mapped[str | None] = mapped_column(Text, nullable=True)
    compliance_standards: Mapped[str | None] = mapped_column(Text, nullable=True)
    action_items_recommendations: Mapped[str | None] = mapped_column(Text, nullable=True)
    reviewer_sign_off: Mapped[str | None] = mapped_column(Text, nullable=True)
    sqa_validation: Mapped[str | None] = mapped_column(Text, nullable=True)

    participants: Mapped[list | None] = mapped_column(
        JSON().with_variant(JSONB, "postgresql"), nullable=True
    )
    conducted_by: Mapped[str | None] = mapped_column(String(100), nullable=True)

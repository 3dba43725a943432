import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from statusboard.api.deps import get_current_role, get_db
from statusboard.common.enums import UserRole
from statusboard.common.exceptions import NotFoundError
from statusboard.db.models.project import Project
from statusboard.db.models.technical_review import TechnicalReview

router = APIRouter(prefix="/technical-reviews", tags=["Technical Reviews"])


# ---------- Schemas ----------


class TechnicalReviewCreateRequest(BaseModel):
    project_id: uuid.UUID
    review_date: datetime
    review_type: str = Field(..., min_length=1, max_length=100)
    review_cycle_number: int = Field(..., ge=1)
    executive_summary: str | None = None
    architecture_design_review: str | None = None
    code_quality_standards: str | None = None
    devops_deployment_readiness: str | None = None
    testing_qa: str | None = None
    risk_identification: str | None = None
    compliance_standards: str | None = None
    action_items_recommendations: str | None = None
    reviewer_sign_off: str | None = None
    sqa_validation: str | None = None
    participants: list[str] = []


class TechnicalReviewResponse(BaseModel):
    id: uuid.UUID
    project_id: uuid.UUID
    project_name: str | None
    review_date: datetime
    review_type: str
    review_cycle_number: int
    executive_summary: str | None
    architecture_design_review: str | None
    code_quality_standards: str | None
    devops_deployment_readiness: str | None
    testing_qa: str | None
    risk_identification: str | None
    compliance_standards: str | None
    action_items_recommendations: str | None
    reviewer_sign_off: str | None
    sqa_validation: str | None
    participants: list[str]
    conducted_by: str | None
    created_at: str

    @classmethod
    def from_orm_instance(
        cls, row: TechnicalReview, project: Project | None = None
    ) -> "TechnicalReviewResponse":
        return cls(
            id=row.id,
            project_id=row.project_id,
            project_name=project.name if project else None,
            review_date=row.review_date,
            review_type=row.review_type,
            review_cycle_number=row.review_cycle_number,
            executive_summary=row.executive_summary,
            architecture_design_review=row.architecture_design_review,
            code_quality_standards=row.code_quality_standards,
            devops_deployment_readiness=row.devops_deployment_readiness,
            testing_qa=row.testing_qa,
            risk_identification=row.risk_identification,
            compliance_standards=row.compliance_standards,
            action_items_recommendations=row.action_items_recommendations,
            reviewer_sign_off=row.reviewer_sign_off,
            sqa_validation=row.sqa_validation,
            participants=row.participants or [],
            conducted_by=row.conducted_by,
            created_at=row.created_at.isoformat(),
        )


# ---------- Endpoints ----------


@router.get("", response_model=list[TechnicalReviewResponse])
async def list_technical_reviews(
    project_id: uuid.UUID | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    query = select(TechnicalReview, Project).join(Project, Project.id == TechnicalReview.project_id)
    if project_id:
        query = query.where(TechnicalReview.project_id == project_id)
    query = query.order_by(TechnicalReview.review_date.desc(), TechnicalReview.created_at.desc())

    result = await db.execute(query)
    return [TechnicalReviewResponse.from_orm_instance(review, project) for review, project in result.all()]


@router.post("", response_model=TechnicalReviewResponse, status_code=201)
async def create_technical_review(
    body: TechnicalReviewCreateRequest,
    role: UserRole = Depends(get_current_role),
    db: AsyncSession = Depends(get_db),
):
    project = await db.get(Project, body.project_id)
    if project is None:
        raise NotFoundError("Project", str(body.project_id))

    review = TechnicalReview(**body.model_dump(), conducted_by=role.value)
    db.add(review)
    await db.flush()
    return TechnicalReviewResponse.from_orm_instance(review, project)

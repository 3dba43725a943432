import uuid
from datetime import date

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from statusboard.api.deps import get_current_role, get_db, get_repository
from statusboard.common.enums import UserRole
from statusboard.common.exceptions import NotFoundError
from statusboard.common.pagination import PaginatedResponse, PaginationParams, paginate
from statusboard.core.ingestion.health import normalize_health
from statusboard.core.ingestion.repository import SqlReportRepository
from statusboard.core.ingestion.schemas import NO_ESCALATION, NormalizedReport
from statusboard.db.models.weekly_report import WeeklyStatusReport

router = APIRouter(prefix="/weekly-reports", tags=["Weekly Reports"])


# ---------- Schemas ----------


class WeeklyReportCreateRequest(BaseModel):
    project_id: uuid.UUID
    week_number: int = Field(..., ge=1)
    reporting_date: date | None = None
    health_previous_week: str | None = None
    health_current_week: str | None = None
    client_escalation: str = NO_ESCALATION
    update_for_current_week: str = ""
    plan_for_next_week: str = ""
    issues_challenges: str = ""
    path_to_green: str = ""
    resourcing_status: str = ""
    tower: str = ""
    billing_model: str = ""
    fte: str = ""
    revenue: str = ""


class WeeklyReportResponse(BaseModel):
    id: uuid.UUID
    project_id: uuid.UUID
    reporting_date: date
    week_number: int | None
    health_previous_week: str | None
    health_current_week: str
    client_escalation: str
    update_for_current_week: str | None
    plan_for_next_week: str | None
    issues_challenges: str | None
    path_to_green: str | None
    resourcing_status: str | None
    tower: str | None
    submitted_by: str | None
    ai_status: str | None
    ai_assessment_description: str | None
    created_at: str

    @classmethod
    def from_orm_instance(cls, row: WeeklyStatusReport) -> "WeeklyReportResponse":
        return cls(
            id=row.id,
            project_id=row.project_id,
            reporting_date=row.reporting_date,
            week_number=row.week_number,
            health_previous_week=row.health_previous_week,
            health_current_week=row.health_current_week,
            client_escalation=row.client_escalation,
            update_for_current_week=row.update_for_current_week,
            plan_for_next_week=row.plan_for_next_week,
            issues_challenges=row.issues_challenges,
            path_to_green=row.path_to_green,
            resourcing_status=row.resourcing_status,
            tower=row.tower,
            submitted_by=row.submitted_by,
            ai_status=row.ai_status,
            ai_assessment_description=row.ai_assessment_description,
            created_at=row.created_at.isoformat(),
        )


# ---------- Endpoints ----------


@router.post("", response_model=WeeklyReportResponse, status_code=201)
async def submit_weekly_report(
    body: WeeklyReportCreateRequest,
    role: UserRole = Depends(get_current_role),
    repository: SqlReportRepository = Depends(get_repository),
):
    project = await repository.get_project(body.project_id)
    if project is None:
        raise NotFoundError("Project", str(body.project_id))

    report = NormalizedReport(
        project_name=project.name,
        week_number=body.week_number,
        health_previous_week=normalize_health(body.health_previous_week),
        health_current_week=normalize_health(body.health_current_week),
        client_escalation=body.client_escalation.strip() or NO_ESCALATION,
        update_for_current_week=body.update_for_current_week,
        plan_for_next_week=body.plan_for_next_week,
        issues_challenges=body.issues_challenges,
        path_to_green=body.path_to_green,
        resourcing_status=body.resourcing_status,
        tower=body.tower or project.tower or "",
        billing_model=body.billing_model or project.billing_model,
        fte=body.fte,
        revenue=body.revenue,
    )
    row = await repository.upsert_report_for_week(
        project, report, reporting_date=body.reporting_date
    )
    row.submitted_by = role.value
    return WeeklyReportResponse.from_orm_instance(row)


@router.get("", response_model=PaginatedResponse[WeeklyReportResponse])
async def list_weekly_reports(
    project_id: uuid.UUID | None = Query(None),
    pagination: PaginationParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    query = select(WeeklyStatusReport)
    if project_id:
        query = query.where(WeeklyStatusReport.project_id == project_id)
    query = query.order_by(
        WeeklyStatusReport.reporting_date.desc(), WeeklyStatusReport.created_at.desc()
    )

    items, total = await paginate(db, query, pagination)
    return PaginatedResponse.build(
        [WeeklyReportResponse.from_orm_instance(r) for r in items], total, pagination
    )

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from statusboard.api.deps import get_db, require_role
from statusboard.common.enums import HealthStatus, ProjectImportance, UserRole
from statusboard.common.exceptions import NotFoundError
from statusboard.db.models.project import Project

router = APIRouter(prefix="/projects", tags=["Projects"])

MANAGERS = (UserRole.DELIVERY_MANAGER, UserRole.ADMIN)


# ---------- Schemas ----------


class ProjectCreateRequest(BaseModel):
    name: str
    code_id: str
    account: str
    customer: str
    engagement_type: str = "Development"
    delivery_model: str = "Managed"
    billing_model: str = "T&M"
    project_importance: ProjectImportance = ProjectImportance.MEDIUM
    rag_status: HealthStatus = HealthStatus.GREEN
    scope_description: str = ""
    team_squad: str | None = None
    tower: str | None = None
    fte: str | None = None
    revenue: str | None = None
    start_date: datetime | None = None
    planned_end_date: datetime | None = None
    client_escalation: bool = False
    ai_monitoring_enabled: bool = True
    project_tags: list[str] | None = None


class ProjectUpdateRequest(BaseModel):
    name: str | None = None
    rag_status: HealthStatus | None = None
    project_importance: ProjectImportance | None = None
    tower: str | None = None
    fte: str | None = None
    revenue: str | None = None
    client_escalation: bool | None = None
    is_active: bool | None = None


class ProjectResponse(BaseModel):
    id: uuid.UUID
    name: str
    code_id: str
    account: str
    customer: str
    engagement_type: str
    delivery_model: str
    billing_model: str
    project_importance: str
    rag_status: str
    tower: str | None
    fte: str | None
    revenue: str | None
    client_escalation: bool
    is_active: bool
    project_tags: list[str] | None
    created_at: str

    model_config = {"from_attributes": True}

    @classmethod
    def from_orm_instance(cls, project: Project) -> "ProjectResponse":
        return cls(
            id=project.id,
            name=project.name,
            code_id=project.code_id,
            account=project.account,
            customer=project.customer,
            engagement_type=project.engagement_type,
            delivery_model=project.delivery_model,
            billing_model=project.billing_model,
            project_importance=project.project_importance,
            rag_status=project.rag_status,
            tower=project.tower,
            fte=project.fte,
            revenue=project.revenue,
            client_escalation=project.client_escalation,
            is_active=project.is_active,
            project_tags=project.project_tags,
            created_at=project.created_at.isoformat(),
        )


class ProjectListResponse(BaseModel):
    projects: list[ProjectResponse]
    total: int


# ---------- Endpoints ----------


@router.post("", response_model=ProjectResponse, status_code=201)
async def create_project(
    body: ProjectCreateRequest,
    _role: UserRole = Depends(require_role(*MANAGERS)),
    db: AsyncSession = Depends(get_db),
):
    data = body.model_dump()
    data["project_importance"] = body.project_importance.value
    data["rag_status"] = body.rag_status.value
    project = Project(**data)
    db.add(project)
    await db.flush()
    return ProjectResponse.from_orm_instance(project)


@router.get("", response_model=ProjectListResponse)
async def list_projects(
    tower: str | None = Query(None, description="Only projects in this tower"),
    db: AsyncSession = Depends(get_db),
):
    query = select(Project).where(Project.is_active.is_(True))
    if tower:
        query = query.where(Project.tower == tower)

    result = await db.execute(query.order_by(Project.name))
    projects = result.scalars().all()

    return ProjectListResponse(
        projects=[ProjectResponse.from_orm_instance(p) for p in projects],
        total=len(projects),
    )


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(project_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    return ProjectResponse.from_orm_instance(await _get_project_or_404(project_id, db))


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: uuid.UUID,
    body: ProjectUpdateRequest,
    _role: UserRole = Depends(require_role(*MANAGERS)),
    db: AsyncSession = Depends(get_db),
):
    project = await _get_project_or_404(project_id, db)

    for field, value in body.model_dump(exclude_unset=True).items():
        if value is None:
            continue
        if isinstance(value, HealthStatus | ProjectImportance):
            value = value.value
        setattr(project, field, value)

    await db.flush()
    return ProjectResponse.from_orm_instance(project)


async def _get_project_or_404(project_id: uuid.UUID, db: AsyncSession) -> Project:
    result = await db.execute(select(Project).where(Project.id == project_id))
    project = result.scalar_one_or_none()
    if not project:
        raise NotFoundError("Project", str(project_id))
    return project

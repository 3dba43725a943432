import shutil
import tempfile
import uuid
from datetime import date
from pathlib import Path

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from statusboard.api.deps import get_db, get_project_analyzer, get_provider_config, get_repository, require_role
from statusboard.common.enums import HealthStatus, UserRole
from statusboard.common.exceptions import BadRequestError, NotFoundError
from statusboard.common.logging import get_logger
from statusboard.common.schemas import CamelModel
from statusboard.config import settings
from statusboard.core.analysis.project_analyzer import ProjectAnalyzer
from statusboard.core.analysis.schemas import ExcelProcessResult, ProjectSummary, ProviderConfig
from statusboard.core.analysis.service import stored_summary
from statusboard.core.ingestion.excel_parser import SPREADSHEET_SUFFIXES
from statusboard.core.ingestion.health import normalize_health
from statusboard.core.ingestion.repository import SqlReportRepository
from statusboard.core.ingestion.service import IngestionService
from statusboard.db.models.project import Project
from statusboard.db.models.weekly_report import WeeklyStatusReport

router = APIRouter(prefix="/excel", tags=["Excel Import"])
logger = get_logger("api.excel")

IMPORTERS = (UserRole.PROJECT_MANAGER, UserRole.DELIVERY_MANAGER, UserRole.ADMIN)


# ---------- Schemas ----------


class ReportSummaryItem(CamelModel):
    report_id: uuid.UUID
    project_id: uuid.UUID
    project_name: str
    tower: str | None
    week_number: int | None
    reporting_date: date
    health_current_week: HealthStatus
    client_escalation: str
    ai_status: str | None
    summary: ProjectSummary | None


class ProjectAnalysisResponse(CamelModel):
    project_id: uuid.UUID
    project_name: str
    report_id: uuid.UUID
    summary: ProjectSummary


# ---------- Endpoints ----------


@router.post("/parse", response_model=ExcelProcessResult)
async def parse_excel_directory(
    _role: UserRole = Depends(require_role(*IMPORTERS)),
    repository: SqlReportRepository = Depends(get_repository),
    analyzer: ProjectAnalyzer = Depends(get_project_analyzer),
    provider: ProviderConfig = Depends(get_provider_config),
):
    """Ingest every spreadsheet in the configured import directory."""
    return await IngestionService(repository, analyzer).process_directory(settings.EXCEL_DIR, provider)


@router.post("/upload", response_model=ExcelProcessResult, status_code=201)
async def upload_excel(
    file: UploadFile = File(...),
    _role: UserRole = Depends(require_role(*IMPORTERS)),
    repository: SqlReportRepository = Depends(get_repository),
    analyzer: ProjectAnalyzer = Depends(get_project_analyzer),
    provider: ProviderConfig = Depends(get_provider_config),
):
    suffix = Path(file.filename or "").suffix.lower()
    if suffix not in SPREADSHEET_SUFFIXES:
        raise BadRequestError(
            f"Unsupported file type '{suffix or file.filename}'. Allowed: {', '.join(SPREADSHEET_SUFFIXES)}"
        )

    with tempfile.TemporaryDirectory() as tmp_dir:
        target = Path(tmp_dir) / f"upload{suffix}"
        with target.open("wb") as out:
            shutil.copyfileobj(file.file, out)

        result = await IngestionService(repository, analyzer).process_files([target], provider)

    if result.failed_files:
        logger.warning("Rejected upload %s: %s", file.filename, result.failed_files[0].error)
        raise BadRequestError(f"{file.filename}: {result.failed_files[0].error}")
    return result


@router.get("/summaries", response_model=list[ReportSummaryItem])
async def list_report_summaries(db: AsyncSession = Depends(get_db)):
    """Stored assessments for every published report, newest first."""
    result = await db.execute(
        select(WeeklyStatusReport, Project)
        .join(Project, Project.id == WeeklyStatusReport.project_id)
        .where(WeeklyStatusReport.publish_status.is_(True))
        .order_by(WeeklyStatusReport.reporting_date.desc(), WeeklyStatusReport.created_at.desc())
    )

    items = []
    for report, project in result.all():
        items.append(
            ReportSummaryItem(
                report_id=report.id,
                project_id=project.id,
                project_name=project.name,
                tower=report.tower or project.tower,
                week_number=report.week_number,
                reporting_date=report.reporting_date,
                health_current_week=normalize_health(report.health_current_week),
                client_escalation=report.client_escalation,
                ai_status=report.ai_status,
                summary=stored_summary(project, report) if report.ai_summary else None,
            )
        )
    return items


@router.post("/analyze-project/{project_id}", response_model=ProjectAnalysisResponse)
async def analyze_project(
    project_id: uuid.UUID,
    _role: UserRole = Depends(require_role(*IMPORTERS)),
    repository: SqlReportRepository = Depends(get_repository),
    analyzer: ProjectAnalyzer = Depends(get_project_analyzer),
    provider: ProviderConfig = Depends(get_provider_config),
):
    try:
        project, report, summary = await IngestionService(repository, analyzer).analyze_project(
            project_id, provider
        )
    except LookupError as e:
        raise NotFoundError("Project reports", str(project_id)) from e

    return ProjectAnalysisResponse(
        project_id=project.id,
        project_name=project.name,
        report_id=report.id,
        summary=summary,
    )

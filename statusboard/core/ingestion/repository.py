"""Storage seam used by the ingestion and analysis services."""

from __future__ import annotations

import uuid
from datetime import date, datetime, timedelta, timezone
from typing import Protocol

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from statusboard.common.logging import get_logger
from statusboard.core.analysis.schemas import ProjectSummary
from statusboard.core.ingestion.health import normalize_health
from statusboard.core.ingestion.schemas import NO_ESCALATION, NormalizedReport, has_escalation
from statusboard.db.models.project import Project
from statusboard.db.models.weekly_report import WeeklyStatusReport

logger = get_logger("ingestion.repository")

DEFAULT_PROJECT_DURATION = timedelta(days=180)


class ReportRepository(Protocol):
    async def find_project_by_name(self, name: str) -> Project | None: ...

    async def create_project(self, report: NormalizedReport) -> Project: ...

    async def get_project(self, project_id: uuid.UUID) -> Project | None: ...

    async def list_projects(self) -> list[Project]: ...

    async def list_reports(self, project_id: uuid.UUID | None = None) -> list[WeeklyStatusReport]: ...

    async def upsert_report_for_week(
        self,
        project: Project,
        report: NormalizedReport,
        summary: ProjectSummary | None = None,
        reporting_date: date | None = None,
    ) -> WeeklyStatusReport: ...

    async def save_summary(self, report: WeeklyStatusReport, summary: ProjectSummary) -> None: ...


def report_to_normalized(project: Project, row: WeeklyStatusReport) -> NormalizedReport:
    """Rebuild the ingestion view of a stored report for re-analysis."""
    return NormalizedReport(
        project_name=project.name,
        week_number=row.week_number or 1,
        health_previous_week=normalize_health(row.health_previous_week),
        health_current_week=normalize_health(row.health_current_week),
        update_for_current_week=row.update_for_current_week or "",
        plan_for_next_week=row.plan_for_next_week or "",
        issues_challenges=row.issues_challenges or "",
        path_to_green=row.path_to_green or "",
        resourcing_status=row.resourcing_status or "",
        client_escalation=row.client_escalation or NO_ESCALATION,
        tower=row.tower or "",
        billing_model=row.billing_model or "",
        fte=row.fte or "",
        revenue=row.revenue or "",
    )


class SqlReportRepository:
    """``ReportRepository`` over an async SQLAlchemy session.

    The caller owns the transaction; this class only flushes.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def find_project_by_name(self, name: str) -> Project | None:
        result = await self.db.execute(
            select(Project)
            .where(func.lower(Project.name) == name.strip().lower())
            .order_by(Project.created_at)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def create_project(self, report: NormalizedReport) -> Project:
        account = report.project_name.split(" ")[0] or "Unknown"
        now = datetime.now(timezone.utc)
        project = Project(
            name=report.project_name,
            code_id=f"EXL-{uuid.uuid4().hex[:6].upper()}",
            account=account,
            customer=account,
            engagement_type="Development",
            delivery_model="Agile",
            billing_model=report.billing_model or "T&M",
            rag_status=report.health_current_week.value,
            scope_description=f"Project imported from Excel: {report.project_name}",
            team_squad=report.tower or None,
            tower=report.tower or None,
            fte=report.fte or None,
            revenue=report.revenue or None,
            start_date=now,
            planned_end_date=now + DEFAULT_PROJECT_DURATION,
            client_escalation=has_escalation(report.client_escalation),
            project_tags=["excel-import"],
        )
        self.db.add(project)
        await self.db.flush()
        logger.info("Created project '%s' from spreadsheet import", project.name)
        return project

    async def get_project(self, project_id: uuid.UUID) -> Project | None:
        result = await self.db.execute(select(Project).where(Project.id == project_id))
        return result.scalar_one_or_none()

    async def list_projects(self) -> list[Project]:
        result = await self.db.execute(select(Project).order_by(Project.name))
        return list(result.scalars().all())

    async def list_reports(self, project_id: uuid.UUID | None = None) -> list[WeeklyStatusReport]:
        query = select(WeeklyStatusReport).order_by(WeeklyStatusReport.created_at)
        if project_id is not None:
            query = query.where(WeeklyStatusReport.project_id == project_id)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def upsert_report_for_week(
        self,
        project: Project,
        report: NormalizedReport,
        summary: ProjectSummary | None = None,
        reporting_date: date | None = None,
    ) -> WeeklyStatusReport:
        """Update the same-day report for this week, or insert a new one."""
        reporting_date = reporting_date or datetime.now(timezone.utc).date()
        result = await self.db.execute(
            select(WeeklyStatusReport).where(
                WeeklyStatusReport.project_id == project.id,
                WeeklyStatusReport.week_number == report.week_number,
                WeeklyStatusReport.reporting_date == reporting_date,
            )
        )
        row = result.scalars().first()
        if row is None:
            row = WeeklyStatusReport(project_id=project.id, reporting_date=reporting_date)
            self.db.add(row)

        row.week_number = report.week_number
        row.publish_status = True
        row.health_previous_week = report.health_previous_week.value
        row.health_current_week = report.health_current_week.value
        row.client_escalation = report.client_escalation
        row.update_for_current_week = report.update_for_current_week
        row.plan_for_next_week = report.plan_for_next_week
        row.issues_challenges = report.issues_challenges
        row.path_to_green = report.path_to_green
        row.resourcing_status = report.resourcing_status
        row.current_sdlc_phase = row.current_sdlc_phase or "Development"
        row.fte = report.fte
        row.revenue = report.revenue
        row.tower = report.tower
        row.billing_model = report.billing_model
        if summary is not None:
            _apply_summary(row, summary)

        project.rag_status = report.health_current_week.value
        project.client_escalation = has_escalation(report.client_escalation)

        await self.db.flush()
        return row

    async def save_summary(self, report: WeeklyStatusReport, summary: ProjectSummary) -> None:
        _apply_summary(report, summary)
        await self.db.flush()


def _apply_summary(row: WeeklyStatusReport, summary: ProjectSummary) -> None:
    row.ai_status = summary.overall_health.value
    row.ai_assessment_description = summary.summary
    row.ai_summary = summary.model_dump(mode="json", by_alias=True)

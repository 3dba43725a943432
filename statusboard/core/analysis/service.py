"""Dashboard queries and portfolio narratives over stored reports."""

from __future__ import annotations

from datetime import datetime

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from statusboard.common.enums import LlmProvider
from statusboard.common.logging import get_logger
from statusboard.core.analysis.portfolio import (
    build_trend,
    compute_dashboard_stats,
    latest_reports_by_project,
    tower_performance,
)
from statusboard.core.analysis.project_analyzer import ProjectAnalyzer, build_fallback_summary
from statusboard.core.analysis.schemas import (
    DashboardStats,
    ProjectSummary,
    ProviderConfig,
    TowerPerformance,
    TrendPoint,
)
from statusboard.core.ingestion.columns import COLUMN_SYNONYMS
from statusboard.core.ingestion.repository import SqlReportRepository, report_to_normalized
from statusboard.db.models.llm_config import LlmConfiguration
from statusboard.db.models.portfolio_analysis import PortfolioAnalysis
from statusboard.db.models.project import Project
from statusboard.db.models.weekly_report import WeeklyStatusReport
from statusboard.integrations.ai_client import default_provider_config

logger = get_logger("analysis.service")


async def get_active_llm_config(db: AsyncSession) -> LlmConfiguration | None:
    result = await db.execute(
        select(LlmConfiguration)
        .where(LlmConfiguration.is_active.is_(True))
        .order_by(LlmConfiguration.created_at.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


def provider_config_from(row: LlmConfiguration | None) -> ProviderConfig:
    if row is None:
        return default_provider_config()
    return ProviderConfig(
        provider=LlmProvider(row.provider_name),
        model=row.model_name,
        api_key=row.api_key,
        base_url=row.base_url,
    )


def stored_summary(project: Project, row: WeeklyStatusReport) -> ProjectSummary:
    """The assessment stored on *row*, or its fallback when absent or invalid."""
    if row.ai_summary:
        try:
            return ProjectSummary.model_validate(row.ai_summary)
        except ValidationError as e:
            logger.warning("Stored AI summary for %s is invalid: %s", project.name, e)
    return build_fallback_summary(report_to_normalized(project, row))


class PortfolioService:
    def __init__(self, db: AsyncSession, analyzer: ProjectAnalyzer | None = None) -> None:
        self.db = db
        self.repository = SqlReportRepository(db)
        self.analyzer = analyzer or ProjectAnalyzer()

    async def dashboard_stats(self) -> DashboardStats:
        return compute_dashboard_stats(await self.repository.list_reports())

    async def trends(self, weeks: int, now: datetime | None = None) -> list[TrendPoint]:
        projects = await self.repository.list_projects()
        reports = await self.repository.list_reports()
        status = {p.id: p.rag_status for p in projects}
        return build_trend(reports, status, weeks=weeks, now=now)

    async def towers(self) -> list[TowerPerformance]:
        projects = await self.repository.list_projects()
        reports = await self.repository.list_reports()
        return tower_performance(projects, reports)

    async def latest_analysis(self) -> PortfolioAnalysis | None:
        result = await self.db.execute(
            select(PortfolioAnalysis).order_by(PortfolioAnalysis.created_at.desc()).limit(1)
        )
        return result.scalar_one_or_none()

    async def current_summaries(self) -> list[ProjectSummary]:
        """Stored assessment of each project's latest report, or its fallback."""
        projects = {p.id: p for p in await self.repository.list_projects()}
        latest = latest_reports_by_project(await self.repository.list_reports())

        summaries = []
        for project_id, row in latest.items():
            project = projects.get(project_id)
            if project is None:
                continue
            summaries.append(stored_summary(project, row))
        return summaries

    async def generate_analysis(self) -> PortfolioAnalysis:
        llm_config = await get_active_llm_config(self.db)
        summaries = await self.current_summaries()
        narrative = await self.analyzer.analyze_portfolio(summaries, provider_config_from(llm_config))

        analysis = PortfolioAnalysis(
            overall_portfolio_rag_status=narrative.overall_portfolio_rag_status.value,
            reason=narrative.reason,
            projects_analyzed=[s.model_dump(mode="json", by_alias=True) for s in summaries],
            columns_used_for_analysis=list(COLUMN_SYNONYMS),
            llm_configuration_id=llm_config.id if llm_config else None,
        )
        self.db.add(analysis)
        await self.db.flush()
        logger.info(
            "Portfolio analysis generated: %s over %d project(s)",
            analysis.overall_portfolio_rag_status,
            len(summaries),
        )
        return analysis

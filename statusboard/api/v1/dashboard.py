import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from statusboard.api.deps import get_db, get_project_analyzer, require_role
from statusboard.common.enums import HealthStatus, UserRole
from statusboard.common.exceptions import NotFoundError
from statusboard.common.schemas import CamelModel
from statusboard.config import settings
from statusboard.core.analysis.narrative import (
    extract_primary_recommendation,
    extract_rag_metrics,
    summarize_metrics,
)
from statusboard.core.analysis.project_analyzer import ProjectAnalyzer
from statusboard.core.analysis.schemas import (
    DashboardStats,
    ProjectSummary,
    RagMetrics,
    TowerPerformance,
    TrendPoint,
)
from statusboard.core.analysis.service import PortfolioService
from statusboard.db.models.portfolio_analysis import PortfolioAnalysis

router = APIRouter(tags=["Dashboard"])


# ---------- Schemas ----------


class PortfolioAnalysisResponse(CamelModel):
    id: uuid.UUID
    analysis_date: datetime
    overall_portfolio_rag_status: HealthStatus
    reason: str
    primary_recommendation: str
    metrics: RagMetrics
    headline: str
    projects_analyzed: list[ProjectSummary]
    columns_used_for_analysis: list[str]

    @classmethod
    def from_orm_instance(cls, analysis: PortfolioAnalysis) -> "PortfolioAnalysisResponse":
        metrics = extract_rag_metrics(analysis.reason)
        return cls(
            id=analysis.id,
            analysis_date=analysis.created_at,
            overall_portfolio_rag_status=HealthStatus(analysis.overall_portfolio_rag_status),
            reason=analysis.reason,
            primary_recommendation=extract_primary_recommendation(analysis.reason),
            metrics=metrics,
            headline=summarize_metrics(metrics),
            projects_analyzed=[
                ProjectSummary.model_validate(item) for item in analysis.projects_analyzed or []
            ],
            columns_used_for_analysis=analysis.columns_used_for_analysis or [],
        )


# ---------- Endpoints ----------


@router.get("/dashboard/stats", response_model=DashboardStats)
async def dashboard_stats(db: AsyncSession = Depends(get_db)):
    return await PortfolioService(db).dashboard_stats()


@router.get("/dashboard/trends", response_model=list[TrendPoint])
async def dashboard_trends(
    weeks: int = Query(settings.TREND_WINDOW_WEEKS, ge=1, le=52, description="Weeks to chart"),
    db: AsyncSession = Depends(get_db),
):
    return await PortfolioService(db).trends(weeks)


@router.get("/dashboard/towers", response_model=list[TowerPerformance])
async def dashboard_towers(db: AsyncSession = Depends(get_db)):
    return await PortfolioService(db).towers()


@router.get("/portfolio-analysis", response_model=PortfolioAnalysisResponse)
async def latest_portfolio_analysis(db: AsyncSession = Depends(get_db)):
    analysis = await PortfolioService(db).latest_analysis()
    if analysis is None:
        raise NotFoundError("Portfolio analysis")
    return PortfolioAnalysisResponse.from_orm_instance(analysis)


@router.post("/portfolio-analysis", response_model=PortfolioAnalysisResponse, status_code=201)
async def generate_portfolio_analysis(
    _role: UserRole = Depends(require_role(UserRole.DELIVERY_MANAGER, UserRole.ADMIN)),
    analyzer: ProjectAnalyzer = Depends(get_project_analyzer),
    db: AsyncSession = Depends(get_db),
):
    analysis = await PortfolioService(db, analyzer).generate_analysis()
    return PortfolioAnalysisResponse.from_orm_instance(analysis)

"""Value objects produced by project analysis and portfolio aggregation."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, computed_field

from statusboard.common.enums import HealthStatus, LlmProvider, RiskLevel
from statusboard.common.schemas import CamelModel
from statusboard.core.ingestion.schemas import FileFailure, NormalizedReport

DEFAULT_SUMMARY = "Analysis completed"


class ProviderConfig(CamelModel):
    """The LLM capability handed to the analyzer; opaque to the core."""

    provider: LlmProvider = LlmProvider.OPENAI
    model: str
    api_key: str
    base_url: str | None = None


class ProjectSummary(CamelModel):
    project_name: str
    overall_health: HealthStatus = HealthStatus.AMBER
    risk_level: RiskLevel = RiskLevel.MEDIUM
    key_insights: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    summary: str = DEFAULT_SUMMARY
    critical_issues: list[str] = Field(default_factory=list)
    success_factors: list[str] = Field(default_factory=list)


class PortfolioSummary(CamelModel):
    overall_health: HealthStatus
    total_projects: int
    risk_distribution: dict[RiskLevel, int] = Field(default_factory=dict)
    key_recommendations: list[str] = Field(default_factory=list)
    critical_alerts: list[str] = Field(default_factory=list)


class TrendPoint(CamelModel):
    label: str
    period_start: datetime
    period_end: datetime
    green: int = Field(0, ge=0)
    amber: int = Field(0, ge=0)
    red: int = Field(0, ge=0)

    @computed_field
    @property
    def total(self) -> int:
        return self.green + self.amber + self.red


class RagMetrics(CamelModel):
    green: int = 0
    amber: int = 0
    red: int = 0


class PortfolioNarrative(CamelModel):
    overall_portfolio_rag_status: HealthStatus
    reason: str


class DashboardStats(CamelModel):
    green_projects: int = 0
    amber_projects: int = 0
    red_projects: int = 0
    escalations: int = 0
    total_projects: int = 0


class TowerPerformance(CamelModel):
    name: str
    green: int = 0
    amber: int = 0
    red: int = 0
    total_projects: int = 0
    green_percentage: float = 0.0
    amber_percentage: float = 0.0
    red_percentage: float = 0.0


class ExcelProcessResult(CamelModel):
    """Response of a bulk spreadsheet ingestion run."""

    message: str
    projects_processed: int
    portfolio_summary: PortfolioSummary
    project_summaries: list[ProjectSummary]
    raw_data: list[NormalizedReport]
    failed_files: list[FileFailure] = Field(default_factory=list)

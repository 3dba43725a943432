"""AI-backed project and portfolio assessments with deterministic fallbacks.

``ProjectAnalyzer`` always returns a result.  When the provider is not
configured, times out, errors, or answers with something that is not a
JSON object, the analyzer logs the failure and builds the assessment from
the report's own fields instead, so the dashboard always has a summary to
render.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Sequence
from typing import Any

from statusboard.common.enums import HealthStatus, RiskLevel
from statusboard.common.exceptions import AIProviderError
from statusboard.common.logging import get_logger
from statusboard.config import settings
from statusboard.core.analysis.portfolio import derive_overall_health
from statusboard.core.analysis.schemas import (
    DEFAULT_SUMMARY,
    PortfolioNarrative,
    ProjectSummary,
    ProviderConfig,
)
from statusboard.core.ingestion.schemas import NormalizedReport
from statusboard.integrations.ai_client import AIClient

logger = get_logger("analysis.project_analyzer")

PROJECT_SYSTEM_PROMPT = (
    "You are an expert project management analyst specializing in risk assessment "
    "and project health evaluation. Analyze weekly status reports and provide "
    "structured insights in JSON format."
)

PORTFOLIO_SYSTEM_PROMPT = (
    "You are a delivery director reviewing a portfolio of software projects. "
    "Return ONLY valid JSON with keys overallPortfolioRagStatus (Red, Amber or Green) "
    "and reason (a short paragraph that states how many projects are Green, Amber "
    "and Red and starts its final sentence with 'Recommend')."
)

FALLBACK_RECOMMENDATIONS = (
    "Review current status and adjust plans accordingly",
    "Monitor key risk factors closely",
    "Ensure adequate resource allocation",
)

_RISK_BY_HEALTH = {
    HealthStatus.RED: RiskLevel.HIGH,
    HealthStatus.AMBER: RiskLevel.MEDIUM,
    HealthStatus.GREEN: RiskLevel.LOW,
}


# ---------------------------------------------------------------------------
# Prompt building and response parsing
# ---------------------------------------------------------------------------


def build_analysis_prompt(report: NormalizedReport) -> str:
    return (
        "Analyze this weekly project status report and provide insights in valid JSON format:\n\n"
        f"Project: {report.project_name}\n"
        f"Week: {report.week_number}\n"
        f"Health Trend: {report.health_previous_week.value} -> {report.health_current_week.value}\n"
        f"Current Week Update: {report.update_for_current_week}\n"
        f"Next Week Plan: {report.plan_for_next_week}\n"
        f"Issues/Challenges: {report.issues_challenges}\n"
        f"Path to Green: {report.path_to_green}\n"
        f"Resourcing: {report.resourcing_status}\n"
        f"Client Escalation: {report.client_escalation}\n"
        f"Tower: {report.tower}\n"
        f"Billing Model: {report.billing_model}\n"
        f"FTE: {report.fte}\n"
        f"Revenue: {report.revenue}\n\n"
        "Please respond with a valid JSON object containing:\n"
        "{\n"
        '  "overallHealth": "Red" | "Amber" | "Green",\n'
        '  "riskLevel": "Low" | "Medium" | "High" | "Critical",\n'
        '  "keyInsights": [3-5 bullet points],\n'
        '  "recommendations": [3-5 actionable recommendations],\n'
        '  "summary": "2-3 sentence executive summary",\n'
        '  "criticalIssues": [list of critical issues, if any],\n'
        '  "successFactors": [list of positive aspects, if any]\n'
        "}\n\n"
        "Consider the health trend, blockers, resource adequacy, client satisfaction, "
        "revenue impact, timeline risks and quality concerns."
    )


def build_portfolio_prompt(summaries: Sequence[ProjectSummary]) -> str:
    lines = [
        f"- {s.project_name}: health={s.overall_health.value}, risk={s.risk_level.value}; {s.summary}"
        for s in summaries
    ]
    return "Assess the overall portfolio from these project assessments:\n" + "\n".join(lines)


def extract_json_object(text: str) -> dict[str, Any]:
    """Parse the ``{...}`` span of an LLM answer that may be wrapped in prose."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        raise AIProviderError("No JSON found in AI response")
    try:
        parsed = json.loads(text[start : end + 1])
    except json.JSONDecodeError as e:
        raise AIProviderError(f"Invalid JSON in AI response: {e}") from e
    if not isinstance(parsed, dict):
        raise AIProviderError("AI response JSON is not an object")
    return parsed


def _enum_or_default(value: Any, enum_cls, default):
    if isinstance(value, str):
        wanted = value.strip().lower()
        for member in enum_cls:
            if member.value.lower() == wanted:
                return member
    return default


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    items = []
    for item in value:
        if item is None:
            continue
        text = item if isinstance(item, str) else json.dumps(item) if isinstance(item, dict) else str(item)
        if text.strip():
            items.append(text.strip())
    return items


def parse_ai_response(text: str, project_name: str) -> ProjectSummary:
    """Validate each field of the model's JSON, defaulting anything unusable."""
    parsed = extract_json_object(text)
    summary = parsed.get("summary")
    return ProjectSummary(
        project_name=project_name,
        overall_health=_enum_or_default(parsed.get("overallHealth"), HealthStatus, HealthStatus.AMBER),
        risk_level=_enum_or_default(parsed.get("riskLevel"), RiskLevel, RiskLevel.MEDIUM),
        key_insights=_string_list(parsed.get("keyInsights")),
        recommendations=_string_list(parsed.get("recommendations")),
        summary=summary.strip() if isinstance(summary, str) and summary.strip() else DEFAULT_SUMMARY,
        critical_issues=_string_list(parsed.get("criticalIssues")),
        success_factors=_string_list(parsed.get("successFactors")),
    )


# ---------------------------------------------------------------------------
# Fallbacks
# ---------------------------------------------------------------------------


def build_fallback_summary(report: NormalizedReport) -> ProjectSummary:
    health = report.health_current_week
    return ProjectSummary(
        project_name=report.project_name,
        overall_health=health,
        risk_level=_RISK_BY_HEALTH[health],
        key_insights=[
            f"Project health: {health.value}",
            f"Resource status: {report.resourcing_status or 'Not specified'}",
            f"Client escalation: {report.client_escalation}",
        ],
        recommendations=list(FALLBACK_RECOMMENDATIONS),
        summary=(
            f"{report.project_name} is currently {health.value} status with focus needed "
            "on addressing current challenges."
        ),
        critical_issues=[report.issues_challenges] if report.issues_challenges else [],
        success_factors=[],
    )


def build_fallback_narrative(summaries: Sequence[ProjectSummary]) -> PortfolioNarrative:
    healths = [s.overall_health for s in summaries]
    green = healths.count(HealthStatus.GREEN)
    amber = healths.count(HealthStatus.AMBER)
    red = healths.count(HealthStatus.RED)
    overall = derive_overall_health(healths)

    reds = [s.project_name for s in summaries if s.overall_health == HealthStatus.RED]
    if reds:
        advice = f"Recommend prioritising recovery plans for {', '.join(reds)}."
    elif amber:
        advice = "Recommend close monitoring of Amber projects and their paths to green."
    else:
        advice = "Recommend maintaining the current delivery cadence."

    reason = (
        f"Portfolio of {len(summaries)}: {green} projects are Green, {amber} projects are Amber "
        f"and {red} projects are Red. Overall status is {overall.value}. {advice}"
    )
    return PortfolioNarrative(overall_portfolio_rag_status=overall, reason=reason)


# ---------------------------------------------------------------------------
# Analyzer
# ---------------------------------------------------------------------------


class ProjectAnalyzer:
    """Produces project summaries and portfolio narratives; never raises."""

    def __init__(self, client: AIClient | None = None, timeout: float | None = None) -> None:
        self._client = client or AIClient()
        self._timeout = timeout or settings.AI_TIMEOUT_SECONDS

    async def _complete(self, system: str, user: str, config: ProviderConfig) -> str:
        return await asyncio.wait_for(
            self._client.complete(system, user, config), timeout=self._timeout
        )

    async def analyze(self, report: NormalizedReport, config: ProviderConfig) -> ProjectSummary:
        try:
            raw = await self._complete(PROJECT_SYSTEM_PROMPT, build_analysis_prompt(report), config)
            summary = parse_ai_response(raw, report.project_name)
            logger.info(
                "Analyzed '%s' via %s: health=%s risk=%s",
                report.project_name,
                config.provider.value,
                summary.overall_health.value,
                summary.risk_level.value,
            )
            return summary
        except asyncio.TimeoutError:
            logger.warning("AI analysis timed out for '%s', using fallback", report.project_name)
        except AIProviderError as e:
            logger.warning("AI analysis failed for '%s', using fallback: %s", report.project_name, e)
        except Exception:
            logger.exception("Unexpected AI analysis error for '%s', using fallback", report.project_name)
        return build_fallback_summary(report)

    async def analyze_portfolio(
        self, summaries: Sequence[ProjectSummary], config: ProviderConfig
    ) -> PortfolioNarrative:
        try:
            raw = await self._complete(PORTFOLIO_SYSTEM_PROMPT, build_portfolio_prompt(summaries), config)
            parsed = extract_json_object(raw)
            reason = parsed.get("reason")
            if not isinstance(reason, str) or not reason.strip():
                raise AIProviderError("AI portfolio response has no reason")
            fallback_status = derive_overall_health([s.overall_health for s in summaries])
            return PortfolioNarrative(
                overall_portfolio_rag_status=_enum_or_default(
                    parsed.get("overallPortfolioRagStatus"), HealthStatus, fallback_status
                ),
                reason=reason.strip(),
            )
        except asyncio.TimeoutError:
            logger.warning("AI portfolio analysis timed out, using fallback")
        except AIProviderError as e:
            logger.warning("AI portfolio analysis failed, using fallback: %s", e)
        except Exception:
            logger.exception("Unexpected AI portfolio analysis error, using fallback")
        return build_fallback_narrative(summaries)

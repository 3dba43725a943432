import asyncio
import json

import pytest

from statusboard.common.enums import HealthStatus, LlmProvider, RiskLevel
from statusboard.common.exceptions import AIProviderError
from statusboard.core.analysis.project_analyzer import (
    FALLBACK_RECOMMENDATIONS,
    ProjectAnalyzer,
    build_fallback_narrative,
    build_fallback_summary,
    extract_json_object,
    parse_ai_response,
)
from statusboard.core.analysis.schemas import DEFAULT_SUMMARY, ProjectSummary, ProviderConfig
from statusboard.core.ingestion.schemas import NormalizedReport
from statusboard.tests.helpers import ScriptedAIClient

CONFIG = ProviderConfig(provider=LlmProvider.OPENAI, model="gpt-4o", api_key="sk-test")


def _report(**overrides) -> NormalizedReport:
    values = {
        "project_name": "Alpha",
        "week_number": 12,
        "health_current_week": HealthStatus.RED,
        "issues_challenges": "Vendor API late",
        "resourcing_status": "Short by 2 FTE",
    }
    values.update(overrides)
    return NormalizedReport(**values)


class SlowAIClient:
    async def complete(self, system, user, config, temperature=None):
        await asyncio.sleep(5)
        return "{}"


def test_fallback_summary_follows_report():
    summary = build_fallback_summary(_report())

    assert summary.project_name == "Alpha"
    assert summary.overall_health == HealthStatus.RED
    assert summary.risk_level == RiskLevel.HIGH
    assert summary.key_insights == [
        "Project health: Red",
        "Resource status: Short by 2 FTE",
        "Client escalation: None",
    ]
    assert summary.recommendations == list(FALLBACK_RECOMMENDATIONS)
    assert summary.critical_issues == ["Vendor API late"]
    assert summary.success_factors == []
    assert "Alpha is currently Red status" in summary.summary


def test_fallback_risk_by_health():
    assert build_fallback_summary(_report(health_current_week=HealthStatus.AMBER)).risk_level == RiskLevel.MEDIUM
    green = build_fallback_summary(_report(health_current_week=HealthStatus.GREEN, issues_challenges=""))
    assert green.risk_level == RiskLevel.LOW
    assert green.critical_issues == []


def test_extract_json_object_from_prose():
    text = 'Sure! Here is the analysis:\n```json\n{"overallHealth": "Green"}\n```\nThanks.'
    assert extract_json_object(text) == {"overallHealth": "Green"}


@pytest.mark.parametrize("text", ["no json here", "{not valid json}", "[1, 2] }"])
def test_extract_json_object_rejects_garbage(text):
    with pytest.raises(AIProviderError):
        extract_json_object(text)


def test_parse_ai_response_defaults_invalid_fields():
    text = json.dumps(
        {
            "overallHealth": "Purple",
            "riskLevel": "critical",
            "keyInsights": "not a list",
            "recommendations": ["Add QA", "", None, 3],
            "summary": "   ",
        }
    )

    summary = parse_ai_response(text, "Alpha")

    assert summary.overall_health == HealthStatus.AMBER
    assert summary.risk_level == RiskLevel.CRITICAL
    assert summary.key_insights == []
    assert summary.recommendations == ["Add QA", "3"]
    assert summary.summary == DEFAULT_SUMMARY
    assert summary.critical_issues == []


async def test_analyze_uses_provider_answer():
    answer = {
        "overallHealth": "Green",
        "riskLevel": "Low",
        "keyInsights": ["On track"],
        "recommendations": ["Keep going"],
        "summary": "Healthy project.",
        "criticalIssues": [],
        "successFactors": ["Stable team"],
    }
    client = ScriptedAIClient(responses=["Analysis:\n" + json.dumps(answer)])
    analyzer = ProjectAnalyzer(client=client, timeout=1)

    summary = await analyzer.analyze(_report(), CONFIG)

    assert summary.overall_health == HealthStatus.GREEN
    assert summary.summary == "Healthy project."
    assert summary.success_factors == ["Stable team"]
    assert "Project: Alpha" in client.calls[0][1]


@pytest.mark.parametrize(
    "client",
    [
        ScriptedAIClient(error=AIProviderError("HTTP 500")),
        ScriptedAIClient(error=RuntimeError("boom")),
        ScriptedAIClient(responses=["I cannot help with that."]),
    ],
)
async def test_analyze_falls_back_on_any_failure(client):
    analyzer = ProjectAnalyzer(client=client, timeout=1)

    summary = await analyzer.analyze(_report(), CONFIG)

    assert summary == build_fallback_summary(_report())


async def test_analyze_falls_back_on_timeout():
    analyzer = ProjectAnalyzer(client=SlowAIClient(), timeout=0.05)

    summary = await analyzer.analyze(_report(), CONFIG)

    assert summary.overall_health == HealthStatus.RED
    assert summary.recommendations == list(FALLBACK_RECOMMENDATIONS)


async def test_analyze_portfolio_uses_provider_answer():
    client = ScriptedAIClient(
        responses=['{"overallPortfolioRagStatus": "amber", "reason": "3 projects are Amber. Recommend a review."}']
    )
    analyzer = ProjectAnalyzer(client=client, timeout=1)
    summaries = [ProjectSummary(project_name="A", overall_health=HealthStatus.GREEN)]

    narrative = await analyzer.analyze_portfolio(summaries, CONFIG)

    assert narrative.overall_portfolio_rag_status == HealthStatus.AMBER
    assert narrative.reason.startswith("3 projects are Amber")


async def test_analyze_portfolio_falls_back_without_reason():
    client = ScriptedAIClient(responses=['{"overallPortfolioRagStatus": "Green"}'])
    analyzer = ProjectAnalyzer(client=client, timeout=1)
    summaries = [
        ProjectSummary(project_name="A", overall_health=HealthStatus.RED),
        ProjectSummary(project_name="B", overall_health=HealthStatus.GREEN),
    ]

    narrative = await analyzer.analyze_portfolio(summaries, CONFIG)

    assert narrative == build_fallback_narrative(summaries)
    assert narrative.overall_portfolio_rag_status == HealthStatus.RED
    assert "Recommend prioritising recovery plans for A." in narrative.reason

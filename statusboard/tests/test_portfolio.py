import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from statusboard.common.enums import HealthStatus, RiskLevel
from statusboard.core.analysis.portfolio import (
    build_trend,
    compute_dashboard_stats,
    derive_overall_health,
    summarize_portfolio,
    tower_performance,
)
from statusboard.core.analysis.schemas import ProjectSummary

G, A, R = HealthStatus.GREEN, HealthStatus.AMBER, HealthStatus.RED
NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def _summary(name, health, risk=RiskLevel.MEDIUM, recommendations=(), summary="ok"):
    return ProjectSummary(
        project_name=name,
        overall_health=health,
        risk_level=risk,
        recommendations=list(recommendations),
        summary=summary,
    )


def _report(project_id, created_at, health="Green", escalation="None", reporting_date=None):
    return SimpleNamespace(
        project_id=project_id,
        created_at=created_at,
        reporting_date=reporting_date or created_at.date(),
        health_current_week=health,
        client_escalation=escalation,
    )


@pytest.mark.parametrize(
    "healths, expected",
    [
        ([], G),
        ([G, G, G], G),
        ([A, A, G], A),
        ([A, G], G),
        ([A, A, G, G], G),
        ([G, G, R], R),
        ([A, A, A, R], R),
        ([A, A, A, G, G], A),
        ([G, G, G, A, A], G),
    ],
)
def test_overall_health_rule(healths, expected):
    assert derive_overall_health(healths) == expected


def test_summarize_portfolio():
    summaries = [
        _summary("Alpha", R, RiskLevel.HIGH, ["Add QA", "Escalate"], "Alpha is late"),
        _summary("Beta", G, RiskLevel.CRITICAL, ["Add QA", "Hire"], "Beta has a key-person risk"),
        _summary("Gamma", A, RiskLevel.MEDIUM, ["Replan", "Demo", "Review"]),
    ]

    portfolio = summarize_portfolio(summaries)

    assert portfolio.overall_health == R
    assert portfolio.total_projects == 3
    assert portfolio.risk_distribution == {RiskLevel.HIGH: 1, RiskLevel.CRITICAL: 1, RiskLevel.MEDIUM: 1}
    assert sum(portfolio.risk_distribution.values()) == portfolio.total_projects
    assert portfolio.key_recommendations == ["Add QA", "Escalate", "Hire", "Replan", "Demo"]
    assert portfolio.critical_alerts == ["Alpha: Alpha is late", "Beta: Beta has a key-person risk"]


def test_summarize_empty_portfolio():
    portfolio = summarize_portfolio([])
    assert portfolio.overall_health == G
    assert portfolio.total_projects == 0
    assert portfolio.risk_distribution == {}
    assert portfolio.key_recommendations == []


def test_portfolio_wire_format():
    data = summarize_portfolio([_summary("Alpha", A, RiskLevel.LOW)]).model_dump(mode="json", by_alias=True)
    assert data["overallHealth"] == "Amber"
    assert data["riskDistribution"] == {"Low": 1}
    assert set(data) == {"overallHealth", "totalProjects", "riskDistribution", "keyRecommendations", "criticalAlerts"}


def test_trend_buckets_use_current_project_status():
    red_project, green_project, unknown = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()
    reports = [
        _report(red_project, NOW - timedelta(days=1), health="Green"),
        _report(red_project, NOW - timedelta(days=8)),
        _report(green_project, NOW - timedelta(days=2)),
        _report(green_project, NOW - timedelta(days=30)),
        _report(unknown, NOW - timedelta(days=1)),
    ]
    status = {red_project: "Red", green_project: G}

    trend = build_trend(reports, status, weeks=4, now=NOW)

    assert [p.label for p in trend] == ["W1", "W2", "W3", "W4"]
    assert trend[-1].period_end == NOW
    assert (trend[-1].red, trend[-1].green, trend[-1].total) == (1, 1, 2)
    assert (trend[-2].red, trend[-2].total) == (1, 1)
    # 30 days ago is outside a 4-week window
    assert sum(p.total for p in trend) == 3


def test_trend_buckets_follow_reporting_date_not_insert_time():
    project = uuid.uuid4()
    # Inserted just now, but reporting on a week almost three weeks back
    backdated = _report(project, NOW, reporting_date=(NOW - timedelta(days=20)).date())

    trend = build_trend([backdated], {project: G}, weeks=4, now=NOW)

    assert [p.green for p in trend] == [0, 1, 0, 0]


def test_trend_bucket_edges():
    project = uuid.uuid4()
    today = NOW.date()
    reports = [
        _report(project, NOW, reporting_date=today),
        # end of that day falls after the bucket boundary at noon
        _report(project, NOW, reporting_date=today - timedelta(days=7)),
        _report(project, NOW, reporting_date=today - timedelta(days=8)),
        _report(project, NOW, reporting_date=today + timedelta(days=1)),
    ]

    trend = build_trend(reports, {project: A}, weeks=2, now=NOW)

    assert trend[1].amber == 2
    assert trend[0].amber == 1
    assert sum(p.total for p in trend) == 3


def test_trend_requires_positive_window():
    with pytest.raises(ValueError):
        build_trend([], {}, weeks=0)


def test_dashboard_stats_use_latest_report_per_project():
    alpha, beta, gamma = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()
    reports = [
        _report(alpha, NOW - timedelta(days=7), health="Red", escalation="Client unhappy"),
        _report(alpha, NOW - timedelta(days=1), health="Green"),
        _report(beta, NOW - timedelta(days=1), health="Amber", escalation="Late invoices"),
        _report(gamma, NOW - timedelta(days=2), health="Red", escalation="none"),
    ]

    stats = compute_dashboard_stats(reports)

    assert (stats.green_projects, stats.amber_projects, stats.red_projects) == (1, 1, 1)
    assert stats.escalations == 1
    assert stats.total_projects == 3


def test_tower_performance():
    p1, p2, p3, p4 = (SimpleNamespace(id=uuid.uuid4(), tower=t) for t in ["Data", "Data", "Digital", None])
    reports = [
        _report(p1.id, NOW, health="Green"),
        _report(p2.id, NOW, health="Red"),
        _report(p4.id, NOW, health="Red"),
    ]

    towers = {t.name: t for t in tower_performance([p1, p2, p3, p4], reports)}

    assert set(towers) == {"Data", "Digital"}
    data = towers["Data"]
    assert (data.green, data.red, data.total_projects) == (1, 1, 2)
    assert data.green_percentage == 50.0
    assert data.red_percentage == 50.0
    digital = towers["Digital"]
    assert digital.total_projects == 1
    assert digital.green_percentage == 0.0

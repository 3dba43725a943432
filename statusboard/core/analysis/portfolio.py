"""Portfolio roll-ups over project summaries and stored weekly reports.

``summarize_portfolio`` folds per-project AI summaries into one
``PortfolioSummary``.  The remaining helpers work on stored report rows
(anything exposing ``project_id``, ``created_at`` and, where needed,
``reporting_date``, ``health_current_week`` or ``client_escalation``) and
feed the dashboard.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Hashable, Iterable, Mapping, Sequence
from datetime import date, datetime, time, timedelta, timezone
from typing import Any

from statusboard.common.enums import HealthStatus, RiskLevel
from statusboard.core.analysis.schemas import (
    DashboardStats,
    PortfolioSummary,
    ProjectSummary,
    TowerPerformance,
    TrendPoint,
)
from statusboard.core.ingestion.health import normalize_health
from statusboard.core.ingestion.schemas import has_escalation

MAX_KEY_RECOMMENDATIONS = 5
BUCKET_DAYS = 7


def _as_health(value: Any) -> HealthStatus:
    if isinstance(value, HealthStatus):
        return value
    return normalize_health(value)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _end_of_day(day: date) -> datetime:
    return datetime.combine(day, time.max, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Project summaries -> portfolio summary
# ---------------------------------------------------------------------------


def derive_overall_health(healths: Sequence[HealthStatus]) -> HealthStatus:
    """Any Red makes the portfolio Red; a strict Amber majority makes it Amber.

    This is a headcount rule, not a weighted score.
    """
    if any(h == HealthStatus.RED for h in healths):
        return HealthStatus.RED
    amber = sum(1 for h in healths if h == HealthStatus.AMBER)
    if amber > len(healths) / 2:
        return HealthStatus.AMBER
    return HealthStatus.GREEN


def summarize_portfolio(summaries: Sequence[ProjectSummary]) -> PortfolioSummary:
    risk_distribution: dict[RiskLevel, int] = dict(Counter(s.risk_level for s in summaries))

    critical_alerts = [
        f"{s.project_name}: {s.summary}"
        for s in summaries
        if s.overall_health == HealthStatus.RED or s.risk_level == RiskLevel.CRITICAL
    ]

    key_recommendations: list[str] = []
    for summary in summaries:
        for recommendation in summary.recommendations:
            if recommendation not in key_recommendations:
                key_recommendations.append(recommendation)
    key_recommendations = key_recommendations[:MAX_KEY_RECOMMENDATIONS]

    return PortfolioSummary(
        overall_health=derive_overall_health([s.overall_health for s in summaries]),
        total_projects=len(summaries),
        risk_distribution=risk_distribution,
        key_recommendations=key_recommendations,
        critical_alerts=critical_alerts,
    )


# ---------------------------------------------------------------------------
# Stored reports -> trend / stats / towers
# ---------------------------------------------------------------------------


def build_trend(
    reports: Iterable[Any],
    project_status: Mapping[Hashable, Any],
    weeks: int = 8,
    now: datetime | None = None,
) -> list[TrendPoint]:
    """RAG counts for the last *weeks* 7-day buckets, oldest first.

    A report is dated at the end of its ``reporting_date`` (UTC) and counted
    in the bucket holding that moment under the owning project's *current*
    status from *project_status*, not the status the report itself recorded.
    Historical bars therefore move whenever a project changes colour.
    Reports of unknown projects or dated after *now* are skipped.
    """
    if weeks < 1:
        raise ValueError("weeks must be at least 1")

    end = _as_utc(now or datetime.now(timezone.utc))
    span = timedelta(days=BUCKET_DAYS)
    bounds = [(end - span * (i + 1), end - span * i) for i in reversed(range(weeks))]
    counts = [Counter() for _ in bounds]

    for report in reports:
        status = project_status.get(report.project_id)
        if status is None or report.reporting_date is None:
            continue
        if report.reporting_date > end.date():
            continue
        # today's reports belong to the current bucket
        stamp = min(_end_of_day(report.reporting_date), end)
        for index, (start, stop) in enumerate(bounds):
            if start < stamp <= stop:
                counts[index][_as_health(status)] += 1
                break

    return [
        TrendPoint(
            label=f"W{index + 1}",
            period_start=start,
            period_end=stop,
            green=bucket[HealthStatus.GREEN],
            amber=bucket[HealthStatus.AMBER],
            red=bucket[HealthStatus.RED],
        )
        for index, ((start, stop), bucket) in enumerate(zip(bounds, counts))
    ]


def latest_reports_by_project(reports: Iterable[Any]) -> dict[Hashable, Any]:
    latest: dict[Hashable, Any] = {}
    for report in reports:
        current = latest.get(report.project_id)
        if current is None or _as_utc(report.created_at) > _as_utc(current.created_at):
            latest[report.project_id] = report
    return latest


def compute_dashboard_stats(reports: Iterable[Any]) -> DashboardStats:
    latest = list(latest_reports_by_project(reports).values())
    healths = Counter(_as_health(r.health_current_week) for r in latest)
    return DashboardStats(
        green_projects=healths[HealthStatus.GREEN],
        amber_projects=healths[HealthStatus.AMBER],
        red_projects=healths[HealthStatus.RED],
        escalations=sum(1 for r in latest if has_escalation(r.client_escalation)),
        total_projects=len(latest),
    )


def tower_performance(projects: Iterable[Any], reports: Iterable[Any]) -> list[TowerPerformance]:
    """Per-tower counts of each project's latest reported health."""
    latest = latest_reports_by_project(reports)
    towers: dict[str, dict[str, int]] = {}

    for project in projects:
        if not project.tower:
            continue
        entry = towers.setdefault(project.tower, {"total": 0, "green": 0, "amber": 0, "red": 0})
        entry["total"] += 1
        report = latest.get(project.id)
        if report is None:
            continue
        entry[_as_health(report.health_current_week).value.lower()] += 1

    results = []
    for name, entry in towers.items():
        reported = entry["green"] + entry["amber"] + entry["red"] or 1
        results.append(
            TowerPerformance(
                name=name,
                green=entry["green"],
                amber=entry["amber"],
                red=entry["red"],
                total_projects=entry["total"],
                green_percentage=round(entry["green"] / reported * 100, 1),
                amber_percentage=round(entry["amber"] / reported * 100, 1),
                red_percentage=round(entry["red"] / reported * 100, 1),
            )
        )
    return results

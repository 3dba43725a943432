"""
Seed script for StatusBoard.

Populates the database with a demo portfolio: projects across several
towers, eight weeks of status reports for each, and an LLM configuration
that uses the mock key (so every assessment comes from the fallback).

Usage:
    python -m statusboard.scripts.seed
"""

import asyncio
import uuid
from datetime import datetime, timedelta, timezone

from sqlalchemy import select

from statusboard.common.enums import HealthStatus, LlmProvider, ProjectImportance
from statusboard.common.logging import get_logger, setup_logging
from statusboard.core.analysis.project_analyzer import build_fallback_summary
from statusboard.core.ingestion.repository import report_to_normalized
from statusboard.db.models import LlmConfiguration, Project, WeeklyStatusReport
from statusboard.db.session import async_session_factory

logger = get_logger("scripts.seed")

WEEKS = 8

# name, tower, importance, weekly health from oldest to newest
DEMO_PORTFOLIO = [
    ("Acme Billing Revamp", "Finance", ProjectImportance.STRATEGIC, "GGGGGAAG"),
    ("Acme Data Lake", "Data", ProjectImportance.CRITICAL, "GGAAARRA"),
    ("Globex Mobile App", "Digital", ProjectImportance.STANDARD, "GGGGGGGG"),
    ("Globex CRM Migration", "Digital", ProjectImportance.MEDIUM, "AAAAGGGG"),
    ("Initech Payroll", "Finance", ProjectImportance.CRITICAL, "GGGAARRR"),
    ("Umbrella Analytics", "Data", ProjectImportance.STANDARD, "GGGGGGAG"),
]

_HEALTH = {"G": HealthStatus.GREEN, "A": HealthStatus.AMBER, "R": HealthStatus.RED}

_ISSUES = {
    HealthStatus.GREEN: "",
    HealthStatus.AMBER: "Two key developers on leave; integration testing is behind plan",
    HealthStatus.RED: "Vendor API delivery slipped three weeks; go-live date at risk",
}


async def main() -> None:
    setup_logging()
    async with async_session_factory() as session:
        # ------------------------------------------------------------------
        # Guard: skip if already seeded
        # ------------------------------------------------------------------
        result = await session.execute(
            select(Project).where(Project.name == DEMO_PORTFOLIO[0][0])
        )
        if result.scalar_one_or_none() is not None:
            logger.info("Database already seeded -- skipping.")
            return

        session.add(
            LlmConfiguration(
                provider_name=LlmProvider.OPENAI.value,
                model_name="gpt-4o",
                api_key="mock_ai_key",
                is_active=True,
                last_updated_by="seed",
            )
        )

        now = datetime.now(timezone.utc)
        today = now.date()

        for name, tower, importance, history in DEMO_PORTFOLIO:
            healths = [_HEALTH[c] for c in history]
            account = name.split(" ")[0]
            project = Project(
                id=uuid.uuid4(),
                name=name,
                code_id=f"DEMO-{uuid.uuid4().hex[:6].upper()}",
                account=account,
                customer=account,
                project_importance=importance.value,
                rag_status=healths[-1].value,
                scope_description=f"Demo project for the {tower} tower",
                tower=tower,
                team_squad=tower,
                fte="8",
                revenue="250000",
                start_date=now - timedelta(weeks=WEEKS + 4),
                planned_end_date=now + timedelta(weeks=20),
                client_escalation=healths[-1] is HealthStatus.RED,
                project_tags=["demo"],
            )
            session.add(project)

            for week in range(WEEKS):
                health = healths[week]
                previous = healths[week - 1] if week else health
                weeks_ago = WEEKS - 1 - week
                report = WeeklyStatusReport(
                    project_id=project.id,
                    reporting_date=today - timedelta(weeks=weeks_ago),
                    week_number=week + 1,
                    publish_status=True,
                    health_previous_week=previous.value,
                    health_current_week=health.value,
                    client_escalation=(
                        "Client raised delivery concerns" if health is HealthStatus.RED else "None"
                    ),
                    update_for_current_week=f"Sprint {week + 1} completed",
                    plan_for_next_week=f"Start sprint {week + 2}",
                    issues_challenges=_ISSUES[health],
                    path_to_green="Add two engineers from the bench" if health is not HealthStatus.GREEN else "",
                    resourcing_status="Fully staffed" if health is HealthStatus.GREEN else "Short by 2 FTE",
                    current_sdlc_phase="Development",
                    tower=tower,
                    billing_model="T&M",
                    fte="8",
                    revenue="250000",
                    submitted_by="seed",
                    created_at=now - timedelta(weeks=weeks_ago, hours=1),
                )
                summary = build_fallback_summary(report_to_normalized(project, report))
                report.ai_status = summary.overall_health.value
                report.ai_assessment_description = summary.summary
                report.ai_summary = summary.model_dump(mode="json", by_alias=True)
                session.add(report)

        await session.commit()
        logger.info(
            "Seeded %d projects with %d weeks of reports each", len(DEMO_PORTFOLIO), WEEKS
        )


if __name__ == "__main__":
    asyncio.run(main())

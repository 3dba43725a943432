import json

import pytest

from statusboard.common.enums import HealthStatus, LlmProvider
from statusboard.common.exceptions import NotFoundError
from statusboard.core.analysis.project_analyzer import ProjectAnalyzer
from statusboard.core.analysis.schemas import ProviderConfig
from statusboard.core.ingestion.repository import SqlReportRepository
from statusboard.core.ingestion.schemas import NormalizedReport
from statusboard.core.ingestion.service import IngestionService
from statusboard.tests.helpers import ScriptedAIClient, report_row, write_workbook

CONFIG = ProviderConfig(provider=LlmProvider.OPENAI, model="gpt-4o", api_key="sk-test")


def _answer(health: str, summary: str) -> str:
    return json.dumps({"overallHealth": health, "riskLevel": "Low", "summary": summary})


async def test_process_directory(db_session, tmp_path):
    write_workbook(tmp_path / "week12.xlsx", [report_row("Alpha", current="Amber"), report_row("Beta")])
    client = ScriptedAIClient(responses=[_answer("Amber", "Alpha is recovering."), "not json"])
    service = IngestionService(SqlReportRepository(db_session), ProjectAnalyzer(client=client, timeout=1))

    result = await service.process_directory(tmp_path, CONFIG)

    assert result.projects_processed == 2
    assert result.message == "Excel files processed successfully"
    alpha, beta = result.project_summaries
    assert alpha.summary == "Alpha is recovering."
    # Beta's answer was unusable, so it got the fallback
    assert beta.overall_health == HealthStatus.GREEN
    assert beta.summary.startswith("Beta is currently Green")
    assert result.portfolio_summary.overall_health == HealthStatus.GREEN

    projects = await service.repository.list_projects()
    assert [p.name for p in projects] == ["Alpha", "Beta"]
    reports = await service.repository.list_reports()
    assert [r.ai_assessment_description for r in reports] == ["Alpha is recovering.", beta.summary]


async def test_process_empty_directory(db_session, tmp_path, analyzer):
    service = IngestionService(SqlReportRepository(db_session), analyzer)

    with pytest.raises(NotFoundError):
        await service.process_directory(tmp_path, CONFIG)


async def test_analyze_project_without_reports(db_session, analyzer):
    repository = SqlReportRepository(db_session)
    service = IngestionService(repository, analyzer)
    project = await repository.create_project(NormalizedReport(project_name="Lonely", week_number=1))

    with pytest.raises(LookupError):
        await service.analyze_project(project.id, CONFIG)

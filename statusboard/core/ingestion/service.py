"""Bulk spreadsheet ingestion: parse, assess, persist, roll up."""

from __future__ import annotations

import asyncio
import uuid
from collections.abc import Sequence
from pathlib import Path

from statusboard.common.exceptions import NotFoundError
from statusboard.common.logging import get_logger
from statusboard.core.analysis.portfolio import summarize_portfolio
from statusboard.core.analysis.project_analyzer import ProjectAnalyzer
from statusboard.core.analysis.schemas import ExcelProcessResult, ProjectSummary, ProviderConfig
from statusboard.core.ingestion.excel_parser import find_excel_files, ingest_files
from statusboard.core.ingestion.repository import ReportRepository, report_to_normalized
from statusboard.db.models.project import Project
from statusboard.db.models.weekly_report import WeeklyStatusReport

logger = get_logger("ingestion.service")


class IngestionService:
    def __init__(self, repository: ReportRepository, analyzer: ProjectAnalyzer) -> None:
        self.repository = repository
        self.analyzer = analyzer

    async def process_files(
        self, paths: Sequence[str | Path], config: ProviderConfig
    ) -> ExcelProcessResult:
        """Ingest *paths* in order and return the dashboard payload.

        Unreadable files are reported in ``failed_files``; every parsed
        report gets a summary, from the provider or from the fallback.
        """
        batch = await asyncio.to_thread(ingest_files, list(paths))

        summaries: list[ProjectSummary] = []
        for report in batch.reports:
            summary = await self.analyzer.analyze(report, config)
            project = await self.repository.find_project_by_name(report.project_name)
            if project is None:
                project = await self.repository.create_project(report)
            await self.repository.upsert_report_for_week(project, report, summary)
            summaries.append(summary)

        message = "Excel files processed successfully"
        if batch.failures:
            message = f"Excel files processed with {len(batch.failures)} failed file(s)"

        logger.info(
            "Processed %d project report(s) from %d file(s); %d file(s) failed",
            len(summaries),
            batch.files_processed,
            len(batch.failures),
        )
        return ExcelProcessResult(
            message=message,
            projects_processed=len(summaries),
            portfolio_summary=summarize_portfolio(summaries),
            project_summaries=summaries,
            raw_data=batch.reports,
            failed_files=batch.failures,
        )

    async def process_directory(
        self, directory: str | Path, config: ProviderConfig
    ) -> ExcelProcessResult:
        files = find_excel_files(directory)
        if not files:
            raise NotFoundError("Excel files", str(directory))
        logger.info("Found %d spreadsheet(s) in %s", len(files), directory)
        return await self.process_files(files, config)

    async def analyze_project(
        self, project_id: uuid.UUID, config: ProviderConfig
    ) -> tuple[Project, WeeklyStatusReport, ProjectSummary]:
        """Re-run the assessment for a project's most recent report."""
        project = await self.repository.get_project(project_id)
        if project is None:
            raise LookupError(f"Project {project_id} not found")

        reports = await self.repository.list_reports(project_id)
        if not reports:
            raise LookupError(f"No reports found for project {project_id}")
        latest = reports[-1]

        summary = await self.analyzer.analyze(report_to_normalized(project, latest), config)
        await self.repository.save_summary(latest, summary)
        logger.info("Re-analyzed project %s (report %s)", project.name, latest.id)
        return project, latest, summary

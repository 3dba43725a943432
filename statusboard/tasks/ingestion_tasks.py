import asyncio

from statusboard.common.logging import get_logger
from statusboard.tasks.celery_app import app

logger = get_logger("tasks.ingestion")


def _run_async(coro):
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@app.task(name="statusboard.tasks.ingestion_tasks.ingest_excel_directory")
def ingest_excel_directory(directory: str | None = None):
    """Celery Beat task: ingest the weekly spreadsheets dropped in the import folder."""

    async def _ingest():
        from statusboard.common.exceptions import NotFoundError
        from statusboard.config import settings
        from statusboard.core.analysis.project_analyzer import ProjectAnalyzer
        from statusboard.core.analysis.service import get_active_llm_config, provider_config_from
        from statusboard.core.ingestion.repository import SqlReportRepository
        from statusboard.core.ingestion.service import IngestionService
        from statusboard.db.session import async_session_factory

        source = directory or settings.EXCEL_DIR
        async with async_session_factory() as db:
            try:
                provider = provider_config_from(await get_active_llm_config(db))
                service = IngestionService(SqlReportRepository(db), ProjectAnalyzer())
                result = await service.process_directory(source, provider)
                await db.commit()
            except NotFoundError:
                logger.info("No spreadsheets found in %s", source)
                return {"projectsProcessed": 0, "failedFiles": 0}
            except Exception as e:
                await db.rollback()
                logger.error("Spreadsheet ingestion failed for %s: %s", source, e)
                raise

        logger.info(
            "Ingested %d project report(s) from %s (%d failed file(s))",
            result.projects_processed,
            source,
            len(result.failed_files),
        )
        return {"projectsProcessed": result.projects_processed, "failedFiles": len(result.failed_files)}

    return _run_async(_ingest())


@app.task(name="statusboard.tasks.ingestion_tasks.analyze_project")
def analyze_project(project_id: str):
    logger.info("Re-analyzing project %s", project_id)

    async def _analyze():
        import uuid

        from statusboard.core.analysis.project_analyzer import ProjectAnalyzer
        from statusboard.core.analysis.service import get_active_llm_config, provider_config_from
        from statusboard.core.ingestion.repository import SqlReportRepository
        from statusboard.core.ingestion.service import IngestionService
        from statusboard.db.session import async_session_factory

        async with async_session_factory() as db:
            try:
                provider = provider_config_from(await get_active_llm_config(db))
                service = IngestionService(SqlReportRepository(db), ProjectAnalyzer())
                _, report, summary = await service.analyze_project(uuid.UUID(project_id), provider)
                await db.commit()
                logger.info("Project %s assessed as %s", project_id, summary.overall_health.value)
                return str(report.id)
            except Exception as e:
                await db.rollback()
                logger.error("Re-analysis failed for project %s: %s", project_id, e)
                raise

    return _run_async(_analyze())

from celery import Celery
from celery.schedules import crontab

from statusboard.config import settings

app = Celery(
    "statusboard",
    broker=settings.REDIS_URL,
    backend=settings.REDIS_URL,
)

app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_acks_late=True,
    worker_prefetch_multiplier=1,
    task_routes={
        "statusboard.tasks.ingestion_tasks.*": {"queue": "ingestion"},
    },
    beat_schedule={
        "ingest-weekly-status-reports": {
            "task": "statusboard.tasks.ingestion_tasks.ingest_excel_directory",
            "schedule": crontab(day_of_week="mon", hour=6, minute=30),
        },
    },
)

app.autodiscover_tasks(["statusboard.tasks.ingestion_tasks"])

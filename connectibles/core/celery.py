# connectibles/core/celery.py
from celery import Celery
from celery.schedules import crontab

from connectibles.core.config import settings

celery_app = Celery(
    "connectibles_tasks",
    broker=settings.RABBITMQ_URL,
    backend=settings.REDIS_URL,
    include=[
        "connectibles.tasks.cleanup",
    ],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    broker_connection_retry_on_startup=True,
    task_track_started=True,
)

celery_app.conf.beat_schedule = {
    "delete-old-spills": {
        "task": "connectibles.tasks.cleanup.delete_old_spills_task",
        "schedule": crontab(minute=0),
    },
}


async def check_connection() -> bool:
    try:
        with celery_app.connection_for_write() as conn:
            conn.ensure_connection(max_retries=1)
            return True
    except Exception:
        return False

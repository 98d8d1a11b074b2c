from asgiref.sync import async_to_sync

from connectibles.core.celery import celery_app
from connectibles.core.config import settings
from connectibles.domains.feed.service import delete_old_spills


@celery_app.task
def delete_old_spills_task(hours: int = settings.SPILL_TTL_HOURS):
    return async_to_sync(delete_old_spills)(hours)

from celery import Celery
from celery.signals import setup_logging as celery_setup_logging

from app.core.config import settings

celery_app = Celery(
    "launchzone",
    broker=settings.REDIS_URL,
    backend=settings.REDIS_URL,
    include=["app.tasks.logo_tasks"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    # A job is never re-run: a lost worker leaves the row for the stale sweep
    task_acks_late=False,
    worker_prefetch_multiplier=1,
)

celery_app.conf.beat_schedule = {
    "sweep-stale-jobs": {
        "task": "sweep_stale_jobs",
        "schedule": float(settings.STALE_JOB_SWEEP_INTERVAL),
    },
}


@celery_setup_logging.connect
def configure_worker_logging(**kwargs):
    from app.core.logging import setup_logging

    setup_logging()

import asyncio
import logging

from app.core.celery_app import celery_app
from app.db.session import SessionLocal
from app.services.job_service import JobService
from app.services.logo_generation import LogoGenerationRunner

logger = logging.getLogger(__name__)


@celery_app.task(name="generate_logos")
def generate_logos(job_id: str):
    """Run a logo generation job to a terminal state. Not retried."""
    logger.info(f"Starting logo generation job {job_id}")
    status = asyncio.run(LogoGenerationRunner().run(job_id))
    return {"jobId": job_id, "status": status}


@celery_app.task(name="sweep_stale_jobs")
def sweep_stale_jobs():
    """Fail jobs orphaned in pending/processing by a crashed worker"""
    db = SessionLocal()
    try:
        count = JobService.fail_stale_jobs(db)
    finally:
        db.close()
    return {"failed": count}

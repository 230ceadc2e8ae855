from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
import logging

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import JobNotFoundError
from app.models import BackgroundJob, JobStatus

logger = logging.getLogger(__name__)

STALE_JOB_MESSAGE = "Job was interrupted before completion"

_UPDATABLE_FIELDS = {"status", "error_message", "task_id", "started_at", "completed_at"}


class JobService:
    """Persistence for background job rows. Every update is committed immediately."""

    @staticmethod
    def create_job(db: Session, user_id: str, job_type: str, input_data: Dict[str, Any]) -> BackgroundJob:
        job = BackgroundJob(
            user_id=user_id,
            job_type=job_type,
            status=JobStatus.PENDING.value,
            input_data=input_data,
            output_data={"progress": 0},
        )
        db.add(job)
        db.commit()
        db.refresh(job)
        logger.info(f"Created {job_type} job {job.id} for user {user_id}")
        return job

    @staticmethod
    def update_job(db: Session, job_id: str, output_data: Optional[Dict[str, Any]] = None, **fields) -> BackgroundJob:
        """
        Apply a partial update to a job row.

        ``output_data`` is merged key-wise into the stored dict so progress
        writes never drop result keys. Other keyword arguments must name
        job columns (status, error_message, task_id, started_at, completed_at).
        """
        unknown = set(fields) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update job fields: {sorted(unknown)}")

        job = db.get(BackgroundJob, job_id)
        if job is None:
            raise JobNotFoundError()

        for key, value in fields.items():
            if isinstance(value, JobStatus):
                value = value.value
            setattr(job, key, value)

        if output_data:
            # Reassign so SQLAlchemy sees the JSON column change
            job.output_data = {**(job.output_data or {}), **output_data}

        db.commit()
        db.refresh(job)
        return job

    @staticmethod
    def finish_job(
        db: Session,
        job_id: str,
        status: JobStatus,
        error_message: Optional[str] = None,
        output_data: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """
        Move a job to a terminal state unless it already reached one.

        The write is a single conditional UPDATE, so a job failed by the stale
        sweep is never flipped to completed afterwards. Returns False when the
        row was already terminal and nothing was written.
        """
        job = db.get(BackgroundJob, job_id)
        if job is None:
            raise JobNotFoundError()

        values: Dict[str, Any] = {
            "status": status.value,
            "error_message": error_message,
            "completed_at": datetime.now(timezone.utc),
        }
        if output_data:
            values["output_data"] = {**(job.output_data or {}), **output_data}

        updated = (
            db.query(BackgroundJob)
            .filter(
                BackgroundJob.id == job_id,
                BackgroundJob.status.notin_(list(JobStatus.terminal())),
            )
            .update(values, synchronize_session=False)
        )
        db.commit()
        db.expire(job)

        if not updated:
            logger.warning(f"Job {job_id} already terminal, not marking it {status.value}")
        return bool(updated)

    @staticmethod
    def get_job(db: Session, job_id: str, user_id: str, job_type: Optional[str] = None) -> BackgroundJob:
        """Fetch a job owned by ``user_id``. Someone else's job is reported as missing."""
        query = db.query(BackgroundJob).filter(
            BackgroundJob.id == job_id,
            BackgroundJob.user_id == user_id,
        )
        if job_type:
            query = query.filter(BackgroundJob.job_type == job_type)
        job = query.first()
        if job is None:
            raise JobNotFoundError()
        return job

    @staticmethod
    def list_jobs(
        db: Session,
        user_id: str,
        job_type: str,
        status: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[BackgroundJob]:
        query = db.query(BackgroundJob).filter(
            BackgroundJob.user_id == user_id,
            BackgroundJob.job_type == job_type,
        )
        if status:
            query = query.filter(BackgroundJob.status == status)
        return (
            query.order_by(BackgroundJob.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    @staticmethod
    def fail_stale_jobs(db: Session, max_age: Optional[timedelta] = None) -> int:
        """
        Mark jobs stuck in pending/processing for longer than ``max_age`` as failed.

        Repairs rows orphaned by a crashed worker or process restart. Returns
        the number of jobs updated.
        """
        max_age = max_age or timedelta(minutes=settings.STALE_JOB_TIMEOUT_MINUTES)
        now = datetime.now(timezone.utc)
        cutoff = now - max_age

        stale = (
            db.query(BackgroundJob)
            .filter(
                BackgroundJob.status.in_([JobStatus.PENDING.value, JobStatus.PROCESSING.value]),
                or_(
                    BackgroundJob.started_at < cutoff,
                    (BackgroundJob.started_at.is_(None)) & (BackgroundJob.created_at < cutoff),
                ),
            )
            .all()
        )

        for job in stale:
            job.status = JobStatus.FAILED.value
            job.error_message = STALE_JOB_MESSAGE
            job.completed_at = now
            job.updated_at = func.now()

        if stale:
            db.commit()
            logger.warning(f"Marked {len(stale)} stale jobs as failed")
        return len(stale)

from datetime import datetime, timezone
from typing import Optional
from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request
from sqlalchemy.orm import Session
import logging

from app.api.deps import get_current_user, get_db, get_logo_runner, get_storage
from app.core.config import settings
from app.core.exceptions import QueueUnavailableError, ValidationError
from app.core.rate_limiting import RATE_LIMITS, limiter
from app.models import BackgroundJob, JobStatus as JobState, JobType, User
from app.schemas import (
    Asset, AssetResponse, AssetsResponse, JobsResponse, JobStatus, JobSummary,
    LogoGenerateRequest, LogoGenerateResponse, LogoJobResponse, MessageResponse, Pagination,
)
from app.services.asset_service import AssetService
from app.services.brand_service import BrandProfileService
from app.services.job_service import JobService
from app.services.logo_generation import LogoGenerationRunner
from app.services.storage import BlobStorage
from app.tasks.logo_tasks import generate_logos

logger = logging.getLogger(__name__)

router = APIRouter()


def dispatch_logo_job(
    db: Session,
    job: BackgroundJob,
    background_tasks: BackgroundTasks,
    runner: LogoGenerationRunner,
) -> None:
    """Hand a committed job to the worker queue, or to a background task in inline mode"""
    if settings.JOB_EXECUTION_MODE == "inline":
        background_tasks.add_task(runner.run, job.id)
        return

    try:
        result = generate_logos.delay(job.id)
    except Exception as e:
        logger.error(f"Could not enqueue logo generation job {job.id}: {e}")
        JobService.update_job(
            db,
            job.id,
            status=JobState.FAILED,
            error_message="Background worker is unavailable",
            completed_at=datetime.now(timezone.utc),
        )
        raise QueueUnavailableError("Failed to start logo generation")

    JobService.update_job(db, job.id, task_id=result.id)


@router.post("/generate", response_model=LogoGenerateResponse)
@limiter.limit(RATE_LIMITS["logo_generation"])
def generate_logo(
    request: Request,
    payload: LogoGenerateRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    runner: LogoGenerationRunner = Depends(get_logo_runner),
):
    """
    Start an asynchronous logo generation job. Poll /logos/jobs/{jobId} for progress.
    """
    concept = (payload.concept or "").strip()
    if len(concept) < 3:
        raise ValidationError("Logo concept is required and must be at least 3 characters")
    if not 1 <= payload.iterations <= settings.MAX_LOGO_ITERATIONS:
        raise ValidationError(f"Iterations must be between 1 and {settings.MAX_LOGO_ITERATIONS}")

    brand_context = BrandProfileService.resolve_context(db, payload.brandProfileId, current_user.id)

    job = JobService.create_job(
        db,
        user_id=current_user.id,
        job_type=JobType.LOGO_GENERATION.value,
        input_data={
            "brandProfileId": payload.brandProfileId if brand_context else None,
            "style": payload.style,
            "concept": concept,
            "colors": payload.colors,
            "includeText": payload.includeText,
            "iterations": payload.iterations,
            "brandContext": brand_context,
        },
    )

    dispatch_logo_job(db, job, background_tasks, runner)

    return LogoGenerateResponse(
        jobId=job.id,
        status="processing",
        message="Logo generation started. This may take 1-2 minutes.",
    )


@router.get("/jobs", response_model=JobsResponse)
def list_logo_jobs(
    status: Optional[str] = None,
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    jobs = JobService.list_jobs(
        db,
        user_id=current_user.id,
        job_type=JobType.LOGO_GENERATION.value,
        status=status,
        limit=limit,
        offset=offset,
    )
    return JobsResponse(jobs=[JobSummary.from_model(job) for job in jobs])


@router.get("/jobs/{job_id}", response_model=LogoJobResponse)
def get_logo_job(
    job_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Job status with its assets once completed. Other users' jobs are 404."""
    job = JobService.get_job(db, job_id, current_user.id, job_type=JobType.LOGO_GENERATION.value)

    assets = []
    if job.status == JobState.COMPLETED.value:
        assets = AssetService.get_assets_by_ids(db, current_user.id, job.asset_ids)

    return LogoJobResponse(
        job=JobStatus.from_model(job),
        assets=[Asset.from_model(asset) for asset in assets],
    )


@router.get("/assets", response_model=AssetsResponse)
def list_assets(
    brandProfileId: Optional[str] = None,
    assetType: str = "logo",
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    assets = AssetService.get_assets(
        db,
        user_id=current_user.id,
        asset_type=assetType,
        brand_profile_id=brandProfileId,
        limit=limit,
        offset=offset,
    )
    return AssetsResponse(
        assets=[Asset.from_model(asset) for asset in assets],
        pagination=Pagination(limit=limit, offset=offset, hasMore=len(assets) == limit),
    )


@router.patch("/assets/{asset_id}/primary", response_model=AssetResponse)
def set_primary_asset(
    asset_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    asset = AssetService.set_primary(db, asset_id, current_user.id)
    return AssetResponse(asset=Asset.from_model(asset))


@router.delete("/assets/{asset_id}", response_model=MessageResponse)
def delete_asset(
    asset_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    storage: BlobStorage = Depends(get_storage),
):
    AssetService.delete_asset(db, storage, asset_id, current_user.id)
    return MessageResponse(message="Asset deleted successfully")

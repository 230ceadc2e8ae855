"""
Logo generation job runner.

Drives one ``logo_generation`` job through
``pending -> processing -> completed | failed``. Each iteration is
independent: an iteration that raises or returns no image is skipped and the
loop moves on. The job completes when at least one asset was stored.
"""

import asyncio
import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional
import logging

from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.session import SessionLocal
from app.models import BackgroundJob, JobStatus
from app.services.ai.base import AIServiceError, BaseAIService
from app.services.ai.image_generation import GeneratedImage, StabilityImageClient
from app.services.ai.parsing import parse_logo_prompts
from app.services.ai.prompts import build_logo_prompts_request, fallback_logo_prompts
from app.services.ai.providers import AIServiceFactory
from app.services.asset_service import AssetService
from app.services.job_service import JobService
from app.services.storage import BlobStorage, get_storage

logger = logging.getLogger(__name__)

NO_ASSETS_MESSAGE = "Failed to generate any logo assets"
LOGO_MIME_TYPE = "image/png"


class LogoGenerationRunner:
    def __init__(
        self,
        session_factory: Callable[[], Session] = SessionLocal,
        completion_service: Optional[BaseAIService] = None,
        image_client: Optional[StabilityImageClient] = None,
        storage: Optional[BlobStorage] = None,
        iteration_delay: Optional[float] = None,
    ):
        self.session_factory = session_factory
        self._completion_service = completion_service
        self.image_client = image_client or StabilityImageClient()
        self.storage = storage or get_storage()
        self.iteration_delay = (
            settings.LOGO_ITERATION_DELAY_SECONDS if iteration_delay is None else iteration_delay
        )

    def _completion(self) -> BaseAIService:
        if self._completion_service is None:
            self._completion_service = AIServiceFactory.create_text_service()
        return self._completion_service

    async def build_prompts(self, input_data: Dict[str, Any]) -> List[str]:
        """Image prompts from the completion client, or the fixed templates on any failure"""
        concept = input_data["concept"]
        style = input_data.get("style") or "modern"
        count = int(input_data.get("iterations") or settings.MAX_LOGO_ITERATIONS)

        request = build_logo_prompts_request(
            concept=concept,
            style=style,
            colors=input_data.get("colors") or [],
            include_text=bool(input_data.get("includeText")),
            brand=input_data.get("brandContext"),
            count=count,
        )

        try:
            text = await self._completion().complete(request)
            prompts = parse_logo_prompts(text)
        except AIServiceError as e:
            logger.warning(f"Logo prompt synthesis failed, using fallback prompts: {e}")
            prompts = []

        return prompts or fallback_logo_prompts(concept, style)

    async def _store_image(
        self,
        db: Session,
        job: BackgroundJob,
        image: GeneratedImage,
        prompt: str,
        iteration: int,
    ) -> str:
        data = image.to_bytes()
        file_name = f"logo-{int(time.time() * 1000)}-{iteration}.png"
        file_path = f"{job.user_id}/{file_name}"

        # boto3 is blocking
        file_url = await asyncio.to_thread(self.storage.upload, file_path, data, LOGO_MIME_TYPE)

        asset = AssetService.create_asset(
            db,
            user_id=job.user_id,
            brand_profile_id=(job.input_data or {}).get("brandProfileId"),
            asset_type="logo",
            file_name=file_name,
            file_path=file_path,
            file_url=file_url,
            file_size=len(data),
            mime_type=LOGO_MIME_TYPE,
            width=self.image_client.size,
            height=self.image_client.size,
            is_primary=False,
            ai_prompt=prompt,
            ai_model=self.image_client.model_tag,
            generation_params={"seed": image.seed, "iteration": iteration, "jobId": job.id},
        )
        return asset.id

    async def run(self, job_id: str) -> Optional[str]:
        """
        Execute a job to a terminal state and return that state.

        Returns None without touching the row when the job does not exist or
        has already reached a terminal state.
        """
        db = self.session_factory()
        try:
            job = db.get(BackgroundJob, job_id)
            if job is None:
                logger.error(f"Logo generation job {job_id} not found")
                return None
            if job.status in JobStatus.terminal():
                logger.info(f"Logo generation job {job_id} already {job.status}, skipping")
                return None

            try:
                return await self._execute(db, job)
            except Exception as e:
                logger.exception(f"Logo generation job {job_id} failed")
                db.rollback()
                if not JobService.finish_job(
                    db, job_id, JobStatus.FAILED, error_message=str(e) or "Logo generation failed",
                ):
                    return self._current_status(db, job_id)
                return JobStatus.FAILED.value
        finally:
            db.close()

    async def _execute(self, db: Session, job: BackgroundJob) -> str:
        JobService.update_job(
            db,
            job.id,
            status=JobStatus.PROCESSING,
            started_at=datetime.now(timezone.utc),
        )

        input_data = dict(job.input_data or {})
        requested = int(input_data.get("iterations") or settings.MAX_LOGO_ITERATIONS)
        prompts = await self.build_prompts(input_data)
        total = min(requested, len(prompts))

        asset_ids: List[str] = []
        for i in range(total):
            db.refresh(job)
            if job.status in JobStatus.terminal():
                logger.warning(f"Job {job.id} became {job.status} while running, stopping")
                return job.status
            JobService.update_job(db, job.id, output_data={"progress": round(i / requested * 80)})

            try:
                image = await self.image_client.generate(prompts[i])
                if image is not None:
                    asset_ids.append(await self._store_image(db, job, image, prompts[i], i))
                else:
                    logger.warning(f"Job {job.id} iteration {i} produced no image")
            except Exception as e:
                logger.error(f"Logo generation iteration {i} of job {job.id} failed: {e}")
                db.rollback()

            if self.iteration_delay and i < total - 1:
                await asyncio.sleep(self.iteration_delay)

        if not asset_ids:
            if not JobService.finish_job(db, job.id, JobStatus.FAILED, error_message=NO_ASSETS_MESSAGE):
                return self._current_status(db, job.id)
            logger.warning(f"Logo generation job {job.id} produced no assets")
            return JobStatus.FAILED.value

        finished = JobService.finish_job(
            db,
            job.id,
            JobStatus.COMPLETED,
            output_data={
                "progress": 100,
                "assetIds": asset_ids,
                "generatedCount": len(asset_ids),
                "requestedCount": requested,
                "partial": len(asset_ids) < requested,
            },
        )
        if not finished:
            return self._current_status(db, job.id)
        logger.info(f"Logo generation job {job.id} completed with {len(asset_ids)}/{requested} assets")
        return JobStatus.COMPLETED.value

    @staticmethod
    def _current_status(db: Session, job_id: str) -> Optional[str]:
        job = db.get(BackgroundJob, job_id)
        return job.status if job else None

from pydantic import BaseModel
from datetime import datetime
from typing import Optional, Dict, Any, List

class JobSummary(BaseModel):
    id: str
    jobType: str
    status: str  # pending, processing, completed, failed
    progress: int = 0
    inputData: Dict[str, Any] = {}
    outputData: Dict[str, Any] = {}
    errorMessage: Optional[str] = None
    createdAt: Optional[datetime] = None
    startedAt: Optional[datetime] = None
    completedAt: Optional[datetime] = None

    @classmethod
    def from_model(cls, job) -> "JobSummary":
        return cls(
            id=job.id,
            jobType=job.job_type,
            status=job.status,
            progress=job.progress,
            inputData=job.input_data or {},
            outputData=job.output_data or {},
            errorMessage=job.error_message,
            createdAt=job.created_at,
            startedAt=job.started_at,
            completedAt=job.completed_at,
        )

class JobStatus(BaseModel):
    id: str
    status: str
    createdAt: Optional[datetime] = None
    startedAt: Optional[datetime] = None
    completedAt: Optional[datetime] = None
    errorMessage: Optional[str] = None
    progress: int = 0
    generatedCount: Optional[int] = None
    requestedCount: Optional[int] = None
    partial: Optional[bool] = None

    @classmethod
    def from_model(cls, job) -> "JobStatus":
        output = job.output_data or {}
        return cls(
            id=job.id,
            status=job.status,
            createdAt=job.created_at,
            startedAt=job.started_at,
            completedAt=job.completed_at,
            errorMessage=job.error_message,
            progress=job.progress,
            generatedCount=output.get("generatedCount"),
            requestedCount=output.get("requestedCount"),
            partial=output.get("partial"),
        )

class JobsResponse(BaseModel):
    success: bool = True
    jobs: List[JobSummary]

import enum
import uuid

from sqlalchemy import Column, String, DateTime, JSON, Text, ForeignKey
from sqlalchemy.sql import func
from app.db.session import Base

class JobStatus(str, enum.Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @classmethod
    def terminal(cls):
        return {cls.COMPLETED.value, cls.FAILED.value}

class JobType(str, enum.Enum):
    LOGO_GENERATION = "logo_generation"

class BackgroundJob(Base):
    __tablename__ = "background_jobs"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    job_type = Column(String, nullable=False, index=True)  # logo_generation
    status = Column(String, nullable=False, default=JobStatus.PENDING.value, index=True)
    input_data = Column(JSON, nullable=False, default=dict)
    output_data = Column(JSON, nullable=False, default=dict)  # progress, assetIds, generatedCount
    error_message = Column(Text)
    task_id = Column(String)  # queue task id once dispatched
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    started_at = Column(DateTime(timezone=True))
    completed_at = Column(DateTime(timezone=True))

    @property
    def progress(self) -> int:
        return int((self.output_data or {}).get("progress", 0))

    @property
    def asset_ids(self) -> list:
        return list((self.output_data or {}).get("assetIds") or [])

import uuid

from sqlalchemy import Column, String, DateTime, ForeignKey, JSON, Text, Boolean
from sqlalchemy.sql import func
from app.db.session import Base

class BrandName(Base):
    __tablename__ = "brand_names"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    brand_profile_id = Column(String(36), ForeignKey("brand_profiles.id"), nullable=True)
    name = Column(String, nullable=False)
    niche = Column(String, nullable=False)
    style = Column(String)
    reasoning = Column(Text)

    # Domain availability, None until checked or when the check errored
    domain_available = Column(Boolean, nullable=True)
    domain_checked_at = Column(DateTime(timezone=True))
    available_extensions = Column(JSON, default=list)

    is_favorite = Column(Boolean, nullable=False, default=False)
    is_claimed = Column(Boolean, nullable=False, default=False)
    ai_prompt = Column(Text)
    generation_batch_id = Column(String(36), index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

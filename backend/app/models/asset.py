import uuid

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON, Text, Boolean
from sqlalchemy.sql import func
from app.db.session import Base

class BrandAsset(Base):
    """Storage-backed generated artifact plus its generation provenance"""
    __tablename__ = "brand_assets"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    brand_profile_id = Column(String(36), ForeignKey("brand_profiles.id"), nullable=True, index=True)
    asset_type = Column(String, nullable=False, index=True)  # logo
    file_name = Column(String, nullable=False)
    file_path = Column(String, nullable=False)
    file_url = Column(String, nullable=False)
    file_size = Column(Integer)
    mime_type = Column(String)
    width = Column(Integer)
    height = Column(Integer)
    is_primary = Column(Boolean, nullable=False, default=False)

    # Provenance, written once at creation
    ai_prompt = Column(Text)
    ai_model = Column(String)
    generation_params = Column(JSON)  # {"seed": 123, "iteration": 0, "jobId": "..."}

    created_at = Column(DateTime(timezone=True), server_default=func.now())

import uuid

from sqlalchemy import Column, String, DateTime, ForeignKey, JSON, Text
from sqlalchemy.sql import func
from app.db.session import Base

class BrandProfile(Base):
    """Brand context interpolated into generation prompts. Read-only for generators."""
    __tablename__ = "brand_profiles"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    tagline = Column(String)
    mission = Column(Text)
    industry = Column(String)
    tone_of_voice = Column(String)
    target_audience = Column(Text)
    brand_personality = Column(JSON)  # ["Bold", "Playful"]
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def to_context(self) -> dict:
        """Snapshot stored on job input and used by prompt builders"""
        return {
            "id": self.id,
            "name": self.name,
            "tagline": self.tagline,
            "mission": self.mission,
            "industry": self.industry,
            "tone_of_voice": self.tone_of_voice,
            "target_audience": self.target_audience,
            "brand_personality": self.brand_personality or [],
        }

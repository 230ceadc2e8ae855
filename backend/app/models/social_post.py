import uuid

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON, Text, Boolean
from sqlalchemy.sql import func
from app.db.session import Base

class SocialPost(Base):
    """Generated social copy. Drafts until scheduled or published."""
    __tablename__ = "social_posts"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    brand_profile_id = Column(String(36), ForeignKey("brand_profiles.id"), nullable=True)
    platform = Column(String, nullable=False, index=True)
    post_type = Column(String)
    content = Column(Text, nullable=False)
    hashtags = Column(JSON, default=list)
    character_count = Column(Integer, nullable=False, default=0)
    is_draft = Column(Boolean, nullable=False, default=True)
    scheduled_for = Column(DateTime(timezone=True))
    posted_at = Column(DateTime(timezone=True))
    ai_prompt = Column(Text)
    tone_override = Column(String)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

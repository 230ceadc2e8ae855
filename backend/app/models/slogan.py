import uuid

from sqlalchemy import Column, String, DateTime, ForeignKey, JSON, Text, Boolean
from sqlalchemy.sql import func
from app.db.session import Base

class Slogan(Base):
    __tablename__ = "slogans"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    brand_profile_id = Column(String(36), ForeignKey("brand_profiles.id"), nullable=True)
    text = Column(Text, nullable=False)
    company_name = Column(String, nullable=False)
    industry = Column(String, nullable=False)
    brand_personality = Column(String, nullable=False)
    tone = Column(String)
    keywords = Column(JSON, default=list)

    # Favouriting stamps the time so favourites list most recent first
    is_favorite = Column(Boolean, nullable=False, default=False)
    favorited_at = Column(DateTime(timezone=True))

    ai_prompt = Column(Text)
    generation_batch_id = Column(String(36), index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

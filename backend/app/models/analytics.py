import uuid

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.session import Base

class ContentPost(Base):
    """Published post tracked for analytics reporting"""
    __tablename__ = "content_posts"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    platform = Column(String, nullable=False, index=True)
    content = Column(Text, nullable=False, default="")
    post_url = Column(String)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    metrics = relationship(
        "PostMetric",
        back_populates="post",
        order_by="PostMetric.recorded_at.desc()",
        cascade="all, delete-orphan",
    )

    @property
    def latest_metrics(self):
        return self.metrics[0] if self.metrics else None

class PostMetric(Base):
    """Engagement snapshot for a content post; the newest row is current"""
    __tablename__ = "post_metrics"

    id = Column(Integer, primary_key=True, index=True)
    post_id = Column(String(36), ForeignKey("content_posts.id"), nullable=False, index=True)
    views = Column(Integer, default=0)
    likes = Column(Integer, default=0)
    shares = Column(Integer, default=0)
    comments = Column(Integer, default=0)
    recorded_at = Column(DateTime(timezone=True), server_default=func.now())

    post = relationship("ContentPost", back_populates="metrics")

class SocialAccount(Base):
    __tablename__ = "social_accounts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    platform = Column(String, nullable=False)
    username = Column(String, nullable=False)
    display_name = Column(String)
    is_active = Column(Boolean, default=True)
    connected_at = Column(DateTime(timezone=True), server_default=func.now())
    last_sync_at = Column(DateTime(timezone=True))

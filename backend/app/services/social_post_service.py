"""
Social post generation and draft management.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import logging

from sqlalchemy.orm import Session

from app.core.exceptions import GenerationError, NotFoundError
from app.models import SocialPost
from app.services.ai.base import AIServiceError, BaseAIService
from app.services.ai.parsing import PostSuggestion, parse_post_suggestions
from app.services.ai.prompts import PLATFORM_LIMITS, build_social_post_prompt
from app.services.brand_service import BrandProfileService

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = {"content", "hashtags", "platform", "post_type", "tone_override", "is_draft"}


class PostNotFoundError(NotFoundError):
    def __init__(self, message: str = "Post not found"):
        super().__init__(message)


class SocialPostGenerator:
    def __init__(self, completion_service: BaseAIService):
        self.completion_service = completion_service

    async def generate_for_platform(
        self,
        platform: str,
        post_type: str,
        topic: str,
        tone: str,
        brand: Optional[Dict[str, Any]],
        include_hashtags: bool,
        count: int,
    ) -> tuple:
        prompt = build_social_post_prompt(platform, post_type, topic, tone, brand, include_hashtags, count)
        text = await self.completion_service.complete(prompt)
        return parse_post_suggestions(text, limit=min(count, 3))[:count], prompt

    async def generate(
        self,
        db: Session,
        user_id: str,
        platforms: List[str],
        topic: str,
        post_type: str = "promotional",
        include_hashtags: bool = True,
        tone_override: Optional[str] = None,
        count: int = 3,
        brand_profile_id: Optional[str] = None,
    ) -> List[SocialPost]:
        """
        Generate drafts for every platform. A platform whose completion fails
        or yields nothing parseable is skipped; nothing at all is an error.
        """
        topic = topic.strip()
        brand = BrandProfileService.resolve_context(db, brand_profile_id, user_id)
        tone = tone_override or (brand or {}).get("tone_of_voice") or "professional"

        saved: List[SocialPost] = []
        for platform in platforms:
            try:
                suggestions, prompt = await self.generate_for_platform(
                    platform, post_type, topic, tone, brand, include_hashtags, count
                )
            except AIServiceError as e:
                logger.error(f"Failed to generate posts for {platform}: {e}")
                continue

            keep_hashtags = include_hashtags and PLATFORM_LIMITS[platform]["supportsHashtags"]
            for suggestion in suggestions:
                saved.append(self._build_post(
                    user_id, brand_profile_id if brand else None, platform, post_type,
                    suggestion, keep_hashtags, prompt, tone_override,
                ))

        if not saved:
            raise GenerationError("Failed to generate any posts")

        db.add_all(saved)
        db.commit()
        for post in saved:
            db.refresh(post)
        logger.info(f"Generated {len(saved)} social posts for user {user_id}")
        return saved

    @staticmethod
    def _build_post(user_id, brand_profile_id, platform, post_type, suggestion: PostSuggestion,
                    keep_hashtags, prompt, tone_override) -> SocialPost:
        return SocialPost(
            user_id=user_id,
            brand_profile_id=brand_profile_id,
            platform=platform,
            post_type=post_type,
            content=suggestion.content,
            hashtags=suggestion.hashtags if keep_hashtags else [],
            character_count=len(suggestion.content),
            is_draft=True,
            ai_prompt=prompt,
            tone_override=tone_override,
        )


class SocialPostService:
    @staticmethod
    def get_posts(
        db: Session,
        user_id: str,
        brand_profile_id: Optional[str] = None,
        platform: Optional[str] = None,
        is_draft: Optional[bool] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[SocialPost]:
        query = db.query(SocialPost).filter(SocialPost.user_id == user_id)
        if brand_profile_id:
            query = query.filter(SocialPost.brand_profile_id == brand_profile_id)
        if platform:
            query = query.filter(SocialPost.platform == platform)
        if is_draft is not None:
            query = query.filter(SocialPost.is_draft.is_(is_draft))
        return query.order_by(SocialPost.created_at.desc()).offset(offset).limit(limit).all()

    @staticmethod
    def get_post(db: Session, post_id: str, user_id: str) -> SocialPost:
        post = db.query(SocialPost).filter(
            SocialPost.id == post_id,
            SocialPost.user_id == user_id,
        ).first()
        if post is None:
            raise PostNotFoundError()
        return post

    @staticmethod
    def update_post(db: Session, post_id: str, user_id: str, updates: Dict[str, Any]) -> SocialPost:
        """Apply editable fields only; character count follows the content"""
        post = SocialPostService.get_post(db, post_id, user_id)
        for key, value in updates.items():
            if key in _EDITABLE_FIELDS:
                setattr(post, key, value)
        if "content" in updates and updates["content"] is not None:
            post.character_count = len(updates["content"])
        post.updated_at = datetime.now(timezone.utc)
        db.commit()
        db.refresh(post)
        return post

    @staticmethod
    def schedule_post(db: Session, post_id: str, user_id: str, scheduled_for: datetime) -> SocialPost:
        post = SocialPostService.get_post(db, post_id, user_id)
        post.scheduled_for = scheduled_for
        post.is_draft = False
        post.updated_at = datetime.now(timezone.utc)
        db.commit()
        db.refresh(post)
        return post

    @staticmethod
    def publish_post(db: Session, post_id: str, user_id: str) -> SocialPost:
        post = SocialPostService.get_post(db, post_id, user_id)
        now = datetime.now(timezone.utc)
        post.is_draft = False
        post.posted_at = now
        post.updated_at = now
        db.commit()
        db.refresh(post)
        return post

    @staticmethod
    def delete_post(db: Session, post_id: str, user_id: str) -> None:
        post = SocialPostService.get_post(db, post_id, user_id)
        db.delete(post)
        db.commit()

from sqlalchemy.orm import Session
from app.models import BrandProfile
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)

class BrandProfileService:
    @staticmethod
    def get_profile(db: Session, profile_id: str, user_id: str) -> Optional[BrandProfile]:
        """Get a specific brand profile by ID for a user"""
        return db.query(BrandProfile).filter(
            BrandProfile.id == profile_id,
            BrandProfile.user_id == user_id
        ).first()

    @staticmethod
    def resolve_context(db: Session, profile_id: Optional[str], user_id: str) -> Optional[Dict[str, Any]]:
        """
        Brand context for prompt building.

        A missing or foreign profile id is not an error: generation proceeds
        without brand context.
        """
        if not profile_id:
            return None
        profile = BrandProfileService.get_profile(db, profile_id, user_id)
        if profile is None:
            logger.info(f"Brand profile {profile_id} not found for user {user_id}, continuing without context")
            return None
        return profile.to_context()

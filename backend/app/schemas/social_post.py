from pydantic import BaseModel
from datetime import datetime
from typing import Optional, List, Dict, Any

from .logo import Pagination

class SocialPostGenerateRequest(BaseModel):
    brandProfileId: Optional[str] = None
    platforms: List[str] = ["instagram"]
    postType: str = "promotional"
    topic: Optional[str] = None
    includeHashtags: bool = True
    toneOverride: Optional[str] = None
    count: int = 3

class SocialPostUpdate(BaseModel):
    content: Optional[str] = None
    hashtags: Optional[List[str]] = None
    platform: Optional[str] = None
    postType: Optional[str] = None
    toneOverride: Optional[str] = None
    isDraft: Optional[bool] = None

    def to_fields(self) -> Dict[str, Any]:
        """Set fields only, keyed by column name"""
        columns = {
            "content": "content",
            "hashtags": "hashtags",
            "platform": "platform",
            "postType": "post_type",
            "toneOverride": "tone_override",
            "isDraft": "is_draft",
        }
        data = self.model_dump(exclude_unset=True)
        return {columns[key]: value for key, value in data.items()}

class ScheduleRequest(BaseModel):
    scheduledFor: Optional[datetime] = None

class SocialPost(BaseModel):
    id: str
    brandProfileId: Optional[str] = None
    platform: str
    postType: Optional[str] = None
    content: str
    hashtags: List[str] = []
    characterCount: int = 0
    isDraft: bool = True
    scheduledFor: Optional[datetime] = None
    postedAt: Optional[datetime] = None
    toneOverride: Optional[str] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    @classmethod
    def from_model(cls, post) -> "SocialPost":
        return cls(
            id=post.id,
            brandProfileId=post.brand_profile_id,
            platform=post.platform,
            postType=post.post_type,
            content=post.content,
            hashtags=post.hashtags or [],
            characterCount=post.character_count or 0,
            isDraft=bool(post.is_draft),
            scheduledFor=post.scheduled_for,
            postedAt=post.posted_at,
            toneOverride=post.tone_override,
            createdAt=post.created_at,
            updatedAt=post.updated_at,
        )

class SocialPostGenerateResponse(BaseModel):
    success: bool = True
    posts: List[SocialPost]
    generatedCount: int
    platforms: List[str]

class SocialPostsResponse(BaseModel):
    success: bool = True
    posts: List[SocialPost]
    pagination: Pagination

class SocialPostResponse(BaseModel):
    success: bool = True
    post: SocialPost

class PlatformInfo(BaseModel):
    maxChars: int
    supportsHashtags: bool
    hashtagLimit: int

class PlatformsResponse(BaseModel):
    success: bool = True
    platforms: Dict[str, PlatformInfo]

from typing import Optional
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.api.deps import get_completion_service, get_current_user, get_db
from app.core.exceptions import ValidationError
from app.core.rate_limiting import RATE_LIMITS, limiter
from app.models import User
from app.schemas import (
    MessageResponse, Pagination, PlatformsResponse, ScheduleRequest, SocialPost,
    SocialPostGenerateRequest, SocialPostGenerateResponse, SocialPostResponse,
    SocialPostsResponse, SocialPostUpdate,
)
from app.services.ai.base import BaseAIService
from app.services.ai.prompts import PLATFORM_LIMITS
from app.services.social_post_service import SocialPostGenerator, SocialPostService

router = APIRouter()

MAX_POST_COUNT = 10


@router.post("/generate", response_model=SocialPostGenerateResponse)
@limiter.limit(RATE_LIMITS["social_generation"])
async def generate_posts(
    request: Request,
    payload: SocialPostGenerateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    completion: BaseAIService = Depends(get_completion_service),
):
    """Generate draft posts for each requested platform"""
    topic = (payload.topic or "").strip()
    if len(topic) < 3:
        raise ValidationError("Post topic is required and must be at least 3 characters")
    if not payload.platforms:
        raise ValidationError("At least one platform must be specified")

    invalid = [p for p in payload.platforms if p not in PLATFORM_LIMITS]
    if invalid:
        raise ValidationError(f"Invalid platforms: {', '.join(invalid)}")
    if not 1 <= payload.count <= MAX_POST_COUNT:
        raise ValidationError(f"Count must be between 1 and {MAX_POST_COUNT}")

    generator = SocialPostGenerator(completion)
    posts = await generator.generate(
        db,
        user_id=current_user.id,
        platforms=payload.platforms,
        topic=topic,
        post_type=payload.postType,
        include_hashtags=payload.includeHashtags,
        tone_override=payload.toneOverride,
        count=payload.count,
        brand_profile_id=payload.brandProfileId,
    )

    return SocialPostGenerateResponse(
        posts=[SocialPost.from_model(post) for post in posts],
        generatedCount=len(posts),
        platforms=payload.platforms,
    )


@router.get("/posts", response_model=SocialPostsResponse)
def list_posts(
    brandProfileId: Optional[str] = None,
    platform: Optional[str] = None,
    isDraft: Optional[bool] = None,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    posts = SocialPostService.get_posts(
        db,
        user_id=current_user.id,
        brand_profile_id=brandProfileId,
        platform=platform,
        is_draft=isDraft,
        limit=limit,
        offset=offset,
    )
    return SocialPostsResponse(
        posts=[SocialPost.from_model(post) for post in posts],
        pagination=Pagination(limit=limit, offset=offset, hasMore=len(posts) == limit),
    )


@router.patch("/posts/{post_id}", response_model=SocialPostResponse)
def update_post(
    post_id: str,
    payload: SocialPostUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    fields = payload.to_fields()
    if "platform" in fields and fields["platform"] not in PLATFORM_LIMITS:
        raise ValidationError(f"Invalid platforms: {fields['platform']}")
    post = SocialPostService.update_post(db, post_id, current_user.id, fields)
    return SocialPostResponse(post=SocialPost.from_model(post))


@router.patch("/posts/{post_id}/schedule", response_model=SocialPostResponse)
def schedule_post(
    post_id: str,
    payload: ScheduleRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if payload.scheduledFor is None:
        raise ValidationError("scheduledFor timestamp is required")
    post = SocialPostService.schedule_post(db, post_id, current_user.id, payload.scheduledFor)
    return SocialPostResponse(post=SocialPost.from_model(post))


@router.patch("/posts/{post_id}/publish", response_model=SocialPostResponse)
def publish_post(
    post_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    post = SocialPostService.publish_post(db, post_id, current_user.id)
    return SocialPostResponse(post=SocialPost.from_model(post))


@router.delete("/posts/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    SocialPostService.delete_post(db, post_id, current_user.id)
    return MessageResponse(message="Post deleted successfully")


@router.get("/platforms", response_model=PlatformsResponse)
def get_platforms():
    return PlatformsResponse(platforms=PLATFORM_LIMITS)

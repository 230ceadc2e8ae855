from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.exceptions import GenerationError
from app.core.security import decode_access_token
from app.db.session import SessionLocal, get_db
from app.models import User
from app.services.ai.base import AIServiceError, BaseAIService
from app.services.ai.image_generation import StabilityImageClient
from app.services.ai.providers import AIServiceFactory
from app.services.domain_checker import get_domain_checker
from app.services.logo_generation import LogoGenerationRunner
from app.services.report_generator import get_report_generator
from app.services.storage import BlobStorage, get_storage

import logging

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

__all__ = [
    "get_db",
    "get_current_user",
    "get_storage",
    "get_image_client",
    "get_completion_service",
    "get_domain_checker",
    "get_logo_runner",
    "get_report_generator",
]


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None:
        raise _unauthorized("Not authenticated")

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise _unauthorized("Invalid or expired token")

    user = db.get(User, payload["sub"])
    if user is None or not user.is_active:
        raise _unauthorized("User not found")

    # Used as the rate limit key
    request.state.user_id = user.id
    return user


def get_image_client() -> StabilityImageClient:
    return StabilityImageClient()


def get_completion_service() -> BaseAIService:
    try:
        return AIServiceFactory.create_text_service()
    except AIServiceError as e:
        logger.error(f"Completion service unavailable: {e}")
        raise GenerationError("AI service is not configured")


def get_logo_runner(
    storage: BlobStorage = Depends(get_storage),
    image_client: StabilityImageClient = Depends(get_image_client),
) -> LogoGenerationRunner:
    """Runner used for inline execution. The Celery worker builds its own."""
    return LogoGenerationRunner(
        session_factory=SessionLocal,
        image_client=image_client,
        storage=storage,
    )

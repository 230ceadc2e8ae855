from typing import Optional
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.api.deps import get_completion_service, get_current_user, get_db, get_domain_checker
from app.core.exceptions import ValidationError
from app.core.rate_limiting import RATE_LIMITS, limiter
from app.models import User
from app.schemas import (
    BrandName, DomainCheckRequest, DomainCheckResponse, DomainResult, FavoriteUpdate,
    MessageResponse, NameGenerateRequest, NameGenerateResponse, NameResponse, NamesResponse, Pagination,
)
from app.services.ai.base import BaseAIService
from app.services.domain_checker import DomainChecker
from app.services.name_generation import BrandNameService, NameGenerationService

router = APIRouter()

MAX_NAME_COUNT = 25


@router.post("/generate", response_model=NameGenerateResponse)
@limiter.limit(RATE_LIMITS["name_generation"])
async def generate_names(
    request: Request,
    payload: NameGenerateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    completion: BaseAIService = Depends(get_completion_service),
    domain_checker: DomainChecker = Depends(get_domain_checker),
):
    """Generate business names, optionally checking domain availability for each"""
    niche = (payload.niche or "").strip()
    if len(niche) < 2:
        raise ValidationError("Business niche is required and must be at least 2 characters")
    if not 1 <= payload.count <= MAX_NAME_COUNT:
        raise ValidationError(f"Count must be between 1 and {MAX_NAME_COUNT}")

    service = NameGenerationService(completion, domain_checker)
    names, batch_id = await service.generate(
        db,
        user_id=current_user.id,
        niche=niche,
        style=payload.style,
        keywords=payload.keywords,
        count=payload.count,
        check_domains=payload.checkDomains,
        brand_profile_id=payload.brandProfileId,
    )

    return NameGenerateResponse(
        names=[BrandName.from_model(name) for name in names],
        batchId=batch_id,
        domainCheckEnabled=payload.checkDomains,
    )


@router.post("/check-domains", response_model=DomainCheckResponse)
@limiter.limit(RATE_LIMITS["domain_check"])
async def check_domains(
    request: Request,
    payload: DomainCheckRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    domain_checker: DomainChecker = Depends(get_domain_checker),
):
    if not payload.nameIds:
        raise ValidationError("Name IDs array is required")

    # Completion is not needed to re-check stored names
    service = NameGenerationService(completion_service=None, domain_checker=domain_checker)
    results = await service.check_domains(db, current_user.id, payload.nameIds)

    return DomainCheckResponse(results=[DomainResult(**result.to_dict()) for result in results])


@router.get("", response_model=NamesResponse)
def list_names(
    brandProfileId: Optional[str] = None,
    favoritesOnly: bool = False,
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    names = BrandNameService.get_names(
        db,
        user_id=current_user.id,
        brand_profile_id=brandProfileId,
        favorites_only=favoritesOnly,
        limit=limit,
        offset=offset,
    )
    return NamesResponse(
        names=[BrandName.from_model(name) for name in names],
        pagination=Pagination(limit=limit, offset=offset, hasMore=len(names) == limit),
    )


@router.patch("/{name_id}/favorite", response_model=NameResponse)
def toggle_favorite(
    name_id: str,
    payload: FavoriteUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    name = BrandNameService.set_favorite(db, name_id, current_user.id, payload.isFavorite)
    return NameResponse(name=BrandName.from_model(name))


@router.patch("/{name_id}/claim", response_model=NameResponse)
def claim_name(
    name_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Mark a name as claimed once its domain has been purchased"""
    name = BrandNameService.claim(db, name_id, current_user.id)
    return NameResponse(name=BrandName.from_model(name))


@router.delete("/{name_id}", response_model=MessageResponse)
def delete_name(
    name_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    BrandNameService.delete_name(db, name_id, current_user.id)
    return MessageResponse(message="Name deleted successfully")

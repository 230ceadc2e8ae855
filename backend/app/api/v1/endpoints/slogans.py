from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import Response
from sqlalchemy.orm import Session

from app.api.deps import get_completion_service, get_current_user, get_db
from app.core.exceptions import ValidationError
from app.core.rate_limiting import RATE_LIMITS, limiter
from app.models import User
from app.schemas import (
    MessageResponse, Pagination, Slogan, SloganExportRequest, SloganGenerateRequest,
    SloganGenerateResponse, SloganResponse, SlogansResponse,
)
from app.services.ai.base import BaseAIService
from app.services.slogan_service import (
    BRAND_PERSONALITIES, EXPORT_FORMATS, SLOGAN_TONES,
    SloganGenerator, SloganService, export_slogans_csv, export_slogans_txt,
)

router = APIRouter()

MAX_SLOGAN_COUNT = 10
MAX_KEYWORDS = 5


def _validate_generate(payload: SloganGenerateRequest) -> None:
    company_name = (payload.companyName or "").strip()
    industry = (payload.industry or "").strip()
    if not 1 <= len(company_name) <= 100:
        raise ValidationError("Company name is required and must be at most 100 characters")
    if not 1 <= len(industry) <= 50:
        raise ValidationError("Industry is required and must be at most 50 characters")
    if payload.brandPersonality not in BRAND_PERSONALITIES:
        raise ValidationError(f"Brand personality must be one of: {', '.join(BRAND_PERSONALITIES)}")
    if payload.tone not in SLOGAN_TONES:
        raise ValidationError(f"Tone must be one of: {', '.join(SLOGAN_TONES)}")
    if len(payload.keywords) > MAX_KEYWORDS or any(len(k) > 30 for k in payload.keywords):
        raise ValidationError(f"At most {MAX_KEYWORDS} keywords of up to 30 characters each")
    if not 1 <= payload.count <= MAX_SLOGAN_COUNT:
        raise ValidationError(f"Count must be between 1 and {MAX_SLOGAN_COUNT}")


@router.post("/generate", response_model=SloganGenerateResponse)
@limiter.limit(RATE_LIMITS["slogan_generation"])
async def generate_slogans(
    request: Request,
    payload: SloganGenerateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    completion: BaseAIService = Depends(get_completion_service),
):
    """Generate marketing slogans and store them in the user's history"""
    _validate_generate(payload)

    slogans, batch_id, used_fallback = await SloganGenerator(completion).generate(
        db,
        user_id=current_user.id,
        company_name=payload.companyName.strip(),
        industry=payload.industry.strip(),
        brand_personality=payload.brandPersonality,
        tone=payload.tone,
        keywords=[k.strip() for k in payload.keywords if k.strip()],
        count=payload.count,
        brand_profile_id=payload.brandProfileId,
    )

    return SloganGenerateResponse(
        slogans=[Slogan.from_model(slogan) for slogan in slogans],
        batchId=batch_id,
        fallback=used_fallback,
    )


@router.get("/history", response_model=SlogansResponse)
def slogan_history(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    slogans = SloganService.get_history(db, current_user.id, limit=limit, offset=offset)
    return SlogansResponse(
        slogans=[Slogan.from_model(slogan) for slogan in slogans],
        pagination=Pagination(limit=limit, offset=offset, hasMore=len(slogans) == limit),
    )


@router.get("/favorites")
def favorite_slogans(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    slogans = SloganService.get_favorites(db, current_user.id)
    return {"success": True, "favorites": [Slogan.from_model(slogan) for slogan in slogans]}


@router.post("/favorites/{slogan_id}", response_model=SloganResponse, status_code=status.HTTP_201_CREATED)
def add_favorite(
    slogan_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    slogan = SloganService.set_favorite(db, slogan_id, current_user.id, True)
    return SloganResponse(slogan=Slogan.from_model(slogan))


@router.delete("/favorites/{slogan_id}", response_model=MessageResponse)
def remove_favorite(
    slogan_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    SloganService.set_favorite(db, slogan_id, current_user.id, False)
    return MessageResponse(message="Removed from favorites")


@router.post("/export")
def export_slogans(
    payload: SloganExportRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Download selected slogans as a CSV or plain-text attachment"""
    export_format = (payload.format or "").lower()
    if export_format not in EXPORT_FORMATS:
        raise ValidationError(f"Format must be one of: {', '.join(EXPORT_FORMATS)}")
    if not payload.sloganIds:
        raise ValidationError("Slogan IDs array is required")

    slogans = SloganService.get_for_export(db, current_user.id, payload.sloganIds)
    body = export_slogans_csv(slogans) if export_format == "csv" else export_slogans_txt(slogans)

    return Response(
        content=body.encode("utf-8"),
        media_type=EXPORT_FORMATS[export_format],
        headers={"Content-Disposition": f'attachment; filename="slogans.{export_format}"'},
    )

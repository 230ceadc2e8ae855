from typing import Optional
from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse, Response
from sqlalchemy.orm import Session
import logging

from app.api.deps import get_current_user, get_db, get_report_generator
from app.core.config import settings
from app.core.rate_limiting import RATE_LIMITS, limiter
from app.models import User
from app.services.report_generator import ReportGenerator, ReportOptions

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/export")
@limiter.limit(RATE_LIMITS["report_export"])
async def export_report(
    request: Request,
    format: str = Query("pdf", pattern="^(pdf|csv)$"),
    days: int = Query(settings.REPORT_DEFAULT_DAYS, ge=1, le=365),
    platform: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    generator: ReportGenerator = Depends(get_report_generator),
):
    """
    Download the analytics report as a PDF or CSV attachment
    """
    options = ReportOptions(days=days, platform=platform)

    if format == "csv":
        result = generator.generate_csv_report(db, current_user.id, options)
        media_type = "text/csv"
        body = result.content.encode("utf-8") if result.success else None
    else:
        result = await generator.generate_pdf_report(db, current_user.id, options)
        media_type = "application/pdf"
        body = result.buffer

    if not result.success:
        logger.error(f"Report export failed for user {current_user.id}: {result.error}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": result.error or "Failed to generate report"},
        )

    return Response(
        content=body,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )

"""
Slogan generation, history and favourites.

Generation never fails outright: when the completion errors or yields fewer
than three usable lines the fixed template slogans are stored instead.
"""

import csv
import io
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Tuple
import logging

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.models import Slogan
from app.services.ai.base import AIServiceError, BaseAIService
from app.services.ai.parsing import parse_slogans
from app.services.ai.prompts import build_slogan_prompt, fallback_slogans
from app.services.brand_service import BrandProfileService

logger = logging.getLogger(__name__)

BRAND_PERSONALITIES = ("friendly", "professional", "witty", "premium", "innovative")
SLOGAN_TONES = ("casual", "formal", "playful", "serious", "inspiring")
EXPORT_FORMATS = {"csv": "text/csv", "txt": "text/plain"}

CSV_COLUMNS = ["Slogan", "Company", "Industry", "Brand Personality", "Keywords", "Created Date"]


class SloganNotFoundError(NotFoundError):
    def __init__(self, message: str = "Slogan not found"):
        super().__init__(message)


class SloganGenerator:
    def __init__(self, completion_service: BaseAIService):
        self.completion_service = completion_service

    async def generate_texts(self, prompt: str, company_name: str, count: int) -> Tuple[List[str], bool]:
        """Slogan lines for ``prompt`` and whether the fallback templates were used"""
        try:
            text = await self.completion_service.complete(prompt)
        except AIServiceError as e:
            logger.error(f"Slogan completion failed, using fallback slogans: {e}")
            return fallback_slogans(company_name, count), True

        slogans = parse_slogans(text, limit=count)
        if len(slogans) < min(3, count):
            logger.warning(f"Only {len(slogans)} usable slogans in completion, using fallback slogans")
            return fallback_slogans(company_name, count), True
        return slogans, False

    async def generate(
        self,
        db: Session,
        user_id: str,
        company_name: str,
        industry: str,
        brand_personality: str,
        tone: str = "casual",
        keywords: Optional[List[str]] = None,
        count: int = 10,
        brand_profile_id: Optional[str] = None,
    ) -> Tuple[List[Slogan], str, bool]:
        """Generate and persist one batch. Returns (slogans, batch_id, used_fallback)."""
        keywords = keywords or []
        brand = BrandProfileService.resolve_context(db, brand_profile_id, user_id)
        prompt = build_slogan_prompt(company_name, industry, brand_personality, tone, keywords, brand, count)

        texts, used_fallback = await self.generate_texts(prompt, company_name, count)

        batch_id = str(uuid.uuid4())
        records = [
            Slogan(
                user_id=user_id,
                brand_profile_id=brand_profile_id if brand else None,
                text=text,
                company_name=company_name,
                industry=industry,
                brand_personality=brand_personality,
                tone=tone,
                keywords=keywords,
                ai_prompt=prompt,
                generation_batch_id=batch_id,
            )
            for text in texts
        ]
        db.add_all(records)
        db.commit()
        for record in records:
            db.refresh(record)

        logger.info(f"Generated {len(records)} slogans in batch {batch_id} for user {user_id}")
        return records, batch_id, used_fallback


class SloganService:
    @staticmethod
    def get_history(db: Session, user_id: str, limit: int = 20, offset: int = 0) -> List[Slogan]:
        return (
            db.query(Slogan)
            .filter(Slogan.user_id == user_id)
            .order_by(Slogan.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    @staticmethod
    def get_favorites(db: Session, user_id: str) -> List[Slogan]:
        return (
            db.query(Slogan)
            .filter(Slogan.user_id == user_id, Slogan.is_favorite.is_(True))
            .order_by(Slogan.favorited_at.desc())
            .all()
        )

    @staticmethod
    def get_slogan(db: Session, slogan_id: str, user_id: str) -> Slogan:
        slogan = db.query(Slogan).filter(
            Slogan.id == slogan_id,
            Slogan.user_id == user_id,
        ).first()
        if slogan is None:
            raise SloganNotFoundError()
        return slogan

    @staticmethod
    def set_favorite(db: Session, slogan_id: str, user_id: str, is_favorite: bool) -> Slogan:
        slogan = SloganService.get_slogan(db, slogan_id, user_id)
        if is_favorite and not slogan.is_favorite:
            slogan.favorited_at = datetime.now(timezone.utc)
        elif not is_favorite:
            slogan.favorited_at = None
        slogan.is_favorite = is_favorite
        db.commit()
        db.refresh(slogan)
        return slogan

    @staticmethod
    def get_for_export(db: Session, user_id: str, slogan_ids: List[str]) -> List[Slogan]:
        slogans = (
            db.query(Slogan)
            .filter(Slogan.user_id == user_id, Slogan.id.in_(slogan_ids))
            .order_by(Slogan.created_at.asc())
            .all()
        )
        if not slogans:
            raise SloganNotFoundError("No slogans found")
        return slogans


def export_slogans_csv(slogans: List[Slogan]) -> str:
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(CSV_COLUMNS)
    for slogan in slogans:
        writer.writerow([
            slogan.text,
            slogan.company_name or "",
            slogan.industry or "",
            slogan.brand_personality or "",
            ", ".join(slogan.keywords or []),
            slogan.created_at.date().isoformat() if slogan.created_at else "",
        ])
    return output.getvalue()


def export_slogans_txt(slogans: List[Slogan], exported_at: Optional[datetime] = None) -> str:
    exported_at = exported_at or datetime.now(timezone.utc)
    lines = [
        "Marketing Slogans",
        "=================",
        "",
        f"Exported on: {exported_at.date().isoformat()}",
        "",
    ]
    for index, slogan in enumerate(slogans, start=1):
        lines.append(f"{index}. {slogan.text}")
        if slogan.company_name:
            lines.append(f"   Company: {slogan.company_name}")
        if slogan.industry:
            lines.append(f"   Industry: {slogan.industry}")
        lines.append("")
    return "\n".join(lines)

"""
Business name generation and the stored name catalogue.
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional, Tuple
import logging

from sqlalchemy.orm import Session

from app.core.exceptions import GenerationError, NotFoundError
from app.models import BrandName
from app.services.ai.base import AIServiceError, BaseAIService
from app.services.ai.parsing import parse_name_suggestions
from app.services.ai.prompts import build_name_generation_prompt
from app.services.brand_service import BrandProfileService
from app.services.domain_checker import DomainChecker

logger = logging.getLogger(__name__)


class NameNotFoundError(NotFoundError):
    def __init__(self, message: str = "Name not found"):
        super().__init__(message)


class NameGenerationService:
    def __init__(self, completion_service: BaseAIService, domain_checker: DomainChecker):
        self.completion_service = completion_service
        self.domain_checker = domain_checker

    async def generate(
        self,
        db: Session,
        user_id: str,
        niche: str,
        style: str = "modern",
        keywords: Optional[List[str]] = None,
        count: int = 10,
        check_domains: bool = True,
        brand_profile_id: Optional[str] = None,
    ) -> Tuple[List[BrandName], str]:
        """Generate, optionally domain-check, and persist one batch. Returns (names, batch_id)."""
        niche = niche.strip()
        brand = BrandProfileService.resolve_context(db, brand_profile_id, user_id)
        prompt = build_name_generation_prompt(niche, style, keywords or [], brand, count)

        try:
            text = await self.completion_service.complete(prompt)
        except AIServiceError as e:
            logger.error(f"Name generation completion failed: {e}")
            raise GenerationError("Failed to generate business names")

        suggestions = parse_name_suggestions(text)
        if not suggestions:
            raise GenerationError("Failed to generate business names")

        domain_results = {}
        checked_at = None
        if check_domains:
            results = await self.domain_checker.check_names([{"name": s.name} for s in suggestions])
            domain_results = {index: result for index, result in enumerate(results)}
            checked_at = datetime.now(timezone.utc)

        batch_id = str(uuid.uuid4())
        records = []
        for index, suggestion in enumerate(suggestions):
            result = domain_results.get(index)
            records.append(BrandName(
                user_id=user_id,
                brand_profile_id=brand_profile_id if brand else None,
                name=suggestion.name,
                niche=niche,
                style=suggestion.style or style,
                reasoning=suggestion.reasoning,
                domain_available=result.domain_available if result else None,
                domain_checked_at=checked_at,
                available_extensions=result.available_extensions if result else [],
                ai_prompt=prompt,
                generation_batch_id=batch_id,
            ))

        db.add_all(records)
        db.commit()
        for record in records:
            db.refresh(record)

        logger.info(f"Generated {len(records)} names in batch {batch_id} for user {user_id}")
        return records, batch_id

    async def check_domains(self, db: Session, user_id: str, name_ids: List[str]):
        """Re-check stored names the user owns and write the results back"""
        names = db.query(BrandName).filter(
            BrandName.id.in_(name_ids),
            BrandName.user_id == user_id,
        ).all()
        if not names:
            raise NameNotFoundError("No names found")

        results = await self.domain_checker.check_names([{"name": n.name, "id": n.id} for n in names])

        by_id = {n.id: n for n in names}
        for result in results:
            name = by_id[result.id]
            name.domain_available = result.domain_available
            name.domain_checked_at = result.checked_at
            name.available_extensions = result.available_extensions
        db.commit()
        return results


class BrandNameService:
    @staticmethod
    def get_names(
        db: Session,
        user_id: str,
        brand_profile_id: Optional[str] = None,
        favorites_only: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> List[BrandName]:
        query = db.query(BrandName).filter(BrandName.user_id == user_id)
        if brand_profile_id:
            query = query.filter(BrandName.brand_profile_id == brand_profile_id)
        if favorites_only:
            query = query.filter(BrandName.is_favorite.is_(True))
        return query.order_by(BrandName.created_at.desc()).offset(offset).limit(limit).all()

    @staticmethod
    def get_name(db: Session, name_id: str, user_id: str) -> BrandName:
        name = db.query(BrandName).filter(
            BrandName.id == name_id,
            BrandName.user_id == user_id,
        ).first()
        if name is None:
            raise NameNotFoundError()
        return name

    @staticmethod
    def set_favorite(db: Session, name_id: str, user_id: str, is_favorite: bool) -> BrandName:
        name = BrandNameService.get_name(db, name_id, user_id)
        name.is_favorite = is_favorite
        db.commit()
        db.refresh(name)
        return name

    @staticmethod
    def claim(db: Session, name_id: str, user_id: str) -> BrandName:
        name = BrandNameService.get_name(db, name_id, user_id)
        name.is_claimed = True
        db.commit()
        db.refresh(name)
        return name

    @staticmethod
    def delete_name(db: Session, name_id: str, user_id: str) -> None:
        name = BrandNameService.get_name(db, name_id, user_id)
        db.delete(name)
        db.commit()

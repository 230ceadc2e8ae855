from pydantic import BaseModel
from datetime import datetime
from typing import Optional, List

from .logo import Pagination

class NameGenerateRequest(BaseModel):
    brandProfileId: Optional[str] = None
    niche: Optional[str] = None
    style: str = "modern"
    keywords: List[str] = []
    count: int = 10
    checkDomains: bool = True

class DomainCheckRequest(BaseModel):
    nameIds: Optional[List[str]] = None

class FavoriteUpdate(BaseModel):
    isFavorite: bool

class BrandName(BaseModel):
    id: str
    brandProfileId: Optional[str] = None
    name: str
    niche: str
    style: Optional[str] = None
    reasoning: Optional[str] = None
    domainAvailable: Optional[bool] = None
    domainCheckedAt: Optional[datetime] = None
    availableExtensions: List[str] = []
    isFavorite: bool = False
    isClaimed: bool = False
    generationBatchId: Optional[str] = None
    createdAt: Optional[datetime] = None

    @classmethod
    def from_model(cls, name) -> "BrandName":
        return cls(
            id=name.id,
            brandProfileId=name.brand_profile_id,
            name=name.name,
            niche=name.niche,
            style=name.style,
            reasoning=name.reasoning,
            domainAvailable=name.domain_available,
            domainCheckedAt=name.domain_checked_at,
            availableExtensions=name.available_extensions or [],
            isFavorite=bool(name.is_favorite),
            isClaimed=bool(name.is_claimed),
            generationBatchId=name.generation_batch_id,
            createdAt=name.created_at,
        )

class NameGenerateResponse(BaseModel):
    success: bool = True
    names: List[BrandName]
    batchId: str
    domainCheckEnabled: bool

class DomainResult(BaseModel):
    id: Optional[str] = None
    name: str
    domainAvailable: Optional[bool] = None
    availableExtensions: List[str] = []

class DomainCheckResponse(BaseModel):
    success: bool = True
    results: List[DomainResult]

class NamesResponse(BaseModel):
    success: bool = True
    names: List[BrandName]
    pagination: Pagination

class NameResponse(BaseModel):
    success: bool = True
    name: BrandName

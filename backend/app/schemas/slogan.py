from pydantic import BaseModel
from datetime import datetime
from typing import Optional, List

from .logo import Pagination

class SloganGenerateRequest(BaseModel):
    brandProfileId: Optional[str] = None
    companyName: Optional[str] = None
    industry: Optional[str] = None
    brandPersonality: Optional[str] = None
    keywords: List[str] = []
    tone: str = "casual"
    count: int = 10

class SloganExportRequest(BaseModel):
    sloganIds: Optional[List[str]] = None
    format: str = "csv"

class Slogan(BaseModel):
    id: str
    brandProfileId: Optional[str] = None
    text: str
    companyName: str
    industry: str
    brandPersonality: str
    tone: Optional[str] = None
    keywords: List[str] = []
    isFavorite: bool = False
    favoritedAt: Optional[datetime] = None
    generationBatchId: Optional[str] = None
    createdAt: Optional[datetime] = None

    @classmethod
    def from_model(cls, slogan) -> "Slogan":
        return cls(
            id=slogan.id,
            brandProfileId=slogan.brand_profile_id,
            text=slogan.text,
            companyName=slogan.company_name,
            industry=slogan.industry,
            brandPersonality=slogan.brand_personality,
            tone=slogan.tone,
            keywords=slogan.keywords or [],
            isFavorite=bool(slogan.is_favorite),
            favoritedAt=slogan.favorited_at,
            generationBatchId=slogan.generation_batch_id,
            createdAt=slogan.created_at,
        )

class SloganGenerateResponse(BaseModel):
    success: bool = True
    slogans: List[Slogan]
    batchId: str
    fallback: bool = False

class SlogansResponse(BaseModel):
    success: bool = True
    slogans: List[Slogan]
    pagination: Pagination

class SloganResponse(BaseModel):
    success: bool = True
    slogan: Slogan

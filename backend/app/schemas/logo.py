from pydantic import BaseModel
from datetime import datetime
from typing import Optional, List, Dict, Any

from .job import JobStatus

class LogoGenerateRequest(BaseModel):
    brandProfileId: Optional[str] = None
    style: str = "modern"
    concept: Optional[str] = None
    colors: List[str] = []
    includeText: bool = False
    iterations: int = 4

class LogoGenerateResponse(BaseModel):
    success: bool = True
    jobId: str
    status: str = "processing"
    message: str

class Asset(BaseModel):
    id: str
    brandProfileId: Optional[str] = None
    assetType: str
    fileName: str
    filePath: str
    fileUrl: str
    fileSize: Optional[int] = None
    mimeType: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    isPrimary: bool = False
    aiPrompt: Optional[str] = None
    aiModel: Optional[str] = None
    generationParams: Optional[Dict[str, Any]] = None
    createdAt: Optional[datetime] = None

    @classmethod
    def from_model(cls, asset) -> "Asset":
        return cls(
            id=asset.id,
            brandProfileId=asset.brand_profile_id,
            assetType=asset.asset_type,
            fileName=asset.file_name,
            filePath=asset.file_path,
            fileUrl=asset.file_url,
            fileSize=asset.file_size,
            mimeType=asset.mime_type,
            width=asset.width,
            height=asset.height,
            isPrimary=bool(asset.is_primary),
            aiPrompt=asset.ai_prompt,
            aiModel=asset.ai_model,
            generationParams=asset.generation_params,
            createdAt=asset.created_at,
        )

class Pagination(BaseModel):
    limit: int
    offset: int
    hasMore: bool

class LogoJobResponse(BaseModel):
    success: bool = True
    job: JobStatus
    assets: List[Asset] = []

class AssetsResponse(BaseModel):
    success: bool = True
    assets: List[Asset]
    pagination: Pagination

class AssetResponse(BaseModel):
    success: bool = True
    asset: Asset

class MessageResponse(BaseModel):
    success: bool = True
    message: str

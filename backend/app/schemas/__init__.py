from .job import JobSummary, JobStatus, JobsResponse
from .logo import (
    LogoGenerateRequest, LogoGenerateResponse, LogoJobResponse,
    Asset, AssetsResponse, AssetResponse, Pagination, MessageResponse
)
from .name import (
    NameGenerateRequest, NameGenerateResponse, DomainCheckRequest, DomainCheckResponse,
    DomainResult, FavoriteUpdate, BrandName, NamesResponse, NameResponse
)
from .social_post import (
    SocialPostGenerateRequest, SocialPostGenerateResponse, SocialPostUpdate, ScheduleRequest,
    SocialPost, SocialPostsResponse, SocialPostResponse, PlatformInfo, PlatformsResponse
)
from .slogan import (
    SloganGenerateRequest, SloganGenerateResponse, SloganExportRequest,
    Slogan, SlogansResponse, SloganResponse
)

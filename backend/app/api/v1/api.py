from fastapi import APIRouter

from app.api.v1.endpoints import logos, names, slogans, social_posts, analytics

api_router = APIRouter()

api_router.include_router(logos.router, prefix="/logos", tags=["logos"])
api_router.include_router(names.router, prefix="/names", tags=["names"])
api_router.include_router(slogans.router, prefix="/slogans", tags=["slogans"])
api_router.include_router(social_posts.router, prefix="/social-posts", tags=["social_posts"])
api_router.include_router(analytics.router, prefix="/analytics", tags=["analytics"])

"""API v1 router aggregation."""

from fastapi import APIRouter

from app.api.v1.endpoints import health, pr, sessions

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(sessions.router, prefix="/sessions", tags=["sessions"])
api_router.include_router(pr.router, prefix="/records", tags=["records"])

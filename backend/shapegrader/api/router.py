"""Master API router: mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from shapegrader.api import health, ranking, score

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(score.router)
api_router.include_router(ranking.router)

"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from shapegrader.engine import get_registry
from shapegrader.models.responses import HealthResponse, ShapeInfo

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        analyzers_registered=get_registry().count,
    )


@router.get("/shapes", response_model=list[ShapeInfo])
async def shapes() -> list[ShapeInfo]:
    return [
        ShapeInfo(shape=spec.shape, min_points=spec.min_points, description=spec.description)
        for spec in get_registry().all()
    ]

"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from shapegrader.engine.registry import Shape


class PointIn(BaseModel):
    x: float
    y: float


class ScoreRequest(BaseModel):
    points: list[PointIn] = Field(..., description="Sampled stroke positions in drawing order")

    def as_pairs(self) -> list[tuple[float, float]]:
        return [(p.x, p.y) for p in self.points]


class SubmitScoreRequest(BaseModel):
    user_id: str = Field(..., min_length=1, description="Opaque user identifier")
    shape: Shape
    score: float = Field(..., ge=0.0, le=100.0, allow_inf_nan=False)

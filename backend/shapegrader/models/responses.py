"""API response models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from shapegrader.engine.registry import Shape
from shapegrader.engine.result import ScoringResult
from shapegrader.ranking.board import RankingEntry, RankingSnapshot, SubmitOutcome
from shapegrader.ranking.periods import RankingPeriod, period_label


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    analyzers_registered: int = 0


class ShapeInfo(BaseModel):
    shape: Shape
    min_points: int
    description: str = ""


class DetailsOut(BaseModel):
    accuracy: int = Field(0, ge=0, le=100)
    smoothness: int = Field(0, ge=0, le=100)
    completeness: int = Field(0, ge=0, le=100)


class ScoreResponse(BaseModel):
    shape: Shape
    score: float
    score_text: str
    feedback: str
    details: DetailsOut
    features: dict[str, float] = Field(default_factory=dict)

    @classmethod
    def from_result(cls, result: ScoringResult) -> ScoreResponse:
        return cls(
            shape=result.shape,
            score=float(result.score),
            score_text=result.score_text,
            feedback=result.feedback,
            details=DetailsOut(
                accuracy=result.details.accuracy,
                smoothness=result.details.smoothness,
                completeness=result.details.completeness,
            ),
            features=dict(result.features),
        )


class SubmitScoreResponse(BaseModel):
    best_score: float
    is_new_record: bool
    previous_best: float | None = None
    period: str

    @classmethod
    def from_outcome(cls, outcome: SubmitOutcome, period: RankingPeriod) -> SubmitScoreResponse:
        return cls(
            best_score=float(outcome.best.score),
            is_new_record=outcome.is_new_record,
            previous_best=float(outcome.previous_best) if outcome.previous_best is not None else None,
            period=period_label(period, outcome.best.period),
        )


class RankingEntryOut(BaseModel):
    rank: int
    user_id: str
    score: float
    updated_at: datetime

    @classmethod
    def from_entry(cls, entry: RankingEntry) -> RankingEntryOut:
        return cls(
            rank=entry.rank,
            user_id=entry.user_id,
            score=float(entry.score),
            updated_at=entry.updated_at,
        )


class RankingResponse(BaseModel):
    shape: Shape
    period: str
    ranking: list[RankingEntryOut] = Field(default_factory=list)
    user_rank: int | None = None
    user_entry: RankingEntryOut | None = None

    @classmethod
    def from_snapshot(cls, snapshot: RankingSnapshot, period: RankingPeriod) -> RankingResponse:
        return cls(
            shape=snapshot.shape,
            period=period_label(period, snapshot.period),
            ranking=[RankingEntryOut.from_entry(e) for e in snapshot.entries],
            user_rank=snapshot.user_rank,
            user_entry=RankingEntryOut.from_entry(snapshot.user_entry) if snapshot.user_entry else None,
        )

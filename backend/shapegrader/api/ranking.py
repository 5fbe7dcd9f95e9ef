"""Best-score submission and leaderboard endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from shapegrader.config import Settings
from shapegrader.dependencies import get_scoreboard, get_settings
from shapegrader.engine import Shape
from shapegrader.models.requests import SubmitScoreRequest
from shapegrader.models.responses import RankingResponse, SubmitScoreResponse
from shapegrader.ranking.board import ScoreBoard

router = APIRouter()


@router.post("/scores/submit", response_model=SubmitScoreResponse)
def submit_score(
    req: SubmitScoreRequest,
    board: ScoreBoard = Depends(get_scoreboard),
) -> SubmitScoreResponse:
    outcome = board.submit(req.user_id, req.shape, req.score)
    return SubmitScoreResponse.from_outcome(outcome, board.period)


@router.get("/ranking", response_model=RankingResponse)
def ranking(
    shape: Shape = Query(...),
    user_id: str | None = Query(None),
    board: ScoreBoard = Depends(get_scoreboard),
    settings: Settings = Depends(get_settings),
) -> RankingResponse:
    snapshot = board.ranking(shape, user_id=user_id, limit=settings.ranking_limit)
    return RankingResponse.from_snapshot(snapshot, board.period)

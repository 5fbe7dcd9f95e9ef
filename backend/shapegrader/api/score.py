"""POST /api/score/{shape}: grade one freehand stroke."""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends, HTTPException

from shapegrader.config import Settings
from shapegrader.dependencies import get_settings
from shapegrader.engine import Shape, score_shape
from shapegrader.models.requests import ScoreRequest
from shapegrader.models.responses import ScoreResponse

logger = logging.getLogger(__name__)

router = APIRouter()


# Sync endpoint: FastAPI runs it in the threadpool, scoring is CPU-bound
@router.post("/score/{shape}", response_model=ScoreResponse)
def score(shape: Shape, req: ScoreRequest, settings: Settings = Depends(get_settings)) -> ScoreResponse:
    if len(req.points) > settings.max_path_points:
        raise HTTPException(
            status_code=422,
            detail=f"Path has {len(req.points)} points; at most {settings.max_path_points} are accepted",
        )

    start = time.perf_counter()
    result = score_shape(shape, req.as_pairs())
    elapsed = (time.perf_counter() - start) * 1000
    logger.debug("Scored %s (%d points) = %s in %.1fms", shape.value, len(req.points), result.score_text, elapsed)

    return ScoreResponse.from_result(result)

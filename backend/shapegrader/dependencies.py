"""FastAPI dependency injection."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from shapegrader.config import settings
from shapegrader.ranking.board import ScoreBoard


def get_settings():
    return settings


@lru_cache(maxsize=1)
def get_scoreboard() -> ScoreBoard:
    data_file = Path(settings.ranking_data_file) if settings.ranking_data_file else None
    return ScoreBoard(period=settings.ranking_period, data_file=data_file)

"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings

from shapegrader.ranking.periods import RankingPeriod


class Settings(BaseSettings):
    shapegrader_env: str = "development"
    shapegrader_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Longest path accepted for scoring; cost grows with point count
    max_path_points: int = 20000

    # Best-score board
    ranking_period: RankingPeriod = RankingPeriod.MONTHLY
    ranking_limit: int = 10
    ranking_data_file: str = ""  # empty = in-memory only

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()

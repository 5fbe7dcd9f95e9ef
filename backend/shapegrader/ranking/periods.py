"""Ranking periods: the calendar window a best score is kept for."""

from __future__ import annotations

import enum
from datetime import datetime, timezone


class RankingPeriod(str, enum.Enum):
    ALL_TIME = "all_time"
    WEEKLY = "weekly"  # ISO-8601 week
    MONTHLY = "monthly"


def period_key(period: RankingPeriod, when: datetime | None = None) -> tuple[int, int]:
    """(year, index) identifying the window containing ``when`` (UTC now by default)."""
    when = when or datetime.now(timezone.utc)
    if period is RankingPeriod.WEEKLY:
        iso = when.isocalendar()
        return (iso[0], iso[1])
    if period is RankingPeriod.MONTHLY:
        return (when.year, when.month)
    return (0, 0)


def period_label(period: RankingPeriod, key: tuple[int, int]) -> str:
    """Human-readable window, e.g. '2024-03' or '2024-W09'."""
    year, index = key
    if period is RankingPeriod.WEEKLY:
        return f"{year}-W{index:02d}"
    if period is RankingPeriod.MONTHLY:
        return f"{year}-{index:02d}"
    return "all-time"

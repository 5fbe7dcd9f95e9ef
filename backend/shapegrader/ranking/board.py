"""Best-score board: per-user, per-shape high-water marks for the current period.

A submission only replaces the stored best when it is strictly greater. Records can
optionally be appended to a JSONL file and are replayed on startup.
"""

from __future__ import annotations

import json
import logging
import math
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from pathlib import Path

from shapegrader.engine.registry import Shape
from shapegrader.engine.result import quantize_score
from shapegrader.ranking.periods import RankingPeriod, period_key

logger = logging.getLogger(__name__)


@dataclass
class BestScore:
    """A user's best score for one shape within one ranking period."""

    user_id: str
    shape: Shape
    score: Decimal
    period: tuple[int, int]
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_json(self) -> str:
        return json.dumps(
            {
                "user_id": self.user_id,
                "shape": self.shape.value,
                "score": str(self.score),
                "period": list(self.period),
                "updated_at": self.updated_at.isoformat(),
            }
        )

    @classmethod
    def from_json(cls, line: str) -> BestScore:
        data = json.loads(line)
        return cls(
            user_id=data["user_id"],
            shape=Shape(data["shape"]),
            score=Decimal(data["score"]),
            period=(int(data["period"][0]), int(data["period"][1])),
            updated_at=as_utc(datetime.fromisoformat(data["updated_at"])),
        )


@dataclass(frozen=True)
class SubmitOutcome:
    best: BestScore
    is_new_record: bool
    previous_best: Decimal | None = None


@dataclass(frozen=True)
class RankingEntry:
    rank: int
    user_id: str
    score: Decimal
    updated_at: datetime


@dataclass(frozen=True)
class RankingSnapshot:
    shape: Shape
    period: tuple[int, int]
    entries: list[RankingEntry]
    user_rank: int | None = None
    # Filled only when the user ranks outside the returned entries
    user_entry: RankingEntry | None = None


def as_utc(when: datetime | None) -> datetime:
    """UTC-aware timestamp; naive values are taken to be UTC already."""
    if when is None:
        return datetime.now(timezone.utc)
    if when.tzinfo is None:
        return when.replace(tzinfo=timezone.utc)
    return when.astimezone(timezone.utc)


def validate_score(score: float | Decimal) -> Decimal:
    """Reject non-finite or out-of-range scores; fix the rest to 3 decimals."""
    value = float(score)
    if not math.isfinite(value) or not 0.0 <= value <= 100.0:
        raise ValueError(f"Score must be between 0.000 and 100.000, got {score!r}")
    return quantize_score(Decimal(str(score)) if isinstance(score, float) else Decimal(score))


class ScoreBoard:
    """Thread-safe best-score store keyed by (user, shape, period)."""

    def __init__(
        self,
        period: RankingPeriod = RankingPeriod.MONTHLY,
        data_file: Path | None = None,
    ) -> None:
        self.period = period
        self.data_file = data_file
        self._best: dict[tuple[str, Shape, tuple[int, int]], BestScore] = {}
        self._lock = threading.Lock()
        if data_file is not None:
            data_file.parent.mkdir(parents=True, exist_ok=True)
            self._replay()

    def submit(
        self,
        user_id: str,
        shape: Shape | str,
        score: float | Decimal,
        now: datetime | None = None,
    ) -> SubmitOutcome:
        shape = Shape(shape)
        value = validate_score(score)
        now = as_utc(now)
        key = (user_id, shape, period_key(self.period, now))

        with self._lock:
            existing = self._best.get(key)
            if existing is not None and value <= existing.score:
                return SubmitOutcome(best=existing, is_new_record=False, previous_best=existing.score)

            best = BestScore(user_id=user_id, shape=shape, score=value, period=key[2], updated_at=now)
            self._best[key] = best
            self._append(best)

        logger.info("New best %s for %s on %s", value, user_id, shape.value)
        return SubmitOutcome(
            best=best,
            is_new_record=True,
            previous_best=existing.score if existing is not None else None,
        )

    def best(self, user_id: str, shape: Shape | str, now: datetime | None = None) -> BestScore | None:
        key = (user_id, Shape(shape), period_key(self.period, as_utc(now)))
        with self._lock:
            return self._best.get(key)

    def ranking(
        self,
        shape: Shape | str,
        user_id: str | None = None,
        limit: int = 10,
        now: datetime | None = None,
    ) -> RankingSnapshot:
        """Top ``limit`` scores for the current period, best first, earliest on ties."""
        shape = Shape(shape)
        current = period_key(self.period, as_utc(now))
        with self._lock:
            rows = [b for (_, s, p), b in self._best.items() if s is shape and p == current]

        rows.sort(key=lambda b: (-b.score, b.updated_at))

        # Competition ranking: tied scores share a rank, the next distinct score skips ahead
        ranks: list[int] = []
        for i, b in enumerate(rows):
            ranks.append(ranks[-1] if i and b.score == rows[i - 1].score else i + 1)

        entries = [
            RankingEntry(rank=rank, user_id=b.user_id, score=b.score, updated_at=b.updated_at)
            for rank, b in zip(ranks[:limit], rows[:limit])
        ]

        user_rank = None
        user_entry = None
        position = next((i for i, b in enumerate(rows) if b.user_id == user_id), None) if user_id else None
        if position is not None:
            user_rank = ranks[position]
            if position >= limit:
                mine = rows[position]
                user_entry = RankingEntry(
                    rank=user_rank, user_id=mine.user_id, score=mine.score, updated_at=mine.updated_at
                )

        return RankingSnapshot(
            shape=shape,
            period=current,
            entries=entries,
            user_rank=user_rank,
            user_entry=user_entry,
        )

    def _append(self, best: BestScore) -> None:
        if self.data_file is None:
            return
        with open(self.data_file, "a", encoding="utf-8") as f:
            f.write(best.to_json() + "\n")

    def _replay(self) -> None:
        """Rebuild the in-memory board from the JSONL log; later lines win only if higher."""
        if self.data_file is None or not self.data_file.exists():
            return
        loaded = 0
        with open(self.data_file, encoding="utf-8") as f:
            for lineno, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    record = BestScore.from_json(line)
                except (ValueError, KeyError, TypeError, IndexError, InvalidOperation) as e:
                    logger.warning("Skipping malformed record at %s:%d: %s", self.data_file, lineno, e)
                    continue
                key = (record.user_id, record.shape, record.period)
                existing = self._best.get(key)
                if existing is None or record.score > existing.score:
                    self._best[key] = record
                    loaded += 1
        logger.info("Loaded %d best scores from %s", loaded, self.data_file)

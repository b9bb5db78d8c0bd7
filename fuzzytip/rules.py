"""Fuzzy rule base that maps price, waiting time and quality to a tip."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

TIP_LEVELS = (
    "very very low",
    "very low",
    "low",
    "mid",
    "high",
    "very high",
    "very very high",
)

_RELATIVE_LIMIT = 0.5
_NEGLIGIBLE_SCORE = 1e-5

# (quality, price, time) -> index into TIP_LEVELS
_RULES = {
    ("low", "high", "high"): 0,
    ("low", "mid", "high"): 1,
    ("low", "low", "high"): 2,
    ("low", "high", "mid"): 1,
    ("low", "mid", "mid"): 2,
    ("low", "low", "mid"): 2,
    ("low", "high", "low"): 1,
    ("low", "mid", "low"): 2,
    ("low", "low", "low"): 2,
    ("mid", "high", "high"): 1,
    ("mid", "mid", "high"): 2,
    ("mid", "low", "high"): 3,
    ("mid", "high", "mid"): 2,
    ("mid", "mid", "mid"): 3,
    ("mid", "low", "mid"): 3,
    ("mid", "high", "low"): 2,
    ("mid", "mid", "low"): 3,
    ("mid", "low", "low"): 4,
    ("high", "high", "high"): 3,
    ("high", "mid", "high"): 3,
    ("high", "low", "high"): 4,
    ("high", "high", "mid"): 3,
    ("high", "mid", "mid"): 4,
    ("high", "low", "mid"): 5,
    ("high", "high", "low"): 4,
    ("high", "mid", "low"): 5,
    ("high", "low", "low"): 6,
}


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


@dataclass(frozen=True)
class Membership:
    """Degrees of membership in the high, mid and low fuzzy sets."""

    high: float
    mid: float
    low: float

    def degree(self, name: str) -> float:
        """Return the degree for the set called ``name``."""
        return getattr(self, name)


@dataclass(frozen=True)
class MembershipCurve:
    """Sampled membership functions over one input's range."""

    x: tuple[float, ...]
    high: tuple[float, ...]
    mid: tuple[float, ...]
    low: tuple[float, ...]

    def __len__(self) -> int:
        return len(self.x)


def triangle_membership(value: float, scale: float) -> Membership:
    """Triangular high/mid/low memberships of ``|value / scale|``."""
    if scale == 0:
        raise ValueError("scale must be non-zero")
    ratio = abs(value / scale)
    rl = _RELATIVE_LIMIT
    high = _clamp((ratio - rl) / rl)
    if ratio > rl:
        mid = _clamp(1.0 - (ratio - rl) / rl)
    else:
        mid = _clamp(ratio / rl)
    low = _clamp(1.0 - ratio / rl)
    return Membership(high=high, mid=mid, low=low)


def _curve(start: float, span: float, resolution: int) -> MembershipCurve:
    xs = tuple(start + span * k / resolution for k in range(resolution))
    members = [triangle_membership(x - start, span) for x in xs]
    return MembershipCurve(
        x=xs,
        high=tuple(m.high for m in members),
        mid=tuple(m.mid for m in members),
        low=tuple(m.low for m in members),
    )


class FuzzyRule:
    """Tip rule base; remembers the last evaluation for display."""

    min_price = 15.0
    scale_price = 50.0
    min_time = 15.0
    scale_time = 60.0
    scale_quality = 1.0

    def __init__(self, resolution: int = 100) -> None:
        if resolution < 1:
            raise ValueError("resolution must be at least 1")
        self.price_curve = _curve(
            self.min_price, self.scale_price - self.min_price, resolution
        )
        self.time_curve = _curve(
            self.min_time, self.scale_time - self.min_time, resolution
        )
        self.quality_curve = _curve(0.0, self.scale_quality, resolution)
        self.scores_show: list[float] = []
        self.scores_pos: list[float] = []
        self.last_price: float | None = None
        self.last_time: float | None = None
        self.last_quality: float | None = None
        self.last_result: float | None = None

    def normalize_model_input(
        self, price: float, wtime: float, quality: float
    ) -> np.ndarray:
        """Scale raw inputs into the network's input vector."""
        return np.array(
            [
                (price - 0.5 * self.scale_price) / self.scale_price,
                (wtime - 0.5 * self.scale_time) / self.scale_time,
                (quality - 0.5) / math.sqrt(12.0),
            ],
            dtype=np.float32,
        )

    def apply_rules(self, price: float, wtime: float, quality: float) -> float:
        """Evaluate the rule base and return the defuzzified tip in [0, 1]."""
        self.last_price = price
        self.last_time = wtime
        self.last_quality = quality

        price_m = triangle_membership(
            price - self.min_price, self.scale_price - self.min_price
        )
        time_m = triangle_membership(
            wtime - self.min_time, self.scale_time - self.min_time
        )
        quality_m = triangle_membership(quality, self.scale_quality)

        groups: list[list[float]] = [[] for _ in TIP_LEVELS]
        for (q, p, t), level in _RULES.items():
            strength = min(
                quality_m.degree(q), min(price_m.degree(p), time_m.degree(t))
            )
            groups[level].append(strength)

        tip = self.defuzzify(groups)
        self.last_result = tip
        return tip

    def defuzzify(self, groups: Sequence[Iterable[float]]) -> float:
        """Weighted average of singleton positions by each group's maximum."""
        if len(groups) < 2:
            raise ValueError("at least two output groups are required")
        scores = [max(group, default=0.0) for group in groups]
        sum_score = sum(scores)
        if sum_score < _NEGLIGIBLE_SCORE:
            scores[0] = 1.0
        step = 1.0 / (len(scores) - 1)
        diracs = [k * step for k in range(len(scores))]
        if sum_score == 0:
            result = math.nan
        else:
            result = sum(pos * score / sum_score for pos, score in zip(diracs, scores))
        self.scores_show = scores
        self.scores_pos = diracs
        return result
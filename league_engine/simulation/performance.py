"""
On-the-day performance variance: a categorical multiplier applied to each side's xG.
Most matches are normal; occasionally a side has a miracle or a meltdown.
"""
from __future__ import annotations

from dataclasses import dataclass

from .rng import SeededRNG


@dataclass(frozen=True)
class PerformanceLevel:
    name: str
    weight: float  # percent
    low: float
    high: float


PERFORMANCE_LEVELS: tuple[PerformanceLevel, ...] = (
    PerformanceLevel("disaster", 1, 0.20, 0.60),
    PerformanceLevel("poor", 10, 0.60, 0.85),
    PerformanceLevel("normal", 70, 0.85, 1.15),
    PerformanceLevel("good", 12, 1.15, 1.40),
    PerformanceLevel("great", 5, 1.40, 1.80),
    PerformanceLevel("miracle", 2, 1.80, 2.30),
)


def sample_performance_level(
    rng: SeededRNG, levels: tuple[PerformanceLevel, ...] = PERFORMANCE_LEVELS
) -> PerformanceLevel:
    return rng.choices(levels, weights=[lvl.weight for lvl in levels], k=1)[0]


def generate_performance_modifier(
    rng: SeededRNG, levels: tuple[PerformanceLevel, ...] = PERFORMANCE_LEVELS
) -> float:
    """Draw a level by weight, then a uniform multiplier within its range (0.2 - 2.3)."""
    level = sample_performance_level(rng, levels)
    return level.low + rng.random() * (level.high - level.low)

"""
Seeded RNG for deterministic, replayable simulations.
Owned and passed explicitly; the engine never touches the global random module.
"""
from __future__ import annotations

import random


class SeededRNG:
    """Wrapper around random.Random for reproducible simulations."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)
        self._seed = seed

    @property
    def seed(self) -> int | None:
        return self._seed

    def random(self) -> float:
        return self._rng.random()

    def uniform(self, a: float, b: float) -> float:
        return self._rng.uniform(a, b)

    def choices(self, population, weights=None, *, cum_weights=None, k=1):
        return self._rng.choices(population, weights=weights, cum_weights=cum_weights, k=k)

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)

    def spawn(self) -> SeededRNG:
        """Child RNG seeded from this one; used to hand each match its own source."""
        return SeededRNG(self._rng.randint(0, 2**31 - 1))

    def getstate(self):
        return self._rng.getstate()

    def setstate(self, state) -> None:
        self._rng.setstate(state)

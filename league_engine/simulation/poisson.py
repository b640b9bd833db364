"""
Poisson sampling for goal counts (Knuth's algorithm).
"""
from __future__ import annotations

import math

from .rng import SeededRNG


def poisson_sample(lam: float, rng: SeededRNG) -> int:
    """
    Multiply uniform draws until the running product falls to e^-lam or below;
    the number of draws minus one is the sample. lam == 0 always yields 0.
    """
    if lam < 0:
        raise ValueError(f"Lambda must be non-negative, got {lam}")
    if lam == 0:
        return 0
    limit = math.exp(-lam)
    k = 0
    p = 1.0
    while True:
        k += 1
        p *= rng.random()
        if p <= limit:
            return k - 1

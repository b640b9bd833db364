"""
Match Simulator: logistic xG + performance variance + Poisson goals.
Uses an injected SeededRNG; same strengths + same RNG sequence => same result.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from league_engine.models import Form, Match, MatchResult

from .performance import PERFORMANCE_LEVELS, PerformanceLevel, generate_performance_modifier
from .poisson import poisson_sample
from .rng import SeededRNG
from .xg import DEFAULT_CALIBRATION, XGCalibration, calculate_base_xg, calculate_form_score

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationDetail:
    """Intermediate values for diagnostics."""
    home_base_xg: float
    away_base_xg: float
    home_modifier: float
    away_modifier: float
    result: MatchResult

    @property
    def home_xg(self) -> float:
        return self.home_base_xg * self.home_modifier

    @property
    def away_xg(self) -> float:
        return self.away_base_xg * self.away_modifier


class MatchSimulator:
    """
    Stateless apart from its random source. The RNG can be overridden per call so a
    caller can hand each match its own child source.
    """

    def __init__(
        self,
        rng: SeededRNG | None = None,
        calibration: XGCalibration = DEFAULT_CALIBRATION,
        performance_levels: tuple[PerformanceLevel, ...] = PERFORMANCE_LEVELS,
    ) -> None:
        self.rng = rng or SeededRNG()
        self.calibration = calibration
        self.performance_levels = performance_levels

    def expected_goals(
        self,
        home_strength: int,
        away_strength: int,
        home_form_score: float = 0.0,
        away_form_score: float = 0.0,
        neutral_venue: bool = False,
    ) -> tuple[float, float]:
        """Base xG per side before performance variance."""
        home_xg = calculate_base_xg(
            home_strength, not neutral_venue, home_form_score, self.calibration
        )
        away_xg = calculate_base_xg(away_strength, False, away_form_score, self.calibration)
        return home_xg, away_xg

    def simulate_detailed(
        self,
        home_strength: int,
        away_strength: int,
        home_form_score: float = 0.0,
        away_form_score: float = 0.0,
        neutral_venue: bool = False,
        rng: SeededRNG | None = None,
    ) -> SimulationDetail:
        rng = rng or self.rng
        home_xg, away_xg = self.expected_goals(
            home_strength, away_strength, home_form_score, away_form_score, neutral_venue
        )
        home_mod = generate_performance_modifier(rng, self.performance_levels)
        away_mod = generate_performance_modifier(rng, self.performance_levels)
        result = MatchResult(
            home_goals=poisson_sample(home_xg * home_mod, rng),
            away_goals=poisson_sample(away_xg * away_mod, rng),
        )
        return SimulationDetail(
            home_base_xg=home_xg,
            away_base_xg=away_xg,
            home_modifier=home_mod,
            away_modifier=away_mod,
            result=result,
        )

    def simulate(
        self,
        home_strength: int,
        away_strength: int,
        home_form_score: float = 0.0,
        away_form_score: float = 0.0,
        neutral_venue: bool = False,
        rng: SeededRNG | None = None,
    ) -> MatchResult:
        return self.simulate_detailed(
            home_strength,
            away_strength,
            home_form_score,
            away_form_score,
            neutral_venue=neutral_venue,
            rng=rng,
        ).result

    def simulate_match(
        self,
        match: Match,
        home_form: Form | None = None,
        away_form: Form | None = None,
        rng: SeededRNG | None = None,
    ) -> Match:
        """Return a new Match with a result attached; the input match is untouched."""
        detail = self.simulate_detailed(
            match.home_team.strength,
            match.away_team.strength,
            calculate_form_score(home_form),
            calculate_form_score(away_form),
            neutral_venue=match.neutral_venue,
            rng=rng,
        )
        logger.debug(
            "%s %s %s (xG %.2f-%.2f)",
            match.home_team.name,
            f"{detail.result.home_goals}-{detail.result.away_goals}",
            match.away_team.name,
            detail.home_xg,
            detail.away_xg,
        )
        return match.with_result(detail.result)

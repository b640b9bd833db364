"""
Season coordinator: the round-by-round state machine.

not_started -> in_progress(round k of N) -> complete. k only increases; a played round
is never re-simulated. Every operation returns a new Season or raises before building
one, so callers never see a half-updated season.
"""
from __future__ import annotations

import logging
import uuid
from concurrent.futures import ThreadPoolExecutor

from league_engine.errors import NoMoreRounds, RoundAlreadyComplete, RoundNotFound, StrategyConflict
from league_engine.models import League, Match, Season, Standing
from league_engine.simulation import MatchSimulator, SeededRNG

from .registry import StrategyRegistry, default_registry
from .scheduling import FixtureGenerator
from .standings import (
    StandingSorter,
    determine_champion,
    initialize_standings,
    record_results,
    sort_standings,
)

logger = logging.getLogger(__name__)


class SeasonCoordinator:
    """
    Ties fixtures, match simulation and standings together.
    max_workers > 1 simulates the matches of a round in a thread pool; each match gets
    a child RNG drawn in fixture order, so results do not depend on the worker count.
    """

    def __init__(
        self,
        simulator: MatchSimulator | None = None,
        registry: StrategyRegistry | None = None,
        max_workers: int = 1,
    ) -> None:
        self.simulator = simulator or MatchSimulator()
        self.registry = registry or default_registry()
        self.max_workers = max(1, max_workers)

    # ---------- Strategy resolution ----------

    # Strategy objects are accepted only under a name the registry already maps to the
    # same class; seasons store the name and look the strategy up again later.

    def _resolve_generator(self, generator: FixtureGenerator | str) -> FixtureGenerator:
        if isinstance(generator, str):
            return self.registry.get_generator(generator)
        registered = self.registry.get_generator(generator.name)
        if type(registered) is not type(generator):
            raise StrategyConflict(
                f"Fixture strategy name {generator.name!r} is registered to "
                f"{type(registered).__name__}, not {type(generator).__name__}"
            )
        return generator

    def _resolve_sorter(self, sorter: StandingSorter | str) -> StandingSorter:
        if isinstance(sorter, str):
            return self.registry.get_sorter(sorter)
        registered = self.registry.get_sorter(sorter.name)
        if type(registered) is not type(sorter):
            raise StrategyConflict(
                f"Sorting strategy name {sorter.name!r} is registered to "
                f"{type(registered).__name__}, not {type(sorter).__name__}"
            )
        return sorter

    def sorter_for(self, season: Season) -> StandingSorter:
        return self.registry.get_sorter(season.league.tie_break_strategy_name)

    # ---------- Season lifecycle ----------

    def create_season(
        self,
        league: League,
        year: int,
        generator: FixtureGenerator | str = "double-round-robin",
        sorter: StandingSorter | str | None = None,
        season_id: str | None = None,
    ) -> Season:
        """Generate fixtures once, zero the standings, current_round = 0."""
        gen = self._resolve_generator(generator)
        srt = self._resolve_sorter(sorter if sorter is not None else league.tie_break_strategy_name)
        if srt.name != league.tie_break_strategy_name:
            league = league.with_tie_break_strategy(srt.name)
        rounds = gen.generate(league.teams)
        season = Season(
            id=season_id or str(uuid.uuid4()),
            year=year,
            league=league,
            fixture_strategy_name=gen.name,
            total_rounds=gen.total_rounds(league.team_count),
            rounds=tuple(rounds),
            standings=tuple(initialize_standings(league.teams)),
            current_round=0,
        )
        logger.info(
            "Created season %s (%s %d): %d teams, %d rounds, %s / %s",
            season.id, league.name, year, league.team_count, season.total_rounds, gen.name, srt.name,
        )
        return season

    def _simulate_matches(self, matches: list[Match], standings: tuple[Standing, ...]) -> list[Match]:
        forms = {s.team.id: s.form for s in standings}
        rngs = [self.simulator.rng.spawn() for _ in matches]

        def simulate(args: tuple[Match, SeededRNG]) -> Match:
            match, rng = args
            return self.simulator.simulate_match(
                match, forms.get(match.home_team.id), forms.get(match.away_team.id), rng=rng
            )

        if self.max_workers > 1 and len(matches) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                return list(executor.map(simulate, zip(matches, rngs)))
        return [simulate(args) for args in zip(matches, rngs)]

    def simulate_next_round(self, season: Season) -> Season:
        """Simulate round current_round + 1, fold results, re-rank, check for a champion."""
        round_number = season.current_round + 1
        rnd = season.round(round_number)
        if rnd is None or round_number > season.total_rounds:
            raise NoMoreRounds(f"No more rounds to simulate (season {season.id} is complete)")
        if rnd.is_complete:
            raise RoundAlreadyComplete(f"Round {round_number} already completed")
        sorter = self.sorter_for(season)

        unplayed = [m for m in rnd.matches if not m.has_result]
        simulated = {m.id: m for m in self._simulate_matches(unplayed, season.standings)}
        updated_round = rnd.with_matches([simulated.get(m.id, m) for m in rnd.matches])

        standings = record_results(season.standings, simulated.values())
        standings = sort_standings(standings, sorter)

        rounds_remaining = season.total_rounds - round_number
        updated = (
            season.with_updated_round(updated_round)
            .with_standings(standings)
            .with_current_round(round_number)
        )
        if not updated.has_champion:
            champion_id = determine_champion(standings, rounds_remaining, sorter)
            if champion_id is not None:
                updated = updated.with_champion(champion_id)
                logger.info(
                    "Season %s: %s are champions with %d round(s) to spare",
                    season.id, updated.champion.name, rounds_remaining,
                )
        logger.info(
            "Season %s: round %d/%d simulated (%d matches)",
            season.id, round_number, season.total_rounds, len(simulated),
        )
        return updated

    def simulate_remaining(self, season: Season) -> Season:
        """Advance until current_round == total_rounds. A complete season is returned unchanged."""
        current = season
        while current.current_round < current.total_rounds:
            current = self.simulate_next_round(current)
        return current

    # ---------- Queries ----------

    def get_standings(self, season: Season) -> list[Standing]:
        return list(season.standings)

    def get_fixtures(self, season: Season, round_number: int) -> list[Match]:
        rnd = season.round(round_number)
        if rnd is None:
            raise RoundNotFound(f"Round {round_number} not found (season has {season.total_rounds})")
        return list(rnd.matches)

    def next_fixtures(self, season: Season) -> list[Match]:
        """Matches of the next round to play; empty once the season is complete."""
        rnd = season.round(season.current_round + 1)
        return list(rnd.matches) if rnd else []

    def can_advance(self, season: Season) -> bool:
        return season.current_round < season.total_rounds

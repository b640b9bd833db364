"""
Simulate a full league season in the terminal.
Teams are given as NAME:STRENGTH pairs; each round's scores are printed as they are
played, followed by the final table and the champion.
"""
from __future__ import annotations

import argparse
import logging
import random
import sys
import uuid
from pathlib import Path

# Run from project root: python -m league_engine.run_season
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from league_engine import config
from league_engine.errors import LeagueEngineError
from league_engine.models import League, Season, Team
from league_engine.services import SeasonCoordinator, default_registry
from league_engine.simulation import MatchSimulator, SeededRNG

DEFAULT_TEAMS = (
    "Northbridge:88",
    "Harbour City:80",
    "Eastfield:74",
    "Kingsway:69",
    "Riverside:62",
    "Old Town:55",
)


def parse_team(value: str) -> Team:
    """'Harbour City:80' -> Team. Raises argparse.ArgumentTypeError on bad input."""
    name, sep, strength = value.rpartition(":")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"Expected NAME:STRENGTH, got {value!r}")
    try:
        return Team(id=str(uuid.uuid4()), name=name.strip(), strength=int(strength))
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid team {value!r}: {e}") from e


def _print_round(season: Season, round_number: int) -> None:
    rnd = season.round(round_number)
    if rnd is None:
        return
    print(f"\n  Round {round_number}/{season.total_rounds}")
    for m in rnd.matches:
        print(f"    {m.home_team.name:>20}  {m.score:^5}  {m.away_team.name}")


def _print_table(season: Season) -> None:
    print()
    print("=" * 72)
    print(f"  {season.league.name} {season.year}   ({season.status.value})")
    print("=" * 72)
    print(f"  {'#':>2}  {'Team':<20} {'P':>3} {'W':>3} {'D':>3} {'L':>3} {'GF':>4} {'GA':>4} {'GD':>4} {'Pts':>4}  Form")
    for s in season.standings:
        print(
            f"  {s.position:>2}  {s.team.name:<20} {s.played:>3} {s.won:>3} {s.drawn:>3} {s.lost:>3}"
            f" {s.goals_for:>4} {s.goals_against:>4} {s.goal_difference:>+4} {s.points:>4}  {s.form.as_string()}"
        )
    champion = season.champion
    if champion is not None:
        print(f"\n  CHAMPION: {champion.name}")
    elif season.is_complete:
        print("\n  NO CHAMPION: level on points at the top")
    print()


def run(
    teams: list[Team],
    year: int,
    league_name: str = "Simulated League",
    fixture_strategy: str | None = None,
    standings_strategy: str | None = None,
    seed: int | None = None,
    workers: int | None = None,
    quiet: bool = False,
) -> Season:
    if seed is None:
        seed = random.randint(1, 2**31 - 1)
    coordinator = SeasonCoordinator(
        simulator=MatchSimulator(rng=SeededRNG(seed)),
        registry=default_registry(),
        max_workers=workers if workers is not None else config.SIMULATION_WORKERS,
    )
    league = League(
        id=str(uuid.uuid4()),
        name=league_name,
        teams=tuple(teams),
        tie_break_strategy_name=standings_strategy or config.DEFAULT_STANDINGS_STRATEGY,
    )
    season = coordinator.create_season(league, year, fixture_strategy or config.DEFAULT_FIXTURE_STRATEGY)
    print(f"\n  {league.name} {year}: {league.team_count} teams, {season.total_rounds} rounds [seed={seed}]")
    while coordinator.can_advance(season):
        season = coordinator.simulate_next_round(season)
        if not quiet:
            _print_round(season, season.current_round)
    _print_table(season)
    return season


def main():
    parser = argparse.ArgumentParser(description="Simulate a round-robin league season.")
    parser.add_argument(
        "teams",
        nargs="*",
        type=parse_team,
        metavar="NAME:STRENGTH",
        help="Teams to enter (default: a six-team sample league)",
    )
    parser.add_argument("--name", default="Simulated League", help="League name")
    parser.add_argument("--year", type=int, default=2024, help="Season year (>= 2000)")
    parser.add_argument("--fixtures", default=None, help="Fixture strategy (default from LEAGUE_FIXTURE_STRATEGY)")
    parser.add_argument("--standings", default=None, help="Tie-break strategy (default from LEAGUE_STANDINGS_STRATEGY)")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed for reproducibility")
    parser.add_argument("--workers", type=int, default=None, help="Threads used to simulate a round")
    parser.add_argument("--quiet", action="store_true", help="Only print the final table")
    args = parser.parse_args()

    logging.basicConfig(level=config.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")
    teams = args.teams or [parse_team(t) for t in DEFAULT_TEAMS]
    try:
        run(
            teams,
            args.year,
            league_name=args.name,
            fixture_strategy=args.fixtures,
            standings_strategy=args.standings,
            seed=args.seed,
            workers=args.workers,
            quiet=args.quiet,
        )
    except LeagueEngineError as e:
        raise SystemExit(f"error: {e}")


if __name__ == "__main__":
    main()

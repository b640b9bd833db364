"""
Service layer: fixtures, standings, the season state machine.
No persistence writes in season_service; league_service orchestrates persistence.
"""
from .scheduling import (
    DoubleRoundRobinGenerator,
    FixtureGenerator,
    SingleRoundRobinGenerator,
    round_robin_pairings,
)
from .standings import (
    PointsGoalDifferenceSorter,
    PointsHeadToHeadSorter,
    PointsWinsSorter,
    StandingSorter,
    determine_champion,
    initialize_standings,
    record_result,
    sort_standings,
)
from .registry import StrategyRegistry, default_registry
from .season_service import SeasonCoordinator
from .league_service import LeagueService

__all__ = [
    "DoubleRoundRobinGenerator",
    "FixtureGenerator",
    "SingleRoundRobinGenerator",
    "round_robin_pairings",
    "PointsGoalDifferenceSorter",
    "PointsHeadToHeadSorter",
    "PointsWinsSorter",
    "StandingSorter",
    "determine_champion",
    "initialize_standings",
    "record_result",
    "sort_standings",
    "StrategyRegistry",
    "default_registry",
    "SeasonCoordinator",
    "LeagueService",
]

"""
Caller-owned registry of fixture and standings strategies, keyed by name.
No process-wide state: build one with default_registry() and pass it around.
"""
from __future__ import annotations

from typing import Callable

from league_engine.errors import UnknownStrategy

from .scheduling import DoubleRoundRobinGenerator, FixtureGenerator, SingleRoundRobinGenerator
from .standings import PointsGoalDifferenceSorter, PointsHeadToHeadSorter, PointsWinsSorter, StandingSorter


def to_display_name(name: str) -> str:
    """'points-goal-difference' -> 'Points Goal Difference'."""
    return " ".join(word[:1].upper() + word[1:] for word in name.split("-"))


class StrategyRegistry:
    def __init__(self) -> None:
        self._generators: dict[str, Callable[[], FixtureGenerator]] = {}
        self._sorters: dict[str, Callable[[], StandingSorter]] = {}

    def register_generator(self, name: str, factory: Callable[[], FixtureGenerator]) -> None:
        self._generators[name] = factory

    def register_sorter(self, name: str, factory: Callable[[], StandingSorter]) -> None:
        self._sorters[name] = factory

    def get_generator(self, name: str) -> FixtureGenerator:
        factory = self._generators.get(name)
        if factory is None:
            raise UnknownStrategy(
                f"Unknown fixture generation strategy: {name}. Available: {', '.join(self._generators)}"
            )
        return factory()

    def get_sorter(self, name: str) -> StandingSorter:
        factory = self._sorters.get(name)
        if factory is None:
            raise UnknownStrategy(
                f"Unknown sorting strategy: {name}. Available: {', '.join(self._sorters)}"
            )
        return factory()

    def list_generators(self) -> list[dict[str, str]]:
        return [{"name": n, "display_name": to_display_name(n)} for n in self._generators]

    def list_sorters(self) -> list[dict[str, str]]:
        return [{"name": n, "display_name": to_display_name(n)} for n in self._sorters]


def default_registry() -> StrategyRegistry:
    """Fresh registry holding the built-in strategies."""
    registry = StrategyRegistry()
    registry.register_generator(DoubleRoundRobinGenerator.name, DoubleRoundRobinGenerator)
    registry.register_generator(SingleRoundRobinGenerator.name, SingleRoundRobinGenerator)
    registry.register_sorter(PointsGoalDifferenceSorter.name, PointsGoalDifferenceSorter)
    registry.register_sorter(PointsHeadToHeadSorter.name, PointsHeadToHeadSorter)
    registry.register_sorter(PointsWinsSorter.name, PointsWinsSorter)
    return registry

"""
Deterministic round-robin fixture generation (circle method).

Fix the first slot and rotate the others one step each round: the last participant
moves to index 1. Round r pairs slot i (home) with slot N-1-i (away).

BYE handling: when the number of teams is odd, a virtual BYE slot is appended. Pairs
involving the BYE are dropped, so each round has one team resting.

Same team ordering yields the same schedule (bit-exact; required for tests and
persistence). Only match ids are random, and an id factory can be injected.
"""
from __future__ import annotations

import uuid
from typing import Callable, Sequence, TypeVar

from league_engine.errors import InsufficientTeams
from league_engine.models import Match, Round, Team

# Sentinel for bye when number of teams is odd
BYE = None

T = TypeVar("T")


def _new_id() -> str:
    return str(uuid.uuid4())


def effective_team_count(team_count: int) -> int:
    """Team count rounded up to even (odd counts get a BYE slot)."""
    return team_count if team_count % 2 == 0 else team_count + 1


def round_robin_pairings(participants: Sequence[T]) -> list[list[tuple[T, T]]]:
    """
    One list of (home, away) pairs per round, N-1 rounds for N (even) slots.
    Pairs involving the BYE slot are omitted.
    """
    if len(participants) < 2:
        raise InsufficientTeams("Need at least 2 teams to generate fixtures")
    slots: list[T | None] = list(participants)
    if len(slots) % 2 == 1:
        slots.append(BYE)
    n = len(slots)
    rounds: list[list[tuple[T, T]]] = []
    for _ in range(n - 1):
        pairs: list[tuple[T, T]] = []
        for i in range(n // 2):
            home, away = slots[i], slots[n - 1 - i]
            if home is BYE or away is BYE:
                continue
            pairs.append((home, away))
        rounds.append(pairs)
        # Rotate: keep 0, then slots[N-1], slots[1], ..., slots[N-2]
        slots = [slots[0], slots[n - 1]] + slots[1 : n - 1]
    return rounds


class FixtureGenerator:
    """Strategy interface: team list -> ordered rounds of matches."""

    name: str = ""

    def __init__(self, id_factory: Callable[[], str] = _new_id) -> None:
        self._new_id = id_factory

    def generate(self, teams: Sequence[Team]) -> list[Round]:
        raise NotImplementedError

    def total_rounds(self, team_count: int) -> int:
        raise NotImplementedError

    def _first_half(self, teams: Sequence[Team], neutral_venue: bool) -> list[Round]:
        return [
            Round(
                round_number=index + 1,
                matches=tuple(
                    Match(id=self._new_id(), home_team=home, away_team=away, neutral_venue=neutral_venue)
                    for home, away in pairs
                ),
            )
            for index, pairs in enumerate(round_robin_pairings(list(teams)))
        ]


class SingleRoundRobinGenerator(FixtureGenerator):
    """
    Each pairing once. Matches keep structural home/away slots but are played on a
    neutral venue (no home advantage in simulation).
    """

    name = "single-round-robin"

    def total_rounds(self, team_count: int) -> int:
        return effective_team_count(team_count) - 1

    def generate(self, teams: Sequence[Team]) -> list[Round]:
        return self._first_half(teams, neutral_venue=True)


class DoubleRoundRobinGenerator(FixtureGenerator):
    """
    Each pairing twice. Round half+k mirrors round k with home and away swapped, so
    every team plays N-1 home and N-1 away matches.
    """

    name = "double-round-robin"

    def total_rounds(self, team_count: int) -> int:
        return 2 * (effective_team_count(team_count) - 1)

    def generate(self, teams: Sequence[Team]) -> list[Round]:
        first_half = self._first_half(teams, neutral_venue=False)
        half = len(first_half)
        second_half = [
            Round(
                round_number=half + r.round_number,
                matches=tuple(
                    Match(id=self._new_id(), home_team=m.away_team, away_team=m.home_team)
                    for m in r.matches
                ),
            )
            for r in first_half
        ]
        return first_half + second_half

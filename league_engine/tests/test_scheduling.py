"""
Tests for round-robin fixture generation.
Deterministic; every pairing the right number of times; one match per team per round.
"""
from __future__ import annotations

import itertools
from collections import Counter
from pathlib import Path

import pytest

import sys
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

from league_engine.errors import InsufficientTeams
from league_engine.models import Team
from league_engine.services.scheduling import (
    DoubleRoundRobinGenerator,
    SingleRoundRobinGenerator,
    effective_team_count,
    round_robin_pairings,
)


def _teams(n: int) -> list[Team]:
    return [Team(id=f"t{i}", name=f"Team {i}", strength=50 + i) for i in range(n)]


def _sequential_ids():
    counter = itertools.count(1)
    return lambda: f"m{next(counter)}"


def test_round_robin_two_teams():
    """2 teams: 1 round, 1 pair."""
    rounds = round_robin_pairings(["A", "B"])
    assert rounds == [[("A", "B")]]


def test_round_robin_three_teams_drops_bye():
    """3 teams + BYE: 3 rounds of one real pair; each team rests once."""
    rounds = round_robin_pairings(["A", "B", "C"])
    assert len(rounds) == 3
    assert all(len(r) == 1 for r in rounds)
    pairs = {tuple(sorted(p)) for r in rounds for p in r}
    assert pairs == {("A", "B"), ("A", "C"), ("B", "C")}


def test_round_robin_needs_two_teams():
    with pytest.raises(InsufficientTeams):
        round_robin_pairings(["A"])
    with pytest.raises(InsufficientTeams):
        DoubleRoundRobinGenerator().generate([])


def test_double_round_robin_four_teams():
    """4 teams: 6 rounds, 12 matches, each team 3 home and 3 away."""
    rounds = DoubleRoundRobinGenerator().generate(_teams(4))
    assert len(rounds) == 6
    assert [r.round_number for r in rounds] == [1, 2, 3, 4, 5, 6]
    matches = [m for r in rounds for m in r.matches]
    assert len(matches) == 12
    home = Counter(m.home_team.id for m in matches)
    away = Counter(m.away_team.id for m in matches)
    for t in _teams(4):
        assert home[t.id] == 3
        assert away[t.id] == 3
    assert all(not m.neutral_venue for m in matches)


@pytest.mark.parametrize("n", range(2, 10))
def test_double_round_robin_counts(n):
    """N*(N-1) matches; each ordered pair exactly once; one match per team per round."""
    gen = DoubleRoundRobinGenerator()
    rounds = gen.generate(_teams(n))
    assert len(rounds) == gen.total_rounds(n) == 2 * (effective_team_count(n) - 1)
    matches = [m for r in rounds for m in r.matches]
    assert len(matches) == n * (n - 1)
    ordered_pairs = Counter((m.home_team.id, m.away_team.id) for m in matches)
    assert all(c == 1 for c in ordered_pairs.values())
    assert len(ordered_pairs) == n * (n - 1)
    for r in rounds:
        ids = [tid for m in r.matches for tid in (m.home_team.id, m.away_team.id)]
        assert len(ids) == len(set(ids))
        assert all(m.home_team.id != m.away_team.id for m in r.matches)


def test_double_round_robin_second_half_mirrors_first():
    rounds = DoubleRoundRobinGenerator().generate(_teams(6))
    half = len(rounds) // 2
    for k in range(half):
        first = [(m.home_team.id, m.away_team.id) for m in rounds[k].matches]
        second = [(m.away_team.id, m.home_team.id) for m in rounds[half + k].matches]
        assert first == second


def test_odd_team_count_each_team_rests_once_per_half():
    teams = _teams(5)
    rounds = SingleRoundRobinGenerator().generate(teams)
    assert len(rounds) == 5
    resting = []
    for r in rounds:
        playing = {tid for m in r.matches for tid in (m.home_team.id, m.away_team.id)}
        rest = [t.id for t in teams if t.id not in playing]
        assert len(rest) == 1
        resting.extend(rest)
    assert sorted(resting) == sorted(t.id for t in teams)


@pytest.mark.parametrize("n", [2, 3, 4, 7, 8])
def test_single_round_robin_each_pair_once_on_neutral_venue(n):
    gen = SingleRoundRobinGenerator()
    rounds = gen.generate(_teams(n))
    assert len(rounds) == gen.total_rounds(n)
    matches = [m for r in rounds for m in r.matches]
    assert len(matches) == n * (n - 1) // 2
    pairs = Counter(frozenset((m.home_team.id, m.away_team.id)) for m in matches)
    assert all(c == 1 for c in pairs.values())
    assert all(m.neutral_venue for m in matches)


def test_same_ordering_same_schedule():
    a = DoubleRoundRobinGenerator(id_factory=_sequential_ids()).generate(_teams(6))
    b = DoubleRoundRobinGenerator(id_factory=_sequential_ids()).generate(_teams(6))
    assert a == b


def test_match_ids_unique_by_default():
    rounds = DoubleRoundRobinGenerator().generate(_teams(6))
    ids = [m.id for r in rounds for m in r.matches]
    assert len(ids) == len(set(ids))

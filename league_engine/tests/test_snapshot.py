"""
Tests for season snapshots: lossless round-trip and rejection of bad snapshots.
"""
from __future__ import annotations

import copy
import json
from pathlib import Path

import pytest

import sys
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

from league_engine.errors import InvalidSnapshot, UnknownStrategy
from league_engine.models import League, Team
from league_engine.persistence.snapshot import season_from_snapshot, season_to_snapshot
from league_engine.services import SeasonCoordinator, default_registry
from league_engine.simulation import MatchSimulator, SeededRNG


@pytest.fixture
def coordinator():
    return SeasonCoordinator(simulator=MatchSimulator(rng=SeededRNG(11)))


@pytest.fixture
def league():
    teams = tuple(Team(id=f"t{i}", name=f"Club {i}", strength=60 + 5 * i) for i in range(5))
    return League(id="l1", name="Snapshot League", teams=teams)


def test_round_trip_mid_season(coordinator, league):
    season = coordinator.create_season(league, 2030, "double-round-robin")
    season = coordinator.simulate_next_round(coordinator.simulate_next_round(season))
    data = json.loads(json.dumps(season_to_snapshot(season)))
    restored = season_from_snapshot(data, default_registry())
    assert restored == season
    assert restored.total_rounds == 10


def test_round_trip_complete_single_round_robin(coordinator, league):
    season = coordinator.simulate_remaining(
        coordinator.create_season(league, 2031, "single-round-robin", "points-wins")
    )
    data = season_to_snapshot(season)
    assert data["championId"] == season.champion_id
    assert data["league"]["tieBreakStrategyName"] == "points-wins"
    assert all(m.get("neutralVenue") for r in data["rounds"] for m in r["matches"])
    assert season_from_snapshot(data, default_registry()) == season


def test_unplayed_matches_have_no_result_key(coordinator, league):
    data = season_to_snapshot(coordinator.create_season(league, 2030, "double-round-robin"))
    assert "championId" not in data
    assert all("result" not in m for r in data["rounds"] for m in r["matches"])


def test_unknown_strategy_rejected(coordinator, league):
    data = season_to_snapshot(coordinator.create_season(league, 2030, "double-round-robin"))
    bad = copy.deepcopy(data)
    bad["fixtureStrategyName"] = "swiss-system"
    with pytest.raises(UnknownStrategy):
        season_from_snapshot(bad, default_registry())
    bad = copy.deepcopy(data)
    bad["league"]["tieBreakStrategyName"] = "coin-toss"
    with pytest.raises(UnknownStrategy):
        season_from_snapshot(bad, default_registry())


def test_unknown_team_rejected(coordinator, league):
    data = season_to_snapshot(coordinator.create_season(league, 2030, "double-round-robin"))
    data["rounds"][0]["matches"][0]["homeTeamId"] = "ghost"
    with pytest.raises(InvalidSnapshot):
        season_from_snapshot(data, default_registry())


def test_missing_field_rejected(coordinator, league):
    data = season_to_snapshot(coordinator.create_season(league, 2030, "double-round-robin"))
    del data["rounds"]
    with pytest.raises(InvalidSnapshot):
        season_from_snapshot(data, default_registry())


@pytest.mark.parametrize("form", [["W", "X"], ["win"], 5])
def test_invalid_form_entry_rejected(coordinator, league, form):
    season = coordinator.simulate_next_round(coordinator.create_season(league, 2030, "double-round-robin"))
    data = season_to_snapshot(season)
    data["standings"][0]["form"] = form
    with pytest.raises(InvalidSnapshot):
        season_from_snapshot(data, default_registry())


def test_head_to_head_tie_break_survives_round_trip(coordinator, league):
    season = coordinator.create_season(league, 2030, "double-round-robin", "points-head-to-head")
    season = coordinator.simulate_next_round(season)
    data = json.loads(json.dumps(season_to_snapshot(season)))
    assert data["league"]["tieBreakStrategyName"] == "points-head-to-head"
    assert season_from_snapshot(data, default_registry()) == season

"""
Tests for the terminal season runner.
"""
from __future__ import annotations

import argparse
from pathlib import Path

import pytest

import sys
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

from league_engine.models import SeasonStatus
from league_engine.run_season import DEFAULT_TEAMS, parse_team, run


def test_parse_team():
    team = parse_team("Harbour City:80")
    assert team.name == "Harbour City"
    assert team.strength == 80


@pytest.mark.parametrize("value", ["NoStrength", ":70", "Weak:abc", "Big:150", "X:50"])
def test_parse_team_rejects_bad_input(value):
    with pytest.raises(argparse.ArgumentTypeError):
        parse_team(value)


def test_run_prints_final_table(capsys):
    teams = [parse_team(t) for t in DEFAULT_TEAMS]
    season = run(teams, 2024, seed=8, quiet=True)
    assert season.status == SeasonStatus.COMPLETE
    out = capsys.readouterr().out
    if season.champion is not None:
        assert "CHAMPION: " + season.champion.name in out
    else:
        assert "NO CHAMPION" in out
    assert "Round 1/" not in out


def test_run_same_seed_same_champion(capsys):
    a = run([parse_team(t) for t in DEFAULT_TEAMS], 2024, seed=31, quiet=True)
    b = run([parse_team(t) for t in DEFAULT_TEAMS], 2024, seed=31, quiet=True)
    assert (a.champion.name if a.champion else None) == (b.champion.name if b.champion else None)
    assert [s.points for s in a.standings] == [s.points for s in b.standings]

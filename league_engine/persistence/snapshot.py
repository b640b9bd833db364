"""
Season <-> flat, transport-neutral snapshot (JSON-serializable dict).
Round-tripping is lossless: same id, year, league, rounds, standings, current_round, champion.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from league_engine.errors import InvalidSnapshot
from league_engine.models import (
    Form,
    League,
    Match,
    MatchResult,
    Round,
    Season,
    Standing,
    Team,
)

if TYPE_CHECKING:
    from league_engine.services.registry import StrategyRegistry


def match_to_dict(m: Match) -> dict[str, Any]:
    d: dict[str, Any] = {
        "id": m.id,
        "homeTeamId": m.home_team.id,
        "awayTeamId": m.away_team.id,
    }
    if m.neutral_venue:
        d["neutralVenue"] = True
    if m.result is not None:
        d["result"] = {"homeGoals": m.result.home_goals, "awayGoals": m.result.away_goals}
    return d


def standing_to_dict(s: Standing) -> dict[str, Any]:
    return {
        "teamId": s.team.id,
        "played": s.played,
        "won": s.won,
        "drawn": s.drawn,
        "lost": s.lost,
        "goalsFor": s.goals_for,
        "goalsAgainst": s.goals_against,
        "form": [r.value for r in s.form.results],
        "position": s.position,
        "previousPosition": s.previous_position,
    }


def season_to_snapshot(season: Season) -> dict[str, Any]:
    league = season.league
    d: dict[str, Any] = {
        "id": season.id,
        "year": season.year,
        "league": {
            "id": league.id,
            "name": league.name,
            "tieBreakStrategyName": league.tie_break_strategy_name,
            "teams": [t.to_dict() for t in league.teams],
        },
        "rounds": [
            {"roundNumber": r.round_number, "matches": [match_to_dict(m) for m in r.matches]}
            for r in season.rounds
        ],
        "standings": [standing_to_dict(s) for s in season.standings],
        "currentRound": season.current_round,
        "fixtureStrategyName": season.fixture_strategy_name,
    }
    if season.champion_id is not None:
        d["championId"] = season.champion_id
    return d


def _team(teams: dict[str, Team], team_id: str) -> Team:
    try:
        return teams[team_id]
    except KeyError:
        raise InvalidSnapshot(f"Snapshot references unknown team: {team_id}") from None


def _form(values: Any) -> Form:
    try:
        return Form(tuple(values))
    except (TypeError, ValueError) as e:
        raise InvalidSnapshot(f"Snapshot has invalid form entry: {values!r}") from e


def season_from_snapshot(data: dict[str, Any], registry: StrategyRegistry) -> Season:
    """
    Rebuild a Season. Strategy names are resolved through the registry
    (UnknownStrategy if not registered); total_rounds comes from the generator.
    """
    try:
        league_data = data["league"]
        teams = [Team(id=t["id"], name=t["name"], strength=t["strength"]) for t in league_data["teams"]]
        by_id = {t.id: t for t in teams}
        sorter = registry.get_sorter(league_data["tieBreakStrategyName"])
        generator = registry.get_generator(data["fixtureStrategyName"])
        league = League(
            id=league_data["id"],
            name=league_data["name"],
            teams=tuple(teams),
            tie_break_strategy_name=sorter.name,
        )
        rounds = []
        for rd in data["rounds"]:
            matches = []
            for md in rd["matches"]:
                result = md.get("result")
                matches.append(
                    Match(
                        id=md["id"],
                        home_team=_team(by_id, md["homeTeamId"]),
                        away_team=_team(by_id, md["awayTeamId"]),
                        result=MatchResult(result["homeGoals"], result["awayGoals"]) if result else None,
                        neutral_venue=bool(md.get("neutralVenue", False)),
                    )
                )
            rounds.append(Round(round_number=rd["roundNumber"], matches=tuple(matches)))
        standings = [
            Standing(
                team=_team(by_id, sd["teamId"]),
                played=sd["played"],
                won=sd["won"],
                drawn=sd["drawn"],
                lost=sd["lost"],
                goals_for=sd["goalsFor"],
                goals_against=sd["goalsAgainst"],
                form=_form(sd.get("form", ())),
                position=sd.get("position", 0),
                previous_position=sd.get("previousPosition", 0),
            )
            for sd in data["standings"]
        ]
        return Season(
            id=data["id"],
            year=data["year"],
            league=league,
            fixture_strategy_name=generator.name,
            total_rounds=generator.total_rounds(league.team_count),
            rounds=tuple(rounds),
            standings=tuple(standings),
            current_round=data.get("currentRound", 0),
            champion_id=data.get("championId"),
        )
    except KeyError as e:
        raise InvalidSnapshot(f"Snapshot missing field: {e.args[0]}") from e

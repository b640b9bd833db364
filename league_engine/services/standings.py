"""
Standings engine: one record per team, 3/1/0 points, pluggable tie-break ordering,
and the mathematical-certainty champion check.

Pure functions over immutable Standing values; every call returns new lists.
"""
from __future__ import annotations

from typing import Iterable, Sequence

from league_engine.errors import InvalidMatch, MissingResult
from league_engine.models import FormResult, Match, Standing, Team

POINTS_PER_WIN = 3


# ---------- Sorting strategies ----------


def _name_key(standing: Standing) -> tuple[str, str, str]:
    # Alphabetical, then exact name and id so the order is total.
    name = standing.team.name
    return (name.casefold(), name, standing.team.id)


class StandingSorter:
    """
    Strategy interface: a sort key per standing, ascending = higher in the table.
    Every built-in ends with team name so the order is total and stable.
    """

    name: str = ""

    def sort_key(self, standing: Standing) -> tuple:
        raise NotImplementedError


class PointsGoalDifferenceSorter(StandingSorter):
    """Points → goal difference → goals for → name. The most common rule set."""

    name = "points-goal-difference"

    def sort_key(self, standing: Standing) -> tuple:
        return (
            -standing.points,
            -standing.goal_difference,
            -standing.goals_for,
            _name_key(standing),
        )


class PointsWinsSorter(StandingSorter):
    """Points per game → wins → goal difference → goals for → name. Handles unequal games played."""

    name = "points-wins"

    def sort_key(self, standing: Standing) -> tuple:
        return (
            -standing.points_per_game,
            -standing.won,
            -standing.goal_difference,
            -standing.goals_for,
            _name_key(standing),
        )


class PointsHeadToHeadSorter(StandingSorter):
    """
    Points → head-to-head → goal difference → goals for → name.
    A Standing carries no results between individual clubs, so teams level on points
    fall through to goal difference.
    """

    name = "points-head-to-head"

    def sort_key(self, standing: Standing) -> tuple:
        return (
            -standing.points,
            -standing.goal_difference,
            -standing.goals_for,
            _name_key(standing),
        )


# ---------- Engine ----------


def initialize_standings(teams: Iterable[Team]) -> list[Standing]:
    return [Standing(team=team) for team in teams]


def _outcomes(match: Match) -> tuple[FormResult, FormResult]:
    result = match.result
    if result.is_home_win:
        return FormResult.WIN, FormResult.LOSS
    if result.is_draw:
        return FormResult.DRAW, FormResult.DRAW
    return FormResult.LOSS, FormResult.WIN


def record_result(standings: Sequence[Standing], match: Match) -> list[Standing]:
    """Fold one played match into the two involved standings; others are returned as-is."""
    if match.result is None:
        raise MissingResult(f"Cannot update standings for match {match.id} without result")
    home_id = match.home_team.id
    away_id = match.away_team.id
    known = {s.team.id for s in standings}
    for team_id in (home_id, away_id):
        if team_id not in known:
            raise InvalidMatch(f"Team {team_id} has no standing in this table")

    home_outcome, away_outcome = _outcomes(match)
    home_goals = match.result.home_goals
    away_goals = match.result.away_goals
    updated: list[Standing] = []
    for standing in standings:
        if standing.team.id == home_id:
            standing = standing.record(home_goals, away_goals, home_outcome)
        elif standing.team.id == away_id:
            standing = standing.record(away_goals, home_goals, away_outcome)
        updated.append(standing)
    return updated


def record_results(standings: Sequence[Standing], matches: Iterable[Match]) -> list[Standing]:
    """Fold many matches. Order-independent apart from Form ordering within a round."""
    updated = list(standings)
    for match in matches:
        updated = record_result(updated, match)
    return updated


def sort_standings(standings: Sequence[Standing], sorter: StandingSorter) -> list[Standing]:
    """
    New list ordered by the sorter; position re-assigned 1-based. previous_position
    becomes the position held before this sort, or the new position when unset.
    """
    ordered = sorted(standings, key=sorter.sort_key)
    return [
        standing.with_position(index + 1, standing.position or index + 1)
        for index, standing in enumerate(ordered)
    ]


def determine_champion(
    sorted_standings: Sequence[Standing],
    rounds_remaining: int,
    sorter: StandingSorter | None = None,
) -> str | None:
    """
    Leader's team id if nobody can still reach the leader's points:
    other.points + 3 * rounds_remaining < leader.points for every other team.
    A points tie at the top leaves the title undecided, even after the last round.
    """
    if not sorted_standings:
        return None
    ordered = list(sorted_standings)
    if sorter is not None:
        ordered.sort(key=sorter.sort_key)
    leader = ordered[0]
    max_gain = POINTS_PER_WIN * max(rounds_remaining, 0)
    for challenger in ordered[1:]:
        if challenger.points + max_gain >= leader.points:
            return None
    return leader.team.id


def get_leader(standings: Sequence[Standing], sorter: StandingSorter) -> Standing | None:
    if not standings:
        return None
    return min(standings, key=sorter.sort_key)


def find_standing(standings: Iterable[Standing], team_id: str) -> Standing | None:
    for standing in standings:
        if standing.team.id == team_id:
            return standing
    return None

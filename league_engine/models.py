"""
Domain models for the league season engine.
Value objects only: no simulation, persistence or API logic.

Every model is a frozen dataclass: updates return new values (dataclasses.replace),
never mutate shared instances.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from .errors import (
    InsufficientTeams,
    InvalidGoalCount,
    InvalidLeague,
    InvalidMatch,
    InvalidSeasonYear,
    InvalidStrength,
    InvalidTeamName,
    LeagueEngineError,
    MatchAlreadyPlayed,
)

FORM_LENGTH = 5
MIN_NAME_LENGTH = 2
MIN_SEASON_YEAR = 2000


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# ---------- Season status (state machine) ----------
class SeasonStatus(str, Enum):
    """Season lifecycle: not_started → in_progress → complete."""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


# ---------- Form result ----------
class FormResult(str, Enum):
    WIN = "W"
    DRAW = "D"
    LOSS = "L"


# ---------- Team ----------
@dataclass(frozen=True)
class Team:
    """
    A club in a league. Strength is an integer rating 0-100.
    Canonical definition lives in League.teams; everything else references by id.
    """
    id: str
    name: str
    strength: int

    def __post_init__(self) -> None:
        if not isinstance(self.id, str):
            raise InvalidTeamName("Team id must be a string")
        if not isinstance(self.name, str) or len(self.name) < MIN_NAME_LENGTH:
            raise InvalidTeamName("Team name must be at least 2 characters")
        if not _is_int(self.strength):
            raise InvalidStrength("Strength must be an integer")
        if not 0 <= self.strength <= 100:
            raise InvalidStrength("Strength must be between 0 and 100")

    def with_strength(self, strength: int) -> Team:
        return replace(self, strength=strength)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "strength": self.strength}


# ---------- Match result ----------
@dataclass(frozen=True)
class MatchResult:
    home_goals: int
    away_goals: int

    def __post_init__(self) -> None:
        for goals in (self.home_goals, self.away_goals):
            if not _is_int(goals) or goals < 0:
                raise InvalidGoalCount("Goals must be non-negative integers")

    @property
    def is_home_win(self) -> bool:
        return self.home_goals > self.away_goals

    @property
    def is_draw(self) -> bool:
        return self.home_goals == self.away_goals

    @property
    def is_away_win(self) -> bool:
        return self.away_goals > self.home_goals

    @property
    def outcome(self) -> str:
        """'home' | 'draw' | 'away'."""
        if self.is_home_win:
            return "home"
        if self.is_away_win:
            return "away"
        return "draw"


# ---------- Match ----------
@dataclass(frozen=True)
class Match:
    """
    One fixture. Unplayed (result None) -> played, exactly once.
    neutral_venue: home/away are structural slots only; no home advantage applies.
    """
    id: str
    home_team: Team
    away_team: Team
    result: MatchResult | None = None
    neutral_venue: bool = False

    def __post_init__(self) -> None:
        if not self.id:
            raise InvalidMatch("Match id must be non-empty")
        if self.home_team.id == self.away_team.id:
            raise InvalidMatch(f"Team {self.home_team.name} cannot play itself")

    @property
    def has_result(self) -> bool:
        return self.result is not None

    @property
    def score(self) -> str:
        if self.result is None:
            return "vs"
        return f"{self.result.home_goals}-{self.result.away_goals}"

    def with_result(self, result: MatchResult) -> Match:
        if self.result is not None:
            raise MatchAlreadyPlayed(f"Match {self.id} already has a result ({self.score})")
        return replace(self, result=result)

    def involves(self, team_id: str) -> bool:
        return team_id in (self.home_team.id, self.away_team.id)


# ---------- Round ----------
@dataclass(frozen=True)
class Round:
    """Matches played together. round_number is 1-based and contiguous within a season."""
    round_number: int
    matches: tuple[Match, ...] = ()

    def __post_init__(self) -> None:
        if not _is_int(self.round_number) or self.round_number < 1:
            raise LeagueEngineError(f"Round number must be a positive integer, got {self.round_number!r}")
        object.__setattr__(self, "matches", tuple(self.matches))

    @property
    def is_complete(self) -> bool:
        return all(m.has_result for m in self.matches)

    @property
    def match_count(self) -> int:
        return len(self.matches)

    @property
    def completed_match_count(self) -> int:
        return sum(1 for m in self.matches if m.has_result)

    def with_matches(self, matches: list[Match] | tuple[Match, ...]) -> Round:
        return replace(self, matches=tuple(matches))


# ---------- Form ----------
@dataclass(frozen=True)
class Form:
    """Last <= 5 outcomes, oldest first. Oldest is dropped once a sixth is added."""
    results: tuple[FormResult, ...] = ()

    def __post_init__(self) -> None:
        results = tuple(FormResult(r) for r in self.results)
        object.__setattr__(self, "results", results[-FORM_LENGTH:])

    def add(self, result: FormResult | str) -> Form:
        return Form(self.results + (FormResult(result),))

    @property
    def wins(self) -> int:
        return self.results.count(FormResult.WIN)

    @property
    def draws(self) -> int:
        return self.results.count(FormResult.DRAW)

    @property
    def losses(self) -> int:
        return self.results.count(FormResult.LOSS)

    @property
    def points(self) -> int:
        return 3 * self.wins + self.draws

    @property
    def is_empty(self) -> bool:
        return not self.results

    def score(self) -> float:
        """Form signal for xG: (wins - losses) / n in -1..1; 0.0 with no results."""
        if not self.results:
            return 0.0
        return (self.wins - self.losses) / len(self.results)

    def as_string(self) -> str:
        return "".join(r.value for r in self.results)


# ---------- Standing ----------
@dataclass(frozen=True)
class Standing:
    """
    One team's record in a season. points and goal_difference are derived.
    position / previous_position: 1-based rank, 0 = unset.
    """
    team: Team
    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0
    form: Form = field(default_factory=Form)
    position: int = 0
    previous_position: int = 0

    def __post_init__(self) -> None:
        for name in ("played", "won", "drawn", "lost", "goals_for", "goals_against"):
            value = getattr(self, name)
            if not _is_int(value) or value < 0:
                raise InvalidGoalCount(f"Standing {name} must be a non-negative integer, got {value!r}")

    @property
    def team_id(self) -> str:
        return self.team.id

    @property
    def points(self) -> int:
        return 3 * self.won + self.drawn

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against

    @property
    def points_per_game(self) -> float:
        return self.points / self.played if self.played > 0 else 0.0

    @property
    def position_change(self) -> int:
        """Positive = moved up. 0 when previous position is unset."""
        if self.previous_position == 0:
            return 0
        return self.previous_position - self.position

    def record(self, goals_for: int, goals_against: int, outcome: FormResult) -> Standing:
        return replace(
            self,
            played=self.played + 1,
            won=self.won + (outcome == FormResult.WIN),
            drawn=self.drawn + (outcome == FormResult.DRAW),
            lost=self.lost + (outcome == FormResult.LOSS),
            goals_for=self.goals_for + goals_for,
            goals_against=self.goals_against + goals_against,
            form=self.form.add(outcome),
        )

    def with_position(self, position: int, previous_position: int | None = None) -> Standing:
        prev = self.position if previous_position is None else previous_position
        return replace(self, position=position, previous_position=prev)


# ---------- League ----------
@dataclass(frozen=True)
class League:
    """A named set of >= 2 distinct teams plus the tie-break strategy used to rank them."""
    id: str
    name: str
    teams: tuple[Team, ...]
    tie_break_strategy_name: str = "points-goal-difference"

    def __post_init__(self) -> None:
        if not self.id:
            raise InvalidLeague("League id must be non-empty")
        if not isinstance(self.name, str) or len(self.name) < MIN_NAME_LENGTH:
            raise InvalidLeague("League name must be at least 2 characters")
        teams = tuple(self.teams)
        if len(teams) < 2:
            raise InsufficientTeams("League must have at least 2 teams")
        ids = [t.id for t in teams]
        if len(set(ids)) != len(ids):
            raise InvalidLeague("League teams must have distinct ids")
        object.__setattr__(self, "teams", teams)

    @property
    def team_count(self) -> int:
        return len(self.teams)

    def team_by_id(self, team_id: str) -> Team | None:
        for team in self.teams:
            if team.id == team_id:
                return team
        return None

    def with_teams(self, teams: list[Team] | tuple[Team, ...]) -> League:
        return replace(self, teams=tuple(teams))

    def with_tie_break_strategy(self, name: str) -> League:
        return replace(self, tie_break_strategy_name=name)


# ---------- Season ----------
@dataclass(frozen=True)
class Season:
    """
    One run of a league's fixtures. Owns its rounds and standings outright.
    current_round: rounds already played (0..total_rounds), never decreases.
    champion_id: set once when the title is mathematically decided; never revoked.
    """
    id: str
    year: int
    league: League
    fixture_strategy_name: str
    total_rounds: int
    rounds: tuple[Round, ...] = ()
    standings: tuple[Standing, ...] = ()
    current_round: int = 0
    champion_id: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise InvalidLeague("Season id must be non-empty")
        if not _is_int(self.year) or self.year < MIN_SEASON_YEAR:
            raise InvalidSeasonYear(f"Season year must be an integer >= {MIN_SEASON_YEAR}, got {self.year!r}")
        if not 0 <= self.current_round <= self.total_rounds:
            raise LeagueEngineError(
                f"current_round {self.current_round} outside 0..{self.total_rounds}"
            )
        object.__setattr__(self, "rounds", tuple(self.rounds))
        object.__setattr__(self, "standings", tuple(self.standings))

    @property
    def status(self) -> SeasonStatus:
        if self.current_round >= self.total_rounds:
            return SeasonStatus.COMPLETE
        if self.current_round == 0:
            return SeasonStatus.NOT_STARTED
        return SeasonStatus.IN_PROGRESS

    @property
    def is_complete(self) -> bool:
        return self.current_round >= self.total_rounds

    @property
    def has_champion(self) -> bool:
        return self.champion_id is not None

    @property
    def rounds_remaining(self) -> int:
        return self.total_rounds - self.current_round

    @property
    def champion(self) -> Team | None:
        if self.champion_id is None:
            return None
        return self.league.team_by_id(self.champion_id)

    def round(self, round_number: int) -> Round | None:
        for r in self.rounds:
            if r.round_number == round_number:
                return r
        return None

    # Immutable updates

    def with_updated_round(self, updated: Round) -> Season:
        rounds = tuple(updated if r.round_number == updated.round_number else r for r in self.rounds)
        return replace(self, rounds=rounds)

    def with_standings(self, standings: list[Standing] | tuple[Standing, ...]) -> Season:
        return replace(self, standings=tuple(standings))

    def with_current_round(self, current_round: int) -> Season:
        return replace(self, current_round=current_round)

    def with_champion(self, champion_id: str) -> Season:
        return replace(self, champion_id=champion_id)


# ---------- Championship history ----------
@dataclass(frozen=True)
class ChampionshipRecord:
    """One completed season's champion. Append-only history."""
    year: int
    team_id: str
    team_name: str
    season_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"year": self.year, "teamId": self.team_id, "teamName": self.team_name}


@dataclass
class ChampionshipStats:
    """Titles per team; years most recent first."""
    team_id: str
    team_name: str
    count: int = 0
    years: list[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "teamId": self.team_id,
            "teamName": self.team_name,
            "count": self.count,
            "years": list(self.years),
        }

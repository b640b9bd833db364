"""
Error kinds raised by the season simulation engine.
All are ValueErrors: usage/programming errors surfaced immediately, never retried.
"""
from __future__ import annotations


class LeagueEngineError(ValueError):
    """Base class for every engine error."""


# ---------- Construction-time validation ----------


class InvalidTeamName(LeagueEngineError):
    """Team (or league) name shorter than 2 characters, or missing id."""


class InvalidStrength(LeagueEngineError):
    """Strength not an integer in 0..100."""


class InvalidGoalCount(LeagueEngineError):
    """Goals negative or not an integer."""


class InvalidMatch(LeagueEngineError):
    """A team cannot play itself."""


class MatchAlreadyPlayed(LeagueEngineError):
    """A match result is attached exactly once."""


class InvalidLeague(LeagueEngineError):
    """League id/name invalid or duplicate team ids."""


class InvalidSeasonYear(LeagueEngineError):
    """Season year must be an integer >= 2000."""


class InsufficientTeams(LeagueEngineError):
    """Fewer than 2 teams for fixtures or a league."""


# ---------- Strategies ----------


class UnknownStrategy(LeagueEngineError):
    """Fixture or tie-break strategy name not registered."""


class StrategyConflict(LeagueEngineError):
    """A strategy object's name is registered to a different strategy."""


# ---------- Season progression ----------


class RoundNotFound(LeagueEngineError):
    """Requested round number does not exist in the season."""


class NoMoreRounds(RoundNotFound):
    """Advancing past the last round (season already complete)."""


class RoundAlreadyComplete(LeagueEngineError):
    """Every match in the next round already has a result."""


class MissingResult(LeagueEngineError):
    """Standings cannot be folded from an unplayed match."""


# ---------- Snapshots ----------


class InvalidSnapshot(LeagueEngineError):
    """Snapshot is missing fields or references unknown teams."""


class NoSavedSeason(LeagueEngineError):
    """No season has been started (or it was cleared)."""

"""
Persistence-aware orchestration around the season coordinator.
Load the current season, advance it, save it, and record the champion once the
season completes. The coordinator itself never touches storage.
"""
from __future__ import annotations

import logging
import sqlite3

from league_engine.errors import NoSavedSeason
from league_engine.models import ChampionshipRecord, ChampionshipStats, League, Season
from league_engine.persistence.repositories import ChampionshipRepository, SeasonRepository

from .scheduling import FixtureGenerator
from .season_service import SeasonCoordinator
from .standings import StandingSorter

logger = logging.getLogger(__name__)


class LeagueService:
    """
    Season workflows over a SQLite connection.
    Persistence is delegated to repositories.
    """

    def __init__(self, coordinator: SeasonCoordinator | None = None) -> None:
        self.coordinator = coordinator or SeasonCoordinator()
        self._season_repo = SeasonRepository()
        self._championship_repo = ChampionshipRepository()

    @property
    def registry(self):
        return self.coordinator.registry

    # ---------- Current season ----------

    def current_season(self, conn: sqlite3.Connection) -> Season | None:
        return self._season_repo.load(conn, self.registry)

    def require_current_season(self, conn: sqlite3.Connection) -> Season:
        season = self.current_season(conn)
        if season is None:
            raise NoSavedSeason("No season in progress; start one first")
        return season

    def start_season(
        self,
        conn: sqlite3.Connection,
        league: League,
        year: int,
        fixture_strategy: FixtureGenerator | str,
        standings_strategy: StandingSorter | str | None = None,
    ) -> Season:
        """Create a season and make it the current one (replaces any saved season)."""
        season = self.coordinator.create_season(league, year, fixture_strategy, standings_strategy)
        self._season_repo.save(conn, season)
        return season

    def start_next_season(self, conn: sqlite3.Connection) -> Season:
        """Same league and strategies, year + 1."""
        previous = self.require_current_season(conn)
        return self.start_season(
            conn,
            previous.league,
            previous.year + 1,
            previous.fixture_strategy_name,
            previous.league.tie_break_strategy_name,
        )

    def reset(self, conn: sqlite3.Connection) -> None:
        self._season_repo.clear(conn)
        logger.info("Cleared current season")

    # ---------- Progression ----------

    def simulate_next_round(self, conn: sqlite3.Connection) -> Season:
        season = self.coordinator.simulate_next_round(self.require_current_season(conn))
        self._save(conn, season)
        return season

    def simulate_remaining(self, conn: sqlite3.Connection) -> Season:
        season = self.coordinator.simulate_remaining(self.require_current_season(conn))
        self._save(conn, season)
        return season

    def _save(self, conn: sqlite3.Connection, season: Season) -> None:
        self._season_repo.save(conn, season)
        self._record_championship_if_complete(conn, season)

    def _record_championship_if_complete(self, conn: sqlite3.Connection, season: Season) -> None:
        if not (season.is_complete and season.has_champion):
            return
        if self._championship_repo.exists_for_season(conn, season.id):
            return
        champion = season.champion
        if champion is None:
            return
        self._championship_repo.append(
            conn,
            ChampionshipRecord(
                year=season.year, team_id=champion.id, team_name=champion.name, season_id=season.id
            ),
        )
        logger.info("Recorded %d championship for %s", season.year, champion.name)

    # ---------- History ----------

    def championship_history(self, conn: sqlite3.Connection) -> list[ChampionshipRecord]:
        return self._championship_repo.list_all(conn)

    def championship_stats(self, conn: sqlite3.Connection) -> dict[str, ChampionshipStats]:
        return self._championship_repo.stats(conn)

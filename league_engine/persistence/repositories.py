"""
Repository interfaces for saved seasons and championship history.
No business logic: only read/write operations.
"""
from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from league_engine.models import ChampionshipRecord, ChampionshipStats, Season

from .snapshot import season_from_snapshot, season_to_snapshot

if TYPE_CHECKING:
    from league_engine.services.registry import StrategyRegistry

logger = logging.getLogger(__name__)

CURRENT_SLOT = "current"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# ---------- SeasonRepository ----------


class SeasonRepository:
    """Single 'current season' slot holding a JSON snapshot."""

    def save(self, conn: sqlite3.Connection, season: Season, slot: str = CURRENT_SLOT) -> None:
        snapshot = json.dumps(season_to_snapshot(season))
        conn.execute(
            """
            INSERT INTO saved_seasons (slot, season_id, year, snapshot_json, saved_at)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(slot) DO UPDATE SET
                season_id = excluded.season_id,
                year = excluded.year,
                snapshot_json = excluded.snapshot_json,
                saved_at = excluded.saved_at
            """,
            (slot, season.id, season.year, snapshot, _now_iso()),
        )
        conn.commit()
        logger.debug("Saved season %s (round %d) to slot %s", season.id, season.current_round, slot)

    def load(
        self, conn: sqlite3.Connection, registry: StrategyRegistry, slot: str = CURRENT_SLOT
    ) -> Season | None:
        """None when nothing is saved; a corrupt snapshot raises."""
        row = conn.execute(
            "SELECT snapshot_json FROM saved_seasons WHERE slot = ?", (slot,)
        ).fetchone()
        if row is None:
            return None
        return season_from_snapshot(json.loads(row["snapshot_json"]), registry)

    def clear(self, conn: sqlite3.Connection, slot: str = CURRENT_SLOT) -> None:
        conn.execute("DELETE FROM saved_seasons WHERE slot = ?", (slot,))
        conn.commit()


# ---------- ChampionshipRepository ----------


class ChampionshipRepository:
    """Append-only championship history."""

    def append(self, conn: sqlite3.Connection, record: ChampionshipRecord) -> None:
        conn.execute(
            "INSERT INTO championships (season_id, year, team_id, team_name, recorded_at) VALUES (?, ?, ?, ?, ?)",
            (record.season_id, record.year, record.team_id, record.team_name, _now_iso()),
        )
        conn.commit()

    def exists_for_season(self, conn: sqlite3.Connection, season_id: str) -> bool:
        row = conn.execute(
            "SELECT 1 FROM championships WHERE season_id = ?", (season_id,)
        ).fetchone()
        return row is not None

    def list_all(self, conn: sqlite3.Connection) -> list[ChampionshipRecord]:
        rows = conn.execute(
            "SELECT season_id, year, team_id, team_name FROM championships ORDER BY id"
        ).fetchall()
        return [
            ChampionshipRecord(
                year=r["year"], team_id=r["team_id"], team_name=r["team_name"], season_id=r["season_id"]
            )
            for r in rows
        ]

    def stats(self, conn: sqlite3.Connection) -> dict[str, ChampionshipStats]:
        """team_id -> titles; first-seen team name is kept."""
        stats: dict[str, ChampionshipStats] = {}
        for record in self.list_all(conn):
            entry = stats.setdefault(
                record.team_id, ChampionshipStats(team_id=record.team_id, team_name=record.team_name)
            )
            entry.count += 1
            entry.years.append(record.year)
            entry.years.sort(reverse=True)
        return stats

"""
SQLite schema for saved seasons and championship history.
Migration-friendly: each table created with IF NOT EXISTS.
"""
from __future__ import annotations


def seasons_schema() -> str:
    """Saved season snapshots. slot 'current' holds the season in play."""
    return """
    CREATE TABLE IF NOT EXISTS saved_seasons (
        slot TEXT PRIMARY KEY,
        season_id TEXT NOT NULL,
        year INTEGER NOT NULL,
        snapshot_json TEXT NOT NULL,
        saved_at TEXT NOT NULL
    );
    """


def championships_schema() -> str:
    """Append-only: one row per completed season with a champion."""
    return """
    CREATE TABLE IF NOT EXISTS championships (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        season_id TEXT,
        year INTEGER NOT NULL,
        team_id TEXT NOT NULL,
        team_name TEXT NOT NULL,
        recorded_at TEXT NOT NULL
    );
    CREATE INDEX IF NOT EXISTS ix_championships_team ON championships(team_id);
    CREATE UNIQUE INDEX IF NOT EXISTS ix_championships_season
        ON championships(season_id) WHERE season_id IS NOT NULL;
    """


def all_schema_sql() -> str:
    return "\n".join([seasons_schema(), championships_schema()])

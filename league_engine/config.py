"""
Runtime settings, read from the environment once at import.
"""
from __future__ import annotations

import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def _optional_int(name: str) -> int | None:
    raw = os.environ.get(name, "").strip()
    return int(raw) if raw else None


DB_PATH = Path(os.environ.get("LEAGUE_DB_PATH", str(PROJECT_ROOT / "data" / "league.db")))
DEFAULT_FIXTURE_STRATEGY = os.environ.get("LEAGUE_FIXTURE_STRATEGY", "double-round-robin")
DEFAULT_STANDINGS_STRATEGY = os.environ.get("LEAGUE_STANDINGS_STRATEGY", "points-goal-difference")
SIMULATION_SEED = _optional_int("LEAGUE_SIMULATION_SEED")
SIMULATION_WORKERS = int(os.environ.get("LEAGUE_SIMULATION_WORKERS", "1"))
LOG_LEVEL = os.environ.get("LEAGUE_LOG_LEVEL", "INFO").upper()

"""
Persistence layer for seasons and championship history.
No simulation logic: only snapshots and read/write interfaces.
"""
from .db import get_connection, get_db_path, init_db, set_db_path
from .snapshot import season_from_snapshot, season_to_snapshot
from .repositories import ChampionshipRepository, SeasonRepository

__all__ = [
    "get_connection",
    "get_db_path",
    "init_db",
    "set_db_path",
    "season_from_snapshot",
    "season_to_snapshot",
    "ChampionshipRepository",
    "SeasonRepository",
]

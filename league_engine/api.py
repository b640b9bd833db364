"""
REST API for the league season engine.
Thin wrappers around the season services and persistence.
"""
from __future__ import annotations

import logging
import uuid
from contextlib import asynccontextmanager, contextmanager
from typing import Any, AsyncGenerator, Generator

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from league_engine import config
from league_engine.errors import LeagueEngineError, NoMoreRounds, NoSavedSeason, RoundNotFound
from league_engine.models import League, Match, Season, Standing, Team
from league_engine.persistence import get_connection, get_db_path, init_db, season_to_snapshot
from league_engine.services import LeagueService, SeasonCoordinator, default_registry
from league_engine.simulation import MatchSimulator, SeededRNG

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


@contextmanager
def db_conn() -> Generator:
    """Yield a DB connection, ensure close on exit."""
    conn = get_connection()
    try:
        yield conn
    finally:
        conn.close()


# ---------- Lifespan ----------
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    init_db(db_path=get_db_path())
    logger.info("Database ready at %s", get_db_path())
    yield


# ---------- FastAPI app ----------
app = FastAPI(
    title="League Season Simulator API",
    description="Round-robin fixtures, match simulation and league standings",
    version="0.1.0",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------- Request/Response models ----------


class TeamInput(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    strength: int = Field(..., ge=0, le=100)


class CreateSeasonRequest(BaseModel):
    league_name: str = Field(..., min_length=2, max_length=200)
    teams: list[TeamInput] = Field(..., min_length=2, max_length=40)
    year: int = Field(..., ge=2000)
    fixture_strategy: str = Field(default_factory=lambda: config.DEFAULT_FIXTURE_STRATEGY)
    standings_strategy: str = Field(default_factory=lambda: config.DEFAULT_STANDINGS_STRATEGY)
    seed: int | None = Field(default=None, description="RNG seed for reproducibility")


class SimulateRoundRequest(BaseModel):
    seed: int | None = Field(default=None, description="RNG seed for reproducibility")


class SimulateMatchRequest(BaseModel):
    home_team_name: str = Field(..., min_length=2, max_length=100)
    home_team_strength: int = Field(..., ge=0, le=100)
    away_team_name: str = Field(..., min_length=2, max_length=100)
    away_team_strength: int = Field(..., ge=0, le=100)
    neutral_venue: bool = False
    seed: int | None = None


def _service(seed: int | None = None) -> LeagueService:
    rng = SeededRNG(seed if seed is not None else config.SIMULATION_SEED)
    coordinator = SeasonCoordinator(
        simulator=MatchSimulator(rng=rng),
        registry=default_registry(),
        max_workers=config.SIMULATION_WORKERS,
    )
    return LeagueService(coordinator)


def _http_error(e: LeagueEngineError) -> HTTPException:
    if isinstance(e, NoSavedSeason) or (isinstance(e, RoundNotFound) and not isinstance(e, NoMoreRounds)):
        return HTTPException(status_code=404, detail=str(e))
    return HTTPException(status_code=400, detail=str(e))


def _standing_row(s: Standing) -> dict[str, Any]:
    return {
        "position": s.position,
        "previous_position": s.previous_position,
        "position_change": s.position_change,
        "team_id": s.team.id,
        "team_name": s.team.name,
        "played": s.played,
        "won": s.won,
        "drawn": s.drawn,
        "lost": s.lost,
        "goals_for": s.goals_for,
        "goals_against": s.goals_against,
        "goal_difference": s.goal_difference,
        "points": s.points,
        "form": s.form.as_string(),
    }


def _match_row(m: Match) -> dict[str, Any]:
    return {
        "id": m.id,
        "home_team_id": m.home_team.id,
        "home_team_name": m.home_team.name,
        "away_team_id": m.away_team.id,
        "away_team_name": m.away_team.name,
        "score": m.score,
        "played": m.has_result,
        "neutral_venue": m.neutral_venue,
    }


def _season_response(season: Season) -> dict[str, Any]:
    champion = season.champion
    return {
        "season": season_to_snapshot(season),
        "status": season.status.value,
        "total_rounds": season.total_rounds,
        "champion_name": champion.name if champion else None,
    }


# ---------- Endpoints ----------


@app.get("/strategies")
def list_strategies() -> dict[str, Any]:
    registry = default_registry()
    return {"fixtures": registry.list_generators(), "standings": registry.list_sorters()}


@app.post("/seasons")
def create_season(req: CreateSeasonRequest) -> dict[str, Any]:
    """Create a league from the submitted teams and start its season (replaces the current one)."""
    with db_conn() as conn:
        svc = _service(req.seed)
        try:
            teams = tuple(Team(id=str(uuid.uuid4()), name=t.name, strength=t.strength) for t in req.teams)
            league = League(
                id=str(uuid.uuid4()),
                name=req.league_name,
                teams=teams,
                tie_break_strategy_name=req.standings_strategy,
            )
            season = svc.start_season(conn, league, req.year, req.fixture_strategy, req.standings_strategy)
        except LeagueEngineError as e:
            raise _http_error(e)
        return _season_response(season)


@app.get("/seasons/current")
def get_current_season() -> dict[str, Any]:
    with db_conn() as conn:
        try:
            season = _service().require_current_season(conn)
        except LeagueEngineError as e:
            raise _http_error(e)
        return _season_response(season)


@app.delete("/seasons/current")
def clear_current_season() -> dict[str, Any]:
    with db_conn() as conn:
        _service().reset(conn)
        return {"cleared": True}


@app.post("/seasons/current/next-round")
def simulate_next_round(req: SimulateRoundRequest | None = None) -> dict[str, Any]:
    """Simulate the next round, update standings, check for a champion."""
    with db_conn() as conn:
        try:
            season = _service(req.seed if req else None).simulate_next_round(conn)
        except LeagueEngineError as e:
            raise _http_error(e)
        return _season_response(season)


@app.post("/seasons/current/simulate-remaining")
def simulate_remaining(req: SimulateRoundRequest | None = None) -> dict[str, Any]:
    with db_conn() as conn:
        try:
            season = _service(req.seed if req else None).simulate_remaining(conn)
        except LeagueEngineError as e:
            raise _http_error(e)
        return _season_response(season)


@app.post("/seasons/current/next-season")
def start_next_season() -> dict[str, Any]:
    """Same league and strategies, following year."""
    with db_conn() as conn:
        try:
            season = _service().start_next_season(conn)
        except LeagueEngineError as e:
            raise _http_error(e)
        return _season_response(season)


@app.get("/seasons/current/standings")
def get_standings() -> dict[str, Any]:
    with db_conn() as conn:
        svc = _service()
        try:
            season = svc.require_current_season(conn)
        except LeagueEngineError as e:
            raise _http_error(e)
        rows = [_standing_row(s) for s in svc.coordinator.get_standings(season)]
        return {"season_id": season.id, "current_round": season.current_round, "standings": rows}


@app.get("/seasons/current/rounds/{round_number}")
def get_round_fixtures(round_number: int) -> dict[str, Any]:
    with db_conn() as conn:
        svc = _service()
        try:
            season = svc.require_current_season(conn)
            matches = svc.coordinator.get_fixtures(season, round_number)
        except LeagueEngineError as e:
            raise _http_error(e)
        return {
            "season_id": season.id,
            "round_number": round_number,
            "matches": [_match_row(m) for m in matches],
        }


@app.get("/championships")
def get_championships() -> dict[str, Any]:
    with db_conn() as conn:
        history = _service().championship_history(conn)
        return {"championships": [r.to_dict() for r in history]}


@app.get("/championships/stats")
def get_championship_stats() -> dict[str, Any]:
    with db_conn() as conn:
        stats = _service().championship_stats(conn)
        ordered = sorted(stats.values(), key=lambda s: (-s.count, s.team_name))
        return {"stats": [s.to_dict() for s in ordered]}


@app.post("/simulate/match")
def simulate_match(req: SimulateMatchRequest) -> dict[str, Any]:
    """One-off match between two ad-hoc teams. Nothing is persisted."""
    try:
        home = Team(id=str(uuid.uuid4()), name=req.home_team_name, strength=req.home_team_strength)
        away = Team(id=str(uuid.uuid4()), name=req.away_team_name, strength=req.away_team_strength)
        match = Match(id=str(uuid.uuid4()), home_team=home, away_team=away, neutral_venue=req.neutral_venue)
    except LeagueEngineError as e:
        raise _http_error(e)
    simulator = MatchSimulator(rng=SeededRNG(req.seed))
    played = simulator.simulate_match(match)
    return {
        "home_team_name": home.name,
        "away_team_name": away.name,
        "home_goals": played.result.home_goals,
        "away_goals": played.result.away_goals,
        "score": played.score,
        "result": played.result.outcome,
    }

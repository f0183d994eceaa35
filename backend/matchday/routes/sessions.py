"""
Session API Routes
Create, read and join sessions; per-player standings.
"""

import logging
import os
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from matchday.models.game_session import GameSession, SessionType, TournamentFormat
from matchday.routes.deps import get_session_or_404, get_store, require_caller
from matchday.schemas import TeamFilter
from matchday.services.session_store import InsertOutcome, SessionStore
from matchday.services.standings import compute_standings

logger = logging.getLogger(__name__)

router = APIRouter()

HOST_DISPLAY_NAME = "Host"


# ============================================================================
# Request/Response Models
# ============================================================================


class SessionCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: SessionType
    title: str = Field(min_length=1, max_length=120)
    description: Optional[str] = Field(default=None, max_length=500)
    icon_url: Optional[str] = Field(default=None, alias="iconUrl")
    team_filter: Optional[TeamFilter] = Field(default=None, alias="teamFilter")
    t_format: Optional[TournamentFormat] = Field(default=None, alias="tFormat")
    min_players: int = Field(default=2, ge=2, le=64, alias="minPlayers")
    max_players: int = Field(default=32, ge=2, le=64, alias="maxPlayers")

    @field_validator("icon_url")
    @classmethod
    def validate_icon_url(cls, v):
        if v is not None and not v.startswith(("http://", "https://")):
            raise ValueError("iconUrl must be an http(s) URL")
        return v

    @model_validator(mode="after")
    def validate_player_range(self):
        if self.max_players < self.min_players:
            raise ValueError("maxPlayers must be >= minPlayers")
        return self


class SessionCreatedResponse(BaseModel):
    code: str
    join_url: str
    join_token: str


class PlayerSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    display_name: str


class SessionDetailResponse(BaseModel):
    id: int
    type: str
    title: str
    description: Optional[str] = None
    icon_url: Optional[str] = None
    code: str
    min_players: int
    max_players: int
    t_format: Optional[str] = None
    started_at: Optional[str] = None
    players_count: int
    players: List[PlayerSummary]


class JoinRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    display_name: str = Field(min_length=2, max_length=40, alias="displayName")

    @field_validator("display_name", mode="before")
    @classmethod
    def strip_display_name(cls, v):
        return v.strip() if isinstance(v, str) else v


class JoinResponse(BaseModel):
    joined: bool
    player_id: int


class StandingResponse(BaseModel):
    player_id: int
    display_name: str
    team_id: Optional[int] = None
    played: int
    wins: int
    draws: int
    losses: int
    goals_for: int
    goals_against: int
    goal_difference: int
    points: int


def build_join_url(game_session: GameSession) -> str:
    join_path = "game" if game_session.type == SessionType.friendly else "tournament"
    base_url = os.getenv("APP_URL", "")
    return f"{base_url}/{join_path}/{game_session.code}"


# ============================================================================
# Session Endpoints
# ============================================================================


@router.post("/sessions", response_model=SessionCreatedResponse, status_code=201)
def create_session(
    request: SessionCreateRequest,
    user_id: str = Depends(require_caller),
    store: SessionStore = Depends(get_store),
):
    """
    Create a friendly match or tournament owned by the caller.

    The host is added as the first player ("Host"). If that player already
    exists the insert outcome is ignored.
    """
    game_session = store.create_session(
        GameSession(
            owner_id=user_id,
            type=request.type.value,
            title=request.title,
            description=request.description,
            icon_url=request.icon_url,
            team_filter=request.team_filter.to_stored() if request.team_filter else {},
            t_format=request.t_format.value if request.t_format else None,
            min_players=request.min_players,
            max_players=request.max_players,
        )
    )

    outcome, _ = store.add_player(game_session.id, HOST_DISPLAY_NAME, user_id=user_id)
    if outcome == InsertOutcome.already_exists:
        logger.debug("Host already registered in session %s", game_session.code)

    return SessionCreatedResponse(
        code=game_session.code,
        join_url=build_join_url(game_session),
        join_token=game_session.join_token,
    )


@router.get("/sessions/{code}", response_model=SessionDetailResponse)
def get_session_detail(code: str, store: SessionStore = Depends(get_store)):
    """Public session metadata and registered players"""
    game_session = get_session_or_404(store, code)
    players = store.get_participants(game_session.id)
    return SessionDetailResponse(
        id=game_session.id,
        type=game_session.type,
        title=game_session.title,
        description=game_session.description,
        icon_url=game_session.icon_url,
        code=game_session.code,
        min_players=game_session.min_players,
        max_players=game_session.max_players,
        t_format=game_session.t_format,
        started_at=game_session.started_at.isoformat() if game_session.started_at else None,
        players_count=len(players),
        players=[PlayerSummary.model_validate(p) for p in players],
    )


@router.post("/sessions/{code}/join", response_model=JoinResponse, status_code=201)
def join_session(code: str, request: JoinRequest, store: SessionStore = Depends(get_store)):
    """
    Join as a guest with a display name.

    Rejects with 409 when the session is full or the name is taken.
    """
    game_session = get_session_or_404(store, code)

    if game_session.max_players and store.count_players(game_session.id) >= game_session.max_players:
        raise HTTPException(status_code=409, detail={"code": "capacity_reached", "message": "This session is full"})

    outcome, player = store.add_player(game_session.id, request.display_name)
    if outcome == InsertOutcome.already_exists:
        raise HTTPException(
            status_code=409, detail={"code": "insert_failed", "message": "Display name already taken"}
        )

    return JoinResponse(joined=True, player_id=player.id)


@router.get("/sessions/{code}/stats", response_model=List[StandingResponse])
def get_session_stats(code: str, store: SessionStore = Depends(get_store)):
    """Standings from finished fixtures. Sorted by points, goal difference, goals scored."""
    game_session = get_session_or_404(store, code)
    rows = compute_standings(store.get_participants(game_session.id), store.list_fixtures(game_session.id))
    return [StandingResponse(**row.to_dict()) for row in rows]

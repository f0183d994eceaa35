"""
Fixture API Routes
Fixture listing (public) and score submission (session owner only).
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from matchday.models.fixture import Fixture
from matchday.routes.deps import get_session_or_404, get_store, raise_domain_error, require_caller, require_owner
from matchday.routes.teams import TeamResponse
from matchday.services.errors import MatchdayError
from matchday.services.session_store import SessionStore

router = APIRouter()


class FixturePlayer(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    display_name: str


class FixtureResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    round_name: str
    leg: int
    position: int
    status: str
    home_goals: int
    away_goals: int
    went_penalties: bool
    home_pen: int
    away_pen: int
    updated_at: Optional[datetime] = None
    home_player: Optional[FixturePlayer] = None
    away_player: Optional[FixturePlayer] = None
    home_team: Optional[TeamResponse] = None
    away_team: Optional[TeamResponse] = None


class ScoreSubmitRequest(BaseModel):
    home_goals: int = Field(ge=0)
    away_goals: int = Field(ge=0)
    went_penalties: Optional[bool] = None
    home_pen: Optional[int] = Field(default=None, ge=0)
    away_pen: Optional[int] = Field(default=None, ge=0)


@router.get("/sessions/{code}/fixtures", response_model=List[FixtureResponse])
def list_session_fixtures(code: str, store: SessionStore = Depends(get_store)):
    """Fixtures of a session in display order (position ascending) with player and team info"""
    game_session = get_session_or_404(store, code)
    return [FixtureResponse.model_validate(f) for f in store.list_fixtures(game_session.id)]


@router.patch("/fixtures/{fixture_id}/score", response_model=FixtureResponse)
def submit_score(
    fixture_id: int,
    request: ScoreSubmitRequest,
    user_id: str = Depends(require_caller),
    store: SessionStore = Depends(get_store),
):
    """
    Record a result and mark the fixture finished.

    A finished fixture can be scored again; the new result overwrites the old one.
    """
    fixture = store.get_fixture(fixture_id)
    if not fixture:
        raise HTTPException(status_code=404, detail="Fixture not found")

    game_session = store.get_session_by_id(fixture.session_id)
    if not game_session:
        raise HTTPException(status_code=404, detail="Session not found")
    require_owner(game_session, user_id, "submit scores")

    try:
        updated: Fixture = store.update_fixture_score(
            fixture_id,
            home_goals=request.home_goals,
            away_goals=request.away_goals,
            went_penalties=request.went_penalties or False,
            home_pen=request.home_pen or 0,
            away_pen=request.away_pen or 0,
        )
    except MatchdayError as e:
        raise_domain_error(e)

    return FixtureResponse.model_validate(updated)

"""
Team Assignment API Routes
Friendly draw, tournament draw proposal and tournament start. Owner only.
"""

import logging
import random
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from matchday.models.game_session import SessionType
from matchday.routes.deps import (
    get_rng,
    get_session_or_404,
    get_store,
    raise_domain_error,
    require_caller,
    require_owner,
    require_type,
)
from matchday.schemas import AssignmentIn, TeamFilter
from matchday.services.errors import MatchdayError
from matchday.services.fixture_scheduler import FIRST_ROUND, Assignment, FixtureDraft, generate_fixtures
from matchday.services.random_assignment import PlayerTeamPair, assign_all, assign_pair
from matchday.services.session_store import SessionStore

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# Request/Response Models
# ============================================================================


class DrawnSide(BaseModel):
    player_id: int
    player: str
    team_id: int
    team_name: str
    team_short_name: Optional[str] = None
    team_icon_url: Optional[str] = None


class FriendlyAssignResponse(BaseModel):
    fixture_id: int
    home: DrawnSide
    away: DrawnSide


class StartTournamentRequest(BaseModel):
    assignments: List[AssignmentIn] = Field(min_length=2)


class StartTournamentResponse(BaseModel):
    fixtures_count: int
    format: str


def _side(pair: PlayerTeamPair) -> DrawnSide:
    return DrawnSide(
        player_id=pair.player.id,
        player=pair.player.display_name,
        team_id=pair.team.id,
        team_name=pair.team.name,
        team_short_name=pair.team.short_name,
        team_icon_url=pair.team.icon_url,
    )


# ============================================================================
# Friendly
# ============================================================================


@router.post("/sessions/{code}/assign", response_model=FriendlyAssignResponse)
def assign_friendly(
    code: str,
    user_id: str = Depends(require_caller),
    store: SessionStore = Depends(get_store),
    rng: random.Random = Depends(get_rng),
):
    """
    Draw two players and two teams from the session's filtered catalog and
    create or overwrite the single R1 fixture.
    """
    game_session = get_session_or_404(store, code)
    require_type(game_session, SessionType.friendly, "Only friendly matches can assign via this endpoint")
    require_owner(game_session, user_id, "assign teams")

    try:
        home, away = assign_pair(
            store.get_participants(game_session.id),
            store.get_teams(),
            TeamFilter.from_stored(game_session.team_filter),
            rng,
        )
    except MatchdayError as e:
        raise_domain_error(e)

    fixture = store.upsert_single_fixture(
        game_session.id,
        FIRST_ROUND,
        1,
        FixtureDraft(
            round_name=FIRST_ROUND,
            position=1,
            home_player_id=home.player.id,
            away_player_id=away.player.id,
            home_team_id=home.team.id,
            away_team_id=away.team.id,
        ),
    )
    return FriendlyAssignResponse(fixture_id=fixture.id, home=_side(home), away=_side(away))


# ============================================================================
# Tournament
# ============================================================================


@router.post("/sessions/{code}/tournament/assign", response_model=List[DrawnSide])
def propose_tournament_assignment(
    code: str,
    user_id: str = Depends(require_caller),
    store: SessionStore = Depends(get_store),
    rng: random.Random = Depends(get_rng),
):
    """
    Propose one distinct team per player. Nothing is persisted; the host
    sends the accepted list to /tournament/start.
    """
    game_session = get_session_or_404(store, code)
    require_type(game_session, SessionType.tournament, "Only tournaments can assign teams via this endpoint")
    require_owner(game_session, user_id, "assign teams")

    try:
        pairs = assign_all(
            store.get_participants(game_session.id),
            store.get_teams(),
            TeamFilter.from_stored(game_session.team_filter),
            rng,
        )
    except MatchdayError as e:
        raise_domain_error(e)

    return [_side(p) for p in pairs]


@router.post("/sessions/{code}/tournament/start", response_model=StartTournamentResponse)
def start_tournament(
    code: str,
    request: StartTournamentRequest,
    user_id: str = Depends(require_caller),
    store: SessionStore = Depends(get_store),
    rng: random.Random = Depends(get_rng),
):
    """
    Generate fixtures from the accepted assignments.

    Restarting discards every previous fixture of the session. Player team
    ids and the new fixture set are written in one transaction; on any
    failure nothing changes.
    """
    game_session = get_session_or_404(store, code)
    require_type(game_session, SessionType.tournament, "Only tournaments can start via this endpoint")
    require_owner(game_session, user_id, "start the tournament")
    if not game_session.t_format:
        raise HTTPException(
            status_code=400,
            detail={"code": "tournament_format_not_set", "message": "Tournament format is not set"},
        )

    player_ids = {p.id for p in store.get_participants(game_session.id)}
    for a in request.assignments:
        if a.player_id not in player_ids:
            raise HTTPException(
                status_code=400,
                detail={
                    "code": "invalid_assignment",
                    "message": f"Player {a.player_id} does not belong to this session",
                },
            )

    requested_team_ids = {a.team_id for a in request.assignments}
    known_team_ids = {t.id for t in store.get_teams(ids=requested_team_ids)}
    unknown = sorted(requested_team_ids - known_team_ids)
    if unknown:
        raise HTTPException(
            status_code=400,
            detail={"code": "invalid_assignment", "message": f"Unknown team ids: {unknown}"},
        )

    assignments = [Assignment(player_id=a.player_id, team_id=a.team_id) for a in request.assignments]
    try:
        drafts = generate_fixtures(assignments, game_session.t_format, rng)
    except MatchdayError as e:
        raise_domain_error(e)

    try:
        count = store.replace_fixtures(
            game_session.id, drafts, assignments, started_at=datetime.now(timezone.utc)
        )
    except Exception as e:
        logger.exception("Failed to replace fixtures for session %s", game_session.code)
        raise HTTPException(status_code=500, detail={"code": "db_error", "message": str(e)})

    return StartTournamentResponse(fixtures_count=count, format=game_session.t_format)

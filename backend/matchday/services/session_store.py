"""
Session Store

Record keeper for sessions, players, fixtures and the team catalog, backed by
a SQLModel session. Services and routes go through this class rather than
issuing queries directly.

Guarantees:
- replace_fixtures is all-or-nothing: delete + insert + commit in one
  transaction, rolled back on any failure
- replace_fixtures calls for the same session are serialized in-process
- The team catalog is never written
"""
import logging
import threading
import weakref
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, func, select

from matchday.models.fixture import Fixture, FixtureStatus
from matchday.models.game_session import GameSession
from matchday.models.session_player import SessionPlayer
from matchday.models.team import Team
from matchday.schemas import TeamFilter
from matchday.services.fixture_scheduler import Assignment, FixtureDraft
from matchday.services.random_assignment import filter_teams
from matchday.services.score_finalizer import finalize

logger = logging.getLogger(__name__)

_registry_guard = threading.Lock()
_session_locks: "weakref.WeakValueDictionary[int, threading.Lock]" = weakref.WeakValueDictionary()


def session_lock(session_id: int) -> threading.Lock:
    """
    Process-local lock guarding one session's fixture set.

    The registry only holds weak references: an entry disappears once no caller
    holds the lock object.
    """
    with _registry_guard:
        lock = _session_locks.get(session_id)
        if lock is None:
            lock = threading.Lock()
            _session_locks[session_id] = lock
        return lock


class InsertOutcome(str, Enum):
    created = "created"
    already_exists = "already_exists"


class SessionStore:
    def __init__(self, session: Session):
        self.session = session

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def get_session_by_code(self, code: str) -> Optional[GameSession]:
        return self.session.exec(select(GameSession).where(GameSession.code == code)).first()

    def get_session_by_id(self, session_id: int) -> Optional[GameSession]:
        return self.session.get(GameSession, session_id)

    def create_session(self, game_session: GameSession) -> GameSession:
        self.session.add(game_session)
        self.session.commit()
        self.session.refresh(game_session)
        logger.info("Created %s session %s (owner %s)", game_session.type, game_session.code, game_session.owner_id)
        return game_session

    # ------------------------------------------------------------------
    # Players
    # ------------------------------------------------------------------

    def get_participants(self, session_id: int) -> List[SessionPlayer]:
        query = select(SessionPlayer).where(SessionPlayer.session_id == session_id).order_by(SessionPlayer.id)
        return list(self.session.exec(query).all())

    def count_players(self, session_id: int) -> int:
        return self.session.exec(
            select(func.count()).select_from(SessionPlayer).where(SessionPlayer.session_id == session_id)
        ).one()

    def add_player(
        self, session_id: int, display_name: str, user_id: Optional[str] = None
    ) -> Tuple[InsertOutcome, Optional[SessionPlayer]]:
        """
        Insert a player. A display name already taken in the session is
        reported as ``already_exists`` together with the existing player;
        the caller decides whether that is an error.
        """
        player = SessionPlayer(session_id=session_id, display_name=display_name, user_id=user_id)
        try:
            self.session.add(player)
            self.session.commit()
            self.session.refresh(player)
            return InsertOutcome.created, player
        except IntegrityError:
            self.session.rollback()
            existing = self.session.exec(
                select(SessionPlayer).where(
                    SessionPlayer.session_id == session_id, SessionPlayer.display_name == display_name
                )
            ).first()
            return InsertOutcome.already_exists, existing

    def set_participant_team(self, participant_id: int, team_id: Optional[int], commit: bool = True) -> None:
        player = self.session.get(SessionPlayer, participant_id)
        if player is None:
            raise LookupError(f"Player {participant_id} not found")
        player.team_id = team_id
        self.session.add(player)
        if commit:
            self.session.commit()

    # ------------------------------------------------------------------
    # Team catalog
    # ------------------------------------------------------------------

    def get_teams(self, team_filter: Optional[TeamFilter] = None, ids: Optional[Iterable[int]] = None) -> List[Team]:
        query = select(Team)
        if ids is not None:
            query = query.where(Team.id.in_(list(ids)))
        teams = self.session.exec(query.order_by(Team.id)).all()
        return filter_teams(teams, team_filter)

    # ------------------------------------------------------------------
    # Fixtures
    # ------------------------------------------------------------------

    def list_fixtures(self, session_id: int) -> List[Fixture]:
        query = select(Fixture).where(Fixture.session_id == session_id).order_by(Fixture.position, Fixture.id)
        return list(self.session.exec(query).all())

    def get_fixture(self, fixture_id: int) -> Optional[Fixture]:
        return self.session.get(Fixture, fixture_id)

    def replace_fixtures(
        self,
        session_id: int,
        drafts: Sequence[FixtureDraft],
        assignments: Sequence[Assignment] = (),
        started_at: Optional[datetime] = None,
    ) -> int:
        """
        Discard every fixture of the session and insert ``drafts`` as the new set.

        ``assignments`` are written to the players' team_id in the same
        transaction so a failed start leaves no half-applied state.
        When ``started_at`` is given the session is stamped in that same transaction.

        Returns:
            Number of fixtures inserted
        """
        lock = session_lock(session_id)
        with lock:
            try:
                if started_at is not None:
                    game_session = self.session.get(GameSession, session_id)
                    if game_session is None:
                        raise LookupError(f"Session {session_id} not found")
                    game_session.started_at = started_at
                    self.session.add(game_session)

                for a in assignments:
                    self.set_participant_team(a.player_id, a.team_id, commit=False)

                existing = self.session.exec(select(Fixture).where(Fixture.session_id == session_id)).all()
                for fixture in existing:
                    self.session.delete(fixture)
                self.session.flush()

                for draft in drafts:
                    self.session.add(_fixture_from_draft(session_id, draft))
                self.session.commit()
            except Exception:
                self.session.rollback()
                raise

        logger.info(
            "Replaced fixtures for session %s: %d removed, %d inserted", session_id, len(existing), len(drafts)
        )
        return len(drafts)

    def upsert_single_fixture(self, session_id: int, round_name: str, leg: int, draft: FixtureDraft) -> Fixture:
        """
        Create or overwrite in place the fixture keyed by (round_name, leg).

        Overwriting clears any recorded result: new teams mean a new match.
        """
        lock = session_lock(session_id)
        with lock:
            fixture = self.session.exec(
                select(Fixture).where(
                    Fixture.session_id == session_id, Fixture.round_name == round_name, Fixture.leg == leg
                )
            ).first()
            if fixture is None:
                fixture = _fixture_from_draft(session_id, draft)
                fixture.round_name = round_name
                fixture.leg = leg
            else:
                fixture.home_player_id = draft.home_player_id
                fixture.away_player_id = draft.away_player_id
                fixture.home_team_id = draft.home_team_id
                fixture.away_team_id = draft.away_team_id
                fixture.home_goals = fixture.away_goals = 0
                fixture.went_penalties = False
                fixture.home_pen = fixture.away_pen = 0
                fixture.status = FixtureStatus.assigned.value
                fixture.updated_at = datetime.now(timezone.utc)
            self.session.add(fixture)
            self.session.commit()
            self.session.refresh(fixture)
        return fixture

    def update_fixture_score(
        self,
        fixture_id: int,
        home_goals: int,
        away_goals: int,
        went_penalties: bool = False,
        home_pen: int = 0,
        away_pen: int = 0,
    ) -> Fixture:
        fixture = self.session.get(Fixture, fixture_id)
        if fixture is None:
            raise LookupError(f"Fixture {fixture_id} not found")
        finalize(fixture, home_goals, away_goals, went_penalties, home_pen, away_pen)
        self.session.add(fixture)
        self.session.commit()
        self.session.refresh(fixture)
        logger.info("Fixture %s finished %d-%d", fixture_id, home_goals, away_goals)
        return fixture


def _fixture_from_draft(session_id: int, draft: FixtureDraft) -> Fixture:
    return Fixture(
        session_id=session_id,
        round_name=draft.round_name,
        leg=draft.leg,
        position=draft.position,
        status=draft.status,
        home_player_id=draft.home_player_id,
        away_player_id=draft.away_player_id,
        home_team_id=draft.home_team_id,
        away_team_id=draft.away_team_id,
    )

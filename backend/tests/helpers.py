"""Shared test helpers: tokens and direct row creation."""
from typing import Iterable, List

from jose import jwt
from sqlmodel import Session

from matchday.models.game_session import GameSession
from matchday.models.session_player import SessionPlayer

HOST_ID = "host-user-1"
OTHER_ID = "other-user-2"


def make_token(sub: str) -> str:
    return jwt.encode({"sub": sub}, "unused-signing-key", algorithm="HS256")


def auth_headers(sub: str = HOST_ID) -> dict:
    return {"Authorization": f"Bearer {make_token(sub)}"}


def create_session_row(session: Session, type_: str = "tournament", owner_id: str = HOST_ID, **kwargs) -> GameSession:
    game_session = GameSession(owner_id=owner_id, type=type_, title=f"{type_} test", **kwargs)
    session.add(game_session)
    session.commit()
    session.refresh(game_session)
    return game_session


def add_players(session: Session, game_session: GameSession, names: Iterable[str]) -> List[SessionPlayer]:
    players = [SessionPlayer(session_id=game_session.id, display_name=n) for n in names]
    for p in players:
        session.add(p)
    session.commit()
    for p in players:
        session.refresh(p)
    return players

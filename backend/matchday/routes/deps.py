"""
Shared route dependencies: store, caller identity, random source, and
domain-error translation.
"""
import random
from typing import NoReturn, Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from matchday.database import get_session
from matchday.models.game_session import GameSession
from matchday.services.errors import (
    InsufficientParticipants,
    InsufficientPool,
    InsufficientTeams,
    MatchdayError,
)
from matchday.services.identity import JwtIdentityProvider
from matchday.services.session_store import SessionStore

_bearer = HTTPBearer(auto_error=False)

# Precondition failures the host can fix by changing the session
_CONFLICT_ERRORS = (InsufficientParticipants, InsufficientTeams, InsufficientPool)


def get_store(session: Session = Depends(get_session)) -> SessionStore:
    return SessionStore(session)


def get_identity_provider() -> JwtIdentityProvider:
    return JwtIdentityProvider.from_env()


def get_rng() -> random.Random:
    """Random source for draws and seeding. Overridden in tests for determinism."""
    return random.SystemRandom()


def require_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    provider: JwtIdentityProvider = Depends(get_identity_provider),
) -> str:
    """Authenticated user id, or 401."""
    user_id = provider.resolve_caller(credentials.credentials if credentials else None)
    if not user_id:
        raise HTTPException(status_code=401, detail="Authentication required")
    return user_id


def get_session_or_404(store: SessionStore, code: str) -> GameSession:
    game_session = store.get_session_by_code(code)
    if not game_session:
        raise HTTPException(status_code=404, detail="Session not found")
    return game_session


def require_owner(game_session: GameSession, user_id: str, action: str) -> None:
    if game_session.owner_id != user_id:
        raise HTTPException(status_code=403, detail=f"Only the session owner can {action}")


def require_type(game_session: GameSession, expected: str, message: str) -> None:
    if game_session.type != expected:
        raise HTTPException(status_code=400, detail={"code": "invalid_session_type", "message": message})


def raise_domain_error(e: MatchdayError) -> NoReturn:
    status_code = 409 if isinstance(e, _CONFLICT_ERRORS) else 400
    raise HTTPException(status_code=status_code, detail=e.to_detail()) from e

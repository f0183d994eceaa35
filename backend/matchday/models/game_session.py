import secrets
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from sqlalchemy import JSON, String
from sqlmodel import Column, Field, Relationship, SQLModel

if TYPE_CHECKING:
    from matchday.models.fixture import Fixture
    from matchday.models.session_player import SessionPlayer

CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
CODE_LENGTH = 6


def generate_session_code() -> str:
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))


def generate_join_token() -> str:
    return secrets.token_urlsafe(24)


class SessionType(str, Enum):
    friendly = "friendly"
    tournament = "tournament"


class TournamentFormat(str, Enum):
    league = "league"
    single_elim = "single_elim"
    # Accepted as configuration only; no generator exists for these.
    groups_cup = "groups_cup"
    double_elim = "double_elim"


class GameSession(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    code: str = Field(default_factory=generate_session_code, unique=True, index=True)
    owner_id: str = Field(index=True)
    type: SessionType = Field(sa_column=Column(String, nullable=False))
    title: str
    description: Optional[str] = None
    icon_url: Optional[str] = None
    team_filter: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    t_format: Optional[str] = Field(default=None)  # TournamentFormat value, None for friendlies
    min_players: int = Field(default=2)
    max_players: int = Field(default=32)
    join_token: str = Field(default_factory=generate_join_token)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    started_at: Optional[datetime] = Field(default=None)

    # Relationships
    players: List["SessionPlayer"] = Relationship(back_populates="session")
    fixtures: List["Fixture"] = Relationship(back_populates="session")

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from matchday.models.game_session import GameSession
    from matchday.models.team import Team


class SessionPlayer(SQLModel, table=True):
    __table_args__ = (SAUniqueConstraint("session_id", "display_name", name="uq_session_display_name"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    session_id: int = Field(foreign_key="gamesession.id", index=True)
    display_name: str
    user_id: Optional[str] = Field(default=None)  # set for registered users (the host), None for guests
    team_id: Optional[int] = Field(default=None, foreign_key="team.id")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Relationships
    session: "GameSession" = Relationship(back_populates="players")
    team: Optional["Team"] = Relationship()

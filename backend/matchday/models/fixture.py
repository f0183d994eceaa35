from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import String
from sqlmodel import Column, Field, Relationship, SQLModel

if TYPE_CHECKING:
    from matchday.models.game_session import GameSession
    from matchday.models.session_player import SessionPlayer
    from matchday.models.team import Team


class FixtureStatus(str, Enum):
    assigned = "assigned"
    in_progress = "in_progress"  # only ever set externally
    finished = "finished"


class Fixture(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    session_id: int = Field(foreign_key="gamesession.id", index=True)
    round_name: str  # "R1" | "MD<n>"
    leg: int = Field(default=1)
    position: int  # 1-based display order across the whole session
    status: FixtureStatus = Field(default=FixtureStatus.assigned, sa_column=Column(String, nullable=False))

    home_player_id: int = Field(foreign_key="sessionplayer.id")
    away_player_id: int = Field(foreign_key="sessionplayer.id")
    home_team_id: Optional[int] = Field(default=None, foreign_key="team.id")
    away_team_id: Optional[int] = Field(default=None, foreign_key="team.id")

    home_goals: int = Field(default=0)
    away_goals: int = Field(default=0)
    went_penalties: bool = Field(default=False)
    home_pen: int = Field(default=0)
    away_pen: int = Field(default=0)

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Relationships
    session: "GameSession" = Relationship(back_populates="fixtures")
    home_player: Optional["SessionPlayer"] = Relationship(
        sa_relationship_kwargs={"foreign_keys": "Fixture.home_player_id"}
    )
    away_player: Optional["SessionPlayer"] = Relationship(
        sa_relationship_kwargs={"foreign_keys": "Fixture.away_player_id"}
    )
    home_team: Optional["Team"] = Relationship(sa_relationship_kwargs={"foreign_keys": "Fixture.home_team_id"})
    away_team: Optional["Team"] = Relationship(sa_relationship_kwargs={"foreign_keys": "Fixture.away_team_id"})

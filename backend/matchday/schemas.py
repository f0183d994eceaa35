"""
Shared pydantic models used by both the services and the HTTP layer.
"""
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator


class TeamFilter(BaseModel):
    """
    Restricts the team catalog before a draw.

    Every field defaults to None, meaning "unconstrained" on that axis. An
    empty ``countries`` list is also unconstrained.
    """

    min_stars: Optional[float] = Field(default=None, ge=1, le=5, alias="minStars")
    max_stars: Optional[float] = Field(default=None, ge=1, le=5, alias="maxStars")
    countries: Optional[List[str]] = None

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def validate_star_range(self):
        if self.min_stars is not None and self.max_stars is not None and self.min_stars > self.max_stars:
            raise ValueError("minStars must be <= maxStars")
        return self

    @classmethod
    def from_stored(cls, raw: Optional[dict]) -> "TeamFilter":
        """Build from the JSON stored on a session (written with aliases)."""
        return cls.model_validate(raw or {})

    def to_stored(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class AssignmentIn(BaseModel):
    player_id: int = Field(alias="playerId")
    team_id: int = Field(alias="teamId")

    model_config = {"populate_by_name": True}

"""
Team Catalog API Routes
Read-only access to the team catalog.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict

from matchday.routes.deps import get_store
from matchday.services.session_store import SessionStore

router = APIRouter()


class TeamResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    short_name: Optional[str] = None
    icon_url: Optional[str] = None
    country: Optional[str] = None
    stars: float


def parse_team_ids(raw: str) -> List[int]:
    """Comma-separated ids; blanks and non-numeric entries are dropped."""
    ids: List[int] = []
    for part in raw.split(","):
        try:
            ids.append(int(part.strip()))
        except ValueError:
            continue
    return ids


@router.get("/teams", response_model=List[TeamResponse])
def get_teams(
    ids: Optional[str] = Query(None, description="Comma-separated team ids"),
    store: SessionStore = Depends(get_store),
):
    """
    Get the team catalog, or only the teams listed in ``ids``.

    Used by clients to resolve team names and icons from ids.
    """
    if ids is not None:
        team_ids = parse_team_ids(ids)
        if not team_ids:
            return []
        return [TeamResponse.model_validate(t) for t in store.get_teams(ids=team_ids)]
    return [TeamResponse.model_validate(t) for t in store.get_teams()]

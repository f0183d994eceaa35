from typing import Optional

from sqlmodel import Field, SQLModel


class Team(SQLModel, table=True):
    """Catalog entry. Read-only for assignment and scheduling."""

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    short_name: Optional[str] = Field(default=None)
    icon_url: Optional[str] = Field(default=None)
    country: Optional[str] = Field(default=None, index=True)
    stars: float = Field(default=0)  # 0.5 steps, 1-5 for real clubs

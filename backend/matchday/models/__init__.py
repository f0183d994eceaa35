from matchday.models.fixture import Fixture, FixtureStatus
from matchday.models.game_session import GameSession, SessionType, TournamentFormat
from matchday.models.session_player import SessionPlayer
from matchday.models.team import Team

__all__ = [
    "GameSession",
    "SessionType",
    "TournamentFormat",
    "SessionPlayer",
    "Team",
    "Fixture",
    "FixtureStatus",
]

# Force SQLModel table registration at test discovery time
# This ensures all models are registered before any test database creation
from matchday.models.fixture import Fixture  # noqa: F401
from matchday.models.game_session import GameSession  # noqa: F401
from matchday.models.session_player import SessionPlayer  # noqa: F401
from matchday.models.team import Team  # noqa: F401

"""
Score Finalizer: applies a reported result to a fixture and closes it out.

Resubmitting a score for a finished fixture is allowed and overwrites the
previous result.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from matchday.models.fixture import Fixture, FixtureStatus
from matchday.services.errors import InvalidScore

logger = logging.getLogger(__name__)


def finalize(
    fixture: Fixture,
    home_goals: int,
    away_goals: int,
    went_penalties: bool = False,
    home_pen: int = 0,
    away_pen: int = 0,
    now: Optional[datetime] = None,
) -> Fixture:
    """
    Set the score fields, mark the fixture finished and stamp updated_at. Mutates and returns ``fixture``.

    Penalty counts are only checked when a shoot-out happened; otherwise they are discarded.
    """
    checked = [("home_goals", home_goals), ("away_goals", away_goals)]
    if went_penalties:
        checked += [("home_pen", home_pen), ("away_pen", away_pen)]
    for name, value in checked:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise InvalidScore(f"{name} must be a non-negative integer")

    if fixture.status == FixtureStatus.finished:
        logger.info("Overwriting result of finished fixture %s", fixture.id)

    fixture.home_goals = home_goals
    fixture.away_goals = away_goals
    fixture.went_penalties = bool(went_penalties)
    # Penalty counts only mean something after a shoot-out
    fixture.home_pen = home_pen if went_penalties else 0
    fixture.away_pen = away_pen if went_penalties else 0
    fixture.status = FixtureStatus.finished.value
    fixture.updated_at = now or datetime.now(timezone.utc)
    return fixture

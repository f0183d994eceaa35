"""
Fixture Scheduler

Turns a finalized list of player/team assignments into an ordered fixture set:
- league: single round-robin by the circle method (MD1..MD<m-1>)
- single_elim: first knockout round only (R1), randomly seeded

Output drafts carry a 1-based ``position`` that is contiguous across the whole
set; insertion order equals display order. Nothing here touches the database,
so a failure never leaves a partial fixture set behind.
"""
import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence

from matchday.models.fixture import FixtureStatus
from matchday.services.errors import InsufficientParticipants, InvalidAssignment, UnsupportedFormat
from matchday.services.random_assignment import shuffle

logger = logging.getLogger(__name__)

FORMAT_LEAGUE = "league"
FORMAT_SINGLE_ELIM = "single_elim"
SUPPORTED_FORMATS = (FORMAT_LEAGUE, FORMAT_SINGLE_ELIM)

FIRST_ROUND = "R1"


@dataclass(frozen=True)
class Assignment:
    player_id: int
    team_id: Optional[int]


@dataclass
class FixtureDraft:
    round_name: str
    position: int
    home_player_id: int
    away_player_id: int
    home_team_id: Optional[int]
    away_team_id: Optional[int]
    leg: int = 1
    status: str = FixtureStatus.assigned.value


def league_round_name(round_number: int) -> str:
    return f"MD{round_number}"


def validate_assignments(assignments: Sequence[Assignment]) -> None:
    """
    Raises:
        InsufficientParticipants: Fewer than two assignments
        InvalidAssignment: A player or team appears twice in the batch
    """
    if len(assignments) < 2:
        raise InsufficientParticipants("At least two players are required")
    seen_players = set()
    seen_teams = set()
    for a in assignments:
        if a.player_id in seen_players:
            raise InvalidAssignment(f"Player {a.player_id} is assigned more than once")
        seen_players.add(a.player_id)
        if a.team_id is not None:
            if a.team_id in seen_teams:
                raise InvalidAssignment(f"Team {a.team_id} is assigned to more than one player")
            seen_teams.add(a.team_id)


def round_robin_pairings(count: int) -> List[tuple[int, int, int]]:
    """
    Circle-method pairings. Returns list of (round_number, home_idx, away_idx).

    Odd counts get a BYE slot at index ``count``; pairings touching it are skipped.
    Each round pairs slot i with slot m-1-i (i plays at home), then rotates:
    keep slot 0, move the last slot to second, shift the others up by one.
    """
    m = count + 1 if count % 2 == 1 else count
    bye_idx = count if count % 2 == 1 else -1
    half = m // 2

    result: List[tuple[int, int, int]] = []
    positions = list(range(m))

    for round_num in range(1, m):
        for i in range(half):
            a, b = positions[i], positions[m - 1 - i]
            if a == bye_idx or b == bye_idx:
                continue
            result.append((round_num, a, b))
        positions = [positions[0]] + [positions[-1]] + positions[1:-1]

    return result


def generate_league(assignments: Sequence[Assignment]) -> List[FixtureDraft]:
    drafts: List[FixtureDraft] = []
    for round_num, home_idx, away_idx in round_robin_pairings(len(assignments)):
        home, away = assignments[home_idx], assignments[away_idx]
        drafts.append(
            FixtureDraft(
                round_name=league_round_name(round_num),
                position=len(drafts) + 1,
                home_player_id=home.player_id,
                away_player_id=away.player_id,
                home_team_id=home.team_id,
                away_team_id=away.team_id,
            )
        )
    return drafts


def generate_knockout_first_round(
    assignments: Sequence[Assignment], rng: Optional[random.Random] = None
) -> List[FixtureDraft]:
    """
    Random seeding, then consecutive pairs (0,1), (2,3), ... play in R1.

    With an odd count the last seeded entry gets a bye: no fixture is created
    and it is implicitly through. Later rounds are not generated.
    """
    seeded = shuffle(assignments, rng)
    drafts: List[FixtureDraft] = []
    for i in range(0, len(seeded) - 1, 2):
        home, away = seeded[i], seeded[i + 1]
        drafts.append(
            FixtureDraft(
                round_name=FIRST_ROUND,
                position=len(drafts) + 1,
                home_player_id=home.player_id,
                away_player_id=away.player_id,
                home_team_id=home.team_id,
                away_team_id=away.team_id,
            )
        )
    if len(seeded) % 2 == 1:
        logger.info("Player %s has a first-round bye", seeded[-1].player_id)
    return drafts


def generate_fixtures(
    assignments: Sequence[Assignment],
    tournament_format: Optional[str],
    rng: Optional[random.Random] = None,
) -> List[FixtureDraft]:
    """
    Build the complete fixture set for a tournament start.

    Raises:
        UnsupportedFormat: Format is not "league" or "single_elim"
        InsufficientParticipants / InvalidAssignment: See validate_assignments
    """
    if tournament_format not in SUPPORTED_FORMATS:
        raise UnsupportedFormat(f"Tournament format {tournament_format} not supported")
    validate_assignments(assignments)

    if tournament_format == FORMAT_LEAGUE:
        drafts = generate_league(assignments)
    else:
        drafts = generate_knockout_first_round(assignments, rng)

    logger.debug("Generated %d %s fixtures for %d players", len(drafts), tournament_format, len(assignments))
    return drafts

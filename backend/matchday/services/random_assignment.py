"""
Random team/player assignment.

Draws are unbiased: the full pool is Fisher-Yates shuffled and a prefix is
taken, so every ordering of the drawn subset is equally likely. The team filter
is applied strictly before shuffling. The random source is always injectable so
callers (and tests) can make draws deterministic.
"""
import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, TypeVar

from matchday.models.session_player import SessionPlayer
from matchday.models.team import Team
from matchday.schemas import TeamFilter
from matchday.services.errors import InsufficientParticipants, InsufficientPool, InsufficientTeams

logger = logging.getLogger(__name__)

T = TypeVar("T")

_default_rng = random.SystemRandom()


@dataclass(frozen=True)
class PlayerTeamPair:
    player: SessionPlayer
    team: Team


def shuffle(items: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """Return a uniformly shuffled copy of ``items`` (Fisher-Yates). Input is not mutated."""
    rng = rng or _default_rng
    arr = list(items)
    for i in range(len(arr) - 1, 0, -1):
        j = rng.randint(0, i)
        arr[i], arr[j] = arr[j], arr[i]
    return arr


def draw(pool: Sequence[T], count: int, rng: Optional[random.Random] = None) -> List[T]:
    """
    Draw ``count`` elements without replacement, in uniformly random order.

    Raises:
        InsufficientPool: If the pool holds fewer than ``count`` elements
    """
    if count < 0:
        raise ValueError("count must be >= 0")
    if len(pool) < count:
        raise InsufficientPool(f"Cannot draw {count} from a pool of {len(pool)}")
    return shuffle(pool, rng)[:count]


def team_matches_filter(team: Team, team_filter: Optional[TeamFilter]) -> bool:
    if team_filter is None:
        return True
    if team_filter.min_stars is not None and team.stars < team_filter.min_stars:
        return False
    if team_filter.max_stars is not None and team.stars > team_filter.max_stars:
        return False
    if team_filter.countries and team.country not in team_filter.countries:
        return False
    return True


def filter_teams(teams: Sequence[Team], team_filter: Optional[TeamFilter]) -> List[Team]:
    """Eligible teams for ``team_filter``, in catalog order."""
    return [t for t in teams if team_matches_filter(t, team_filter)]


def assign_pair(
    players: Sequence[SessionPlayer],
    teams: Sequence[Team],
    team_filter: Optional[TeamFilter] = None,
    rng: Optional[random.Random] = None,
) -> List[PlayerTeamPair]:
    """
    Friendly match draw: two players, two teams.

    Returns [home, away]; player[0] gets team[0] and plays at home.
    """
    if len(players) < 2:
        raise InsufficientParticipants("At least two players are required")
    eligible = filter_teams(teams, team_filter)
    if len(eligible) < 2:
        raise InsufficientTeams("No teams match the filter")

    drawn_players = draw(players, 2, rng)
    drawn_teams = draw(eligible, 2, rng)
    logger.info(
        "Friendly draw: %s -> %s, %s -> %s",
        drawn_players[0].id,
        drawn_teams[0].id,
        drawn_players[1].id,
        drawn_teams[1].id,
    )
    return [PlayerTeamPair(p, t) for p, t in zip(drawn_players, drawn_teams)]


def assign_all(
    players: Sequence[SessionPlayer],
    teams: Sequence[Team],
    team_filter: Optional[TeamFilter] = None,
    rng: Optional[random.Random] = None,
) -> List[PlayerTeamPair]:
    """
    Tournament draw: one distinct team per player.

    Both lists are shuffled independently and zipped, which yields a uniformly
    random perfect matching of players onto a random subset of eligible teams.
    """
    if len(players) < 2:
        raise InsufficientParticipants("At least two players are required")
    eligible = filter_teams(teams, team_filter)
    if len(eligible) < len(players):
        raise InsufficientTeams("Not enough teams match the filter for all players")

    shuffled_players = shuffle(players, rng)
    drawn_teams = draw(eligible, len(players), rng)
    logger.info("Tournament draw: %d players over %d eligible teams", len(players), len(eligible))
    return [PlayerTeamPair(p, t) for p, t in zip(shuffled_players, drawn_teams)]

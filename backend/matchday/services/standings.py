"""
Per-player standings aggregated from finished fixtures.

Win = 3 points, draw = 1. A shoot-out does not change the regulation result
for points; penalty goals are not counted as goals.
"""
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Sequence

from matchday.models.fixture import Fixture, FixtureStatus
from matchday.models.session_player import SessionPlayer

POINTS_WIN = 3
POINTS_DRAW = 1


@dataclass
class StandingRow:
    player_id: int
    display_name: str
    team_id: Optional[int] = None
    played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    goals_for: int = 0
    goals_against: int = 0

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against

    @property
    def points(self) -> int:
        return self.wins * POINTS_WIN + self.draws * POINTS_DRAW

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["goal_difference"] = self.goal_difference
        data["points"] = self.points
        return data


def _record(row: StandingRow, scored: int, conceded: int) -> None:
    row.played += 1
    row.goals_for += scored
    row.goals_against += conceded
    if scored > conceded:
        row.wins += 1
    elif scored < conceded:
        row.losses += 1
    else:
        row.draws += 1


def compute_standings(players: Sequence[SessionPlayer], fixtures: Sequence[Fixture]) -> List[StandingRow]:
    rows: Dict[int, StandingRow] = {
        p.id: StandingRow(player_id=p.id, display_name=p.display_name, team_id=p.team_id) for p in players
    }

    for f in fixtures:
        if f.status != FixtureStatus.finished:
            continue
        home = rows.get(f.home_player_id)
        away = rows.get(f.away_player_id)
        if home is not None:
            _record(home, f.home_goals, f.away_goals)
        if away is not None:
            _record(away, f.away_goals, f.home_goals)

    return sorted(
        rows.values(),
        key=lambda r: (-r.points, -r.goal_difference, -r.goals_for, r.display_name.lower()),
    )

"""
Tests for standings aggregation.
"""
from matchday.models.fixture import Fixture
from matchday.models.session_player import SessionPlayer
from matchday.services.score_finalizer import finalize
from matchday.services.standings import compute_standings


def _players():
    return [
        SessionPlayer(id=1, session_id=1, display_name="Ana", team_id=10),
        SessionPlayer(id=2, session_id=1, display_name="Ben", team_id=20),
        SessionPlayer(id=3, session_id=1, display_name="Cy", team_id=30),
    ]


def _fixture(pos, home, away):
    return Fixture(id=pos, session_id=1, round_name="MD1", position=pos, home_player_id=home, away_player_id=away)


def test_unplayed_fixtures_do_not_count():
    rows = compute_standings(_players(), [_fixture(1, 1, 2)])
    assert all(r.played == 0 and r.points == 0 for r in rows)
    # ties broken by name
    assert [r.display_name for r in rows] == ["Ana", "Ben", "Cy"]


def test_points_goals_and_ordering():
    fixtures = [
        finalize(_fixture(1, 1, 2), 2, 1),  # Ana beats Ben
        finalize(_fixture(2, 2, 3), 3, 0),  # Ben beats Cy
        finalize(_fixture(3, 3, 1), 1, 1),  # Cy draws Ana
    ]
    rows = compute_standings(_players(), fixtures)
    by_name = {r.display_name: r for r in rows}

    assert (by_name["Ana"].wins, by_name["Ana"].draws, by_name["Ana"].losses) == (1, 1, 0)
    assert by_name["Ana"].points == 4
    assert by_name["Ben"].points == 3
    assert by_name["Ben"].goal_difference == 2
    assert by_name["Cy"].points == 1
    assert by_name["Cy"].goals_against == 4
    assert [r.display_name for r in rows] == ["Ana", "Ben", "Cy"]


def test_shootout_counts_as_draw():
    fixtures = [finalize(_fixture(1, 1, 2), 0, 0, went_penalties=True, home_pen=4, away_pen=2)]
    rows = {r.player_id: r for r in compute_standings(_players(), fixtures)}
    assert rows[1].draws == 1 and rows[2].draws == 1
    assert rows[1].goals_for == 0


def test_to_dict_includes_derived_fields():
    row = compute_standings(_players(), [finalize(_fixture(1, 1, 2), 3, 1)])[0]
    data = row.to_dict()
    assert data["player_id"] == 1
    assert data["team_id"] == 10
    assert data["goal_difference"] == 2
    assert data["points"] == 3

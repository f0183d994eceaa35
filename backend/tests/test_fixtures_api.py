"""
Tests for fixture listing, score submission and the resulting standings.
"""
from fastapi.testclient import TestClient
from sqlmodel import Session

from matchday.models.fixture import Fixture
from tests.helpers import add_players, create_session_row


def _started_league(client: TestClient, session: Session, catalog, headers, names=("Ana", "Ben", "Cy", "Dee")):
    game_session = create_session_row(session, "tournament", t_format="league")
    players = add_players(session, game_session, names)
    response = client.post(
        f"/api/sessions/{game_session.code}/tournament/start",
        json={"assignments": [{"playerId": p.id, "teamId": t.id} for p, t in zip(players, catalog)]},
        headers=headers,
    )
    assert response.status_code == 200
    return game_session, players


def test_list_fixtures_ordered_with_nested_info(client: TestClient, session: Session, catalog, host_headers):
    game_session, players = _started_league(client, session, catalog, host_headers)

    fixtures = client.get(f"/api/sessions/{game_session.code}/fixtures").json()
    assert [f["position"] for f in fixtures] == [1, 2, 3, 4, 5, 6]
    assert [f["round_name"] for f in fixtures] == ["MD1", "MD1", "MD2", "MD2", "MD3", "MD3"]

    first = fixtures[0]
    assert first["status"] == "assigned"
    assert first["home_player"]["display_name"] in {"Ana", "Ben", "Cy", "Dee"}
    assert first["home_team"]["short_name"]
    assert first["home_team"]["stars"] >= 1
    assert first["home_player"]["id"] != first["away_player"]["id"]


def test_list_fixtures_unknown_session(client: TestClient):
    assert client.get("/api/sessions/NOPE42/fixtures").status_code == 404


def test_submit_score_finishes_fixture(client: TestClient, session: Session, catalog, host_headers):
    game_session, _ = _started_league(client, session, catalog, host_headers)
    fixture_id = client.get(f"/api/sessions/{game_session.code}/fixtures").json()[0]["id"]

    response = client.patch(
        f"/api/fixtures/{fixture_id}/score", json={"home_goals": 2, "away_goals": 1}, headers=host_headers
    )
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "finished"
    assert (data["home_goals"], data["away_goals"]) == (2, 1)
    assert data["went_penalties"] is False

    session.expire_all()
    stored = session.get(Fixture, fixture_id)
    assert stored.status == "finished"
    assert stored.home_goals == 2


def test_resubmitting_score_overwrites(client: TestClient, session: Session, catalog, host_headers):
    game_session, _ = _started_league(client, session, catalog, host_headers)
    fixture_id = client.get(f"/api/sessions/{game_session.code}/fixtures").json()[0]["id"]
    url = f"/api/fixtures/{fixture_id}/score"

    client.patch(url, json={"home_goals": 2, "away_goals": 1}, headers=host_headers)
    response = client.patch(
        url,
        json={"home_goals": 1, "away_goals": 1, "went_penalties": True, "home_pen": 3, "away_pen": 4},
        headers=host_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert (data["home_goals"], data["away_goals"]) == (1, 1)
    assert (data["home_pen"], data["away_pen"]) == (3, 4)
    assert data["status"] == "finished"


def test_submit_score_guards(client: TestClient, session: Session, catalog, host_headers, other_headers):
    game_session, _ = _started_league(client, session, catalog, host_headers)
    fixture_id = client.get(f"/api/sessions/{game_session.code}/fixtures").json()[0]["id"]
    url = f"/api/fixtures/{fixture_id}/score"
    body = {"home_goals": 1, "away_goals": 0}

    assert client.patch(url, json=body).status_code == 401
    assert client.patch(url, json=body, headers=other_headers).status_code == 403
    assert client.patch("/api/fixtures/99999/score", json=body, headers=host_headers).status_code == 404
    assert client.patch(url, json={"home_goals": -1, "away_goals": 0}, headers=host_headers).status_code == 422
    assert client.patch(url, json={"home_goals": 1}, headers=host_headers).status_code == 422

    session.expire_all()
    assert session.get(Fixture, fixture_id).status == "assigned"


def test_stats_reflect_finished_fixtures(client: TestClient, session: Session, catalog, host_headers):
    game_session, players = _started_league(client, session, catalog, host_headers, names=("Ana", "Ben"))
    (fixture,) = client.get(f"/api/sessions/{game_session.code}/fixtures").json()

    client.patch(f"/api/fixtures/{fixture['id']}/score", json={"home_goals": 3, "away_goals": 0}, headers=host_headers)

    rows = client.get(f"/api/sessions/{game_session.code}/stats").json()
    winner, loser = rows
    assert winner["player_id"] == fixture["home_player"]["id"]
    assert (winner["points"], winner["goal_difference"], winner["wins"]) == (3, 3, 1)
    assert (loser["points"], loser["losses"], loser["goals_against"]) == (0, 1, 3)
    assert winner["team_id"] is not None

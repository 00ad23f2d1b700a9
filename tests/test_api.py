from typing import Any, Dict, Iterator

import pytest
from fastapi.testclient import TestClient

from backend.api.main import create_app
from backend.draft.engine import USER_TEAM_ID

API = "/api/v1"

TEST_CONFIG = {
    "thinking_delay_min_ms": 0,
    "thinking_delay_max_ms": 0,
    "ai_noise": 0.0,
    "random_seed": 1,
}


@pytest.fixture
def client() -> Iterator[TestClient]:
    with TestClient(create_app(TEST_CONFIG)) as test_client:
        yield test_client


def _create_draft(client: TestClient, **overrides: Any) -> Dict[str, Any]:
    body = {"userName": "Me", "userDraftPosition": 1, "settings": {"numTeams": 4, "numRounds": 3}}
    body.update(overrides)
    response = client.post(f"{API}/drafts", json=body)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def _error(response) -> Dict[str, Any]:
    body = response.json()
    assert body["success"] is False
    assert body["data"] is None
    return body["error"]


class TestHealthAndCatalog:
    def test_root(self, client: TestClient) -> None:
        assert client.get("/").json()["name"] == "Fantasy Draft Simulator"

    def test_health(self, client: TestClient) -> None:
        body = client.get(f"{API}/health").json()
        assert body["success"] is True
        assert body["data"]["status"] == "healthy"
        assert body["data"]["checks"]["player_source"] == "mock"

    def test_detailed_health(self, client: TestClient) -> None:
        _create_draft(client)
        data = client.get(f"{API}/health/detailed").json()["data"]
        assert data["active_drafts"] == 1
        assert "cpu_percent" in data["system_metrics"]

    def test_players(self, client: TestClient) -> None:
        data = client.get(f"{API}/players", params={"limit": 10, "scoring_format": "half_ppr"}).json()["data"]
        assert len(data) == 10
        assert [p["adp"] for p in data] == sorted(p["adp"] for p in data)

    def test_players_bad_format(self, client: TestClient) -> None:
        response = client.get(f"{API}/players", params={"scoring_format": "dynasty"})
        assert response.status_code == 400
        assert _error(response)["message"] == "Invalid scoring format. Must be standard, ppr, or half_ppr"

    def test_profiles(self, client: TestClient) -> None:
        data = client.get(f"{API}/profiles").json()["data"]
        assert len(data) == 7
        assert {"id", "name", "panic_factor", "positional_preferences"} <= set(data[0])


class TestCreateDraft:
    def test_create_and_fetch(self, client: TestClient) -> None:
        draft = _create_draft(client)

        assert draft["status"] == "in_progress"
        assert draft["current_team_id"] == USER_TEAM_ID
        assert draft["is_user_turn"] is True
        assert draft["remaining_picks"] == 12
        assert len(draft["teams"]) == 4

        fetched = client.get(f"{API}/drafts/{draft['id']}").json()["data"]
        assert fetched["id"] == draft["id"]

    def test_player_limit(self, client: TestClient) -> None:
        draft = _create_draft(client, playerLimit=40)
        assert len(draft["available_players"]) == 40

    def test_profiles_by_draft_position(self, client: TestClient) -> None:
        draft = _create_draft(client, userDraftPosition=2, aiProfileIds=["homer", None, "analyst", "gambler"])
        ai_profiles = [team["ai_profile"]["id"] for team in draft["teams"] if not team["is_user"]]
        assert ai_profiles == ["homer", "analyst", "gambler"]

    def test_seat_outside_league(self, client: TestClient) -> None:
        response = client.post(f"{API}/drafts", json={"userDraftPosition": 6, "settings": {"numTeams": 4}})
        assert response.status_code == 400
        assert "outside 1-4" in _error(response)["message"]

    def test_validation_error(self, client: TestClient) -> None:
        response = client.post(f"{API}/drafts", json={"userDraftPosition": 0})
        assert response.status_code == 422
        assert _error(response)["type"] == "validation_error"

    def test_unknown_draft(self, client: TestClient) -> None:
        response = client.get(f"{API}/drafts/nope")
        assert response.status_code == 404
        assert _error(response)["message"] == "Draft nope not found"


class TestPicks:
    def test_user_pick(self, client: TestClient) -> None:
        draft = _create_draft(client)
        player_id = draft["available_players"][0]["id"]

        response = client.post(f"{API}/drafts/{draft['id']}/picks",
                               json={"teamId": USER_TEAM_ID, "playerId": player_id})
        data = response.json()["data"]

        assert response.status_code == 200
        assert data["pick"]["player"]["id"] == player_id
        assert data["pick"]["is_ai_pick"] is False
        assert data["draft"]["current_team_id"] != USER_TEAM_ID

    def test_wrong_turn(self, client: TestClient) -> None:
        draft = _create_draft(client)
        response = client.post(f"{API}/drafts/{draft['id']}/picks",
                               json={"teamId": draft["teams"][1]["id"], "playerId": draft["available_players"][0]["id"]})
        assert response.status_code == 400
        assert _error(response)["message"] == "Not this team's turn"

    def test_unknown_team(self, client: TestClient) -> None:
        draft = _create_draft(client)
        response = client.post(f"{API}/drafts/{draft['id']}/picks",
                               json={"team_id": "ghost", "player_id": draft["available_players"][0]["id"]})
        assert response.status_code == 400
        assert _error(response) == {"type": "http_error", "message": "Not this team's turn", "status_code": 400}

    def test_ai_pick_on_user_turn(self, client: TestClient) -> None:
        draft = _create_draft(client)
        response = client.post(f"{API}/drafts/{draft['id']}/ai-pick")
        assert response.status_code == 400
        assert _error(response)["message"] == "Cannot make AI pick for user team"

    def test_ai_pick(self, client: TestClient) -> None:
        draft = _create_draft(client)
        client.post(f"{API}/drafts/{draft['id']}/picks",
                    json={"teamId": USER_TEAM_ID, "playerId": draft["available_players"][0]["id"]})

        response = client.post(f"{API}/drafts/{draft['id']}/ai-pick")
        data = response.json()["data"]

        assert response.status_code == 200
        assert data["pick"]["is_ai_pick"] is True
        assert data["pick"]["team_id"] == draft["teams"][1]["id"]

    def test_advance_and_undo(self, client: TestClient) -> None:
        draft = _create_draft(client)
        draft_id = draft["id"]
        client.post(f"{API}/drafts/{draft_id}/picks",
                    json={"teamId": USER_TEAM_ID, "playerId": draft["available_players"][0]["id"]})

        advanced = client.post(f"{API}/drafts/{draft_id}/advance").json()["data"]
        assert len(advanced["picks"]) == 6
        assert advanced["draft"]["is_user_turn"] is True
        assert advanced["draft"]["current_pick_index"] == 7

        undone = client.post(f"{API}/drafts/{draft_id}/undo").json()["data"]
        assert undone["current_pick_index"] == 6
        assert undone["is_user_turn"] is False

    def test_advance_with_limit(self, client: TestClient) -> None:
        draft = _create_draft(client)
        client.post(f"{API}/drafts/{draft['id']}/picks",
                    json={"teamId": USER_TEAM_ID, "playerId": draft["available_players"][0]["id"]})

        advanced = client.post(f"{API}/drafts/{draft['id']}/advance", json={"maxPicks": 2}).json()["data"]
        assert len(advanced["picks"]) == 2


class TestAnalysis:
    def test_candidates_for_user(self, client: TestClient) -> None:
        draft = _create_draft(client)
        data = client.get(f"{API}/drafts/{draft['id']}/candidates", params={"count": 3}).json()["data"]

        assert data["team_id"] == USER_TEAM_ID
        assert len(data["candidates"]) == 3
        totals = [c["score"]["total_score"] for c in data["candidates"]]
        assert totals == sorted(totals, reverse=True)

    def test_candidates_unknown_team(self, client: TestClient) -> None:
        draft = _create_draft(client)
        response = client.get(f"{API}/drafts/{draft['id']}/candidates", params={"team_id": "ghost"})
        assert response.status_code == 404

    def test_insights(self, client: TestClient) -> None:
        draft = _create_draft(client)
        data = client.get(f"{API}/drafts/{draft['id']}/insights").json()["data"]

        assert data["runs_detected"] == []
        assert data["picks_until_user_turn"] == 0
        assert data["user_needs"]["RB"] == 100
        assert data["user_needs"]["K"] == 30

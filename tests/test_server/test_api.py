"""
Tests for the HTTP API.
"""

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from pokernight.agents import CallAgent
from pokernight.server import routes
from pokernight.server.app import app


@pytest.fixture
def client():
    """Test client with no session in progress."""
    with TestClient(app) as test_client:
        test_client.post("/reset_game")
        yield test_client
        test_client.post("/reset_game")


@pytest.fixture
def offline_client(client, monkeypatch):
    """
    Client with a seeded three-seat offline session whose bots only check
    or call.

    On the first hand seat 1 deals, seat 2 posts the small blind and the
    human posts the big blind, so both bots call and the human holds the
    option with 10 in: fold, check or raise to 20..1000.
    """
    response = client.post("/init_game", json={"player_count": 3, "mode": "offline", "seed": 7})
    assert response.status_code == 200
    monkeypatch.setattr(routes.get_dispatcher(), "fallback", CallAgent())
    return client


def play_out_hand(client, limit: int = 100):
    """Check or call for the human until the hand ends."""
    response = None
    for _ in range(limit):
        state = client.get("/get_game_state").json()
        if state["public_info"]["stage"] == "gameOver":
            return response
        moves = state["private_info"]["available_moves"]
        assert moves, "human should be the only seat waiting"
        action = "check" if "check" in moves else "call"
        response = client.post("/take_action", json={"action_type": action})
        assert response.status_code == 200
    pytest.fail("hand did not finish")


class TestSessionSetup:
    """Initialization and reset."""

    def test_requires_init(self, client):
        assert client.get("/get_game_state").status_code == 400
        assert client.post("/start_hand").status_code == 400
        assert client.post("/take_action", json={"action_type": "call"}).status_code == 400

    def test_dispatcher_requires_init(self, client):
        with pytest.raises(HTTPException) as excinfo:
            routes.get_dispatcher()
        assert excinfo.value.status_code == 400

    def test_init_game(self, client):
        response = client.post("/init_game", json={"player_count": 3, "mode": "offline"})
        data = response.json()
        assert data["success"] is True
        assert data["player_count"] == 3
        assert data["mode"] == "offline"

        state = client.get("/get_game_state").json()
        assert len(state["public_info"]["players"]) == 3
        assert state["public_info"]["stage"] == "gameOver"

    def test_init_rejects_bad_player_count(self, client):
        assert client.post("/init_game", json={"player_count": 1}).status_code == 422
        assert client.post("/init_game", json={"player_count": 9}).status_code == 422

    def test_init_rejects_bad_mode(self, client):
        response = client.post("/init_game", json={"player_count": 3, "mode": "telepathy"})
        assert response.status_code == 400

    def test_same_seed_deals_same_cards(self, client):
        hands = []
        for _ in range(2):
            client.post("/init_game", json={"player_count": 4, "mode": "offline", "seed": 21})
            client.post("/start_hand")
            hands.append(client.get("/get_game_state").json()["private_info"]["hand"])
            client.post("/reset_game")
        assert len(hands[0]) == 2
        assert hands[0] == hands[1]

    def test_reset(self, offline_client):
        assert offline_client.post("/reset_game").json()["success"] is True
        assert offline_client.get("/get_game_state").status_code == 400


class TestHandFlow:
    """Playing hands through the API."""

    def test_start_hand(self, offline_client):
        data = offline_client.post("/start_hand").json()
        assert data["success"] is True
        assert data["hand_number"] == 1
        assert data["session_outcome"] == "IN_PROGRESS"
        assert data["bot_actions"] == ["Called $10", "Called $5"]

        private = offline_client.get("/get_game_state").json()["private_info"]
        assert len(private["hand"]) == 2
        assert private["is_my_turn"] is True
        assert private["available_moves"] == ["fold", "check", "raise"]

    def test_cannot_start_twice(self, offline_client):
        offline_client.post("/start_hand")
        assert offline_client.post("/start_hand").status_code == 400

    def test_play_hand_to_completion(self, offline_client):
        offline_client.post("/start_hand")
        last = play_out_hand(offline_client).json()

        assert last["winners"]
        assert len(last["board"]) == 5
        assert len(last["players_cards"]) == 3

        public = offline_client.get("/get_game_state").json()["public_info"]
        assert public["stage"] == "gameOver"
        assert public["pot"] == 0
        assert sum(p["chips"] for p in public["players"]) <= 3000

    def test_several_hands(self, offline_client):
        for hand in range(1, 4):
            data = offline_client.post("/start_hand").json()
            assert data["success"] is True
            assert data["hand_number"] == hand
            play_out_hand(offline_client)


class TestActions:
    """Action validation."""

    def test_invalid_action_type(self, offline_client):
        offline_client.post("/start_hand")
        response = offline_client.post("/take_action", json={"action_type": "bet"})
        assert response.status_code == 400

    def test_negative_amount_rejected(self, offline_client):
        offline_client.post("/start_hand")
        response = offline_client.post("/take_action", json={"action_type": "raise", "amount": -5})
        assert response.status_code == 422

    def test_action_without_hand(self, offline_client):
        response = offline_client.post("/take_action", json={"action_type": "call"})
        assert response.status_code == 400

    def test_raise_below_minimum(self, offline_client):
        offline_client.post("/start_hand")
        response = offline_client.post("/take_action", json={"action_type": "raise", "amount": 19})
        assert response.status_code == 400

        state = offline_client.get("/get_game_state").json()
        assert state["public_info"]["pot"] == 30
        assert state["private_info"]["is_my_turn"] is True

    def test_minimum_raise_accepted(self, offline_client):
        offline_client.post("/start_hand")
        data = offline_client.post("/take_action", json={"action_type": "raise", "amount": 20}).json()

        assert data["success"] is True
        assert data["action_type"] == "raise"
        assert data["amount"] == 10
        assert data["bot_actions"][:2] == ["Called $10", "Called $10"]

        public = offline_client.get("/get_game_state").json()["public_info"]
        assert public["stage"] == "flop"
        assert public["pot"] == 60

    def test_legal_actions(self, offline_client):
        assert offline_client.get("/legal_actions").json()["message"] == "No hand in progress"

        offline_client.post("/start_hand")
        legal = offline_client.get("/legal_actions").json()
        assert legal["actions"] == ["fold", "check", "raise"]
        assert legal["chips_to_call"] == 0
        assert legal["raise_range"] == {"min": 20, "max": 1000}


class TestModes:
    """Switching strategies."""

    def test_set_mode(self, offline_client):
        data = offline_client.post("/set_mode", json={"mode": "online"}).json()
        assert data["mode"] == "online"
        state = offline_client.get("/get_game_state").json()
        assert state["public_info"]["game_mode"] == "online"

    def test_set_invalid_mode(self, offline_client):
        assert offline_client.post("/set_mode", json={"mode": "dream"}).status_code == 400

    def test_set_mode_requires_game(self, client):
        assert client.post("/set_mode", json={"mode": "offline"}).status_code == 400

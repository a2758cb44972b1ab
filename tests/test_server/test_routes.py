"""
Tests for the HTTP API and the WebSocket feed.
"""

import pytest
from fastapi.testclient import TestClient

from holdemarena.server.app import create_app
from holdemarena.server.room import RoomService


@pytest.fixture
def client():
    """Client for an app whose room deals every hand from seed 42."""
    app = create_app(RoomService(seed_factory=lambda: 42))
    with TestClient(app) as test_client:
        yield test_client


def post(client, **body):
    return client.post("/api/room", json=body)


class TestRoomEndpoint:
    """Tests for GET/POST /api/room."""

    def test_get_room(self, client):
        response = client.get("/api/room")
        assert response.status_code == 200

        room = response.json()["room"]
        assert room["stage"] == "IDLE"
        assert room["handId"] == 0
        assert len(room["players"]) == 4
        assert set(room["players"][0]) == {
            "index", "name", "chips", "bet", "totalHandBet", "hasFolded",
        }

    def test_join(self, client):
        response = post(client, op="join", name="alice")
        assert response.status_code == 200

        data = response.json()
        assert data["playerIndex"] == 0
        assert data["room"]["players"][0]["name"] == "alice"

    def test_join_blank_name(self, client):
        response = post(client, op="join", name="")
        assert response.status_code == 400
        assert response.json() == {"error": "name required"}

    def test_start_and_move(self, client):
        room = post(client, op="start").json()["room"]
        assert room["deckSeed"] == 42
        assert room["currentTurnIndex"] == 0

        room = post(client, op="move", playerIndex=0, move="raise", amount=300).json()["room"]
        assert room["highestBet"] == 300
        assert room["players"][0]["totalHandBet"] == 300
        assert room["currentTurnIndex"] == 1

    def test_rejected_move(self, client):
        post(client, op="start")
        response = post(client, op="move", playerIndex=2, move="call")
        assert response.status_code == 400
        assert "error" in response.json()

    def test_invalid_player_index(self, client):
        post(client, op="start")
        response = post(client, op="move", playerIndex=9, move="call")
        assert response.status_code == 400
        assert response.json() == {"error": "invalid playerIndex"}

    def test_settle(self, client):
        post(client, op="start")
        room = post(client, op="settle", winners=[2]).json()["room"]
        assert room["winners"] == [2]
        assert room["stage"] == "SHOWDOWN"

    def test_settle_twice(self, client):
        post(client, op="start")
        post(client, op="settle", winners=[2])
        assert post(client, op="settle", winners=[2]).status_code == 400

    @pytest.mark.parametrize("body", [
        {},
        {"op": "dance"},
        {"op": "move", "move": "call"},
        {"op": "settle", "winners": "everyone"},
    ])
    def test_invalid_body(self, client, body):
        response = client.post("/api/room", json=body)
        assert response.status_code == 400
        assert response.json() == {"error": "invalid body"}


class TestOddsEndpoint:
    """Tests for POST /api/odds."""

    def test_odds(self, client):
        response = client.post(
            "/api/odds", json={"hero": ["Ah", "Kh"], "board": ["2h", "7h", "9c"], "iterations": 200}
        )
        assert response.status_code == 200

        data = response.json()
        assert 0 <= data["equity"]["equity"] <= 100
        assert data["equity"]["iterations"] == 200
        assert data["outs"]["effective_outs"] == 9

    def test_bad_card(self, client):
        response = client.post("/api/odds", json={"hero": ["Ah", "Zz"]})
        assert response.status_code == 400
        assert "error" in response.json()

    def test_iterations_out_of_range(self, client):
        response = client.post("/api/odds", json={"hero": ["Ah", "Kh"], "iterations": 0})
        assert response.status_code == 400
        assert response.json() == {"error": "invalid body"}


class TestWebSocket:
    """Tests for the room feed."""

    def test_room_sent_on_connect(self, client):
        with client.websocket_connect("/ws") as websocket:
            message = websocket.receive_json()
            assert message["type"] == "room"
            assert message["room"]["stage"] == "IDLE"

    def test_operations_are_pushed(self, client):
        with client.websocket_connect("/ws") as websocket:
            websocket.receive_json()
            post(client, op="start")
            message = websocket.receive_json()
            assert message["room"]["stage"] == "PREFLOP"

    def test_get_state(self, client):
        with client.websocket_connect("/ws") as websocket:
            websocket.receive_json()
            websocket.send_json({"type": "get_state"})
            assert websocket.receive_json()["type"] == "room"

    def test_unknown_message(self, client):
        with client.websocket_connect("/ws") as websocket:
            websocket.receive_json()
            websocket.send_json({"type": "shout"})
            assert websocket.receive_json()["type"] == "error"

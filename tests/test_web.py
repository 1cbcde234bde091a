"""
Tests for the FastAPI JSON API.
"""

import pytest
from fastapi.testclient import TestClient

from web.app import app

START_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w - - 0 1"
FOOLS_MATE_FEN = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"
STALEMATE_FEN = "KP6/PP6/8/8/8/8/8/7k w - - 0 1"


@pytest.fixture
def client():
    return TestClient(app)


class TestNew:
    def test_start_position(self, client):
        response = client.get("/api/new")
        assert response.status_code == 200
        assert response.json() == {"fen": START_FEN, "turn": "white"}


class TestValidate:
    def test_valid_move(self, client):
        response = client.post("/api/validate", json={"fen": START_FEN, "move": "e2e4"})
        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is True
        assert data["fen"] == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b - - 0 1"

    def test_illegal_move(self, client):
        response = client.post("/api/validate", json={"fen": START_FEN, "move": "e2e5"})
        assert response.json() == {"valid": False, "fen": None}

    def test_wrong_side(self, client):
        response = client.post("/api/validate", json={"fen": START_FEN, "move": "e7e5"})
        assert response.json()["valid"] is False

    def test_malformed_move(self, client):
        response = client.post("/api/validate", json={"fen": START_FEN, "move": "e2"})
        assert response.status_code == 422

    def test_bad_fen(self, client):
        response = client.post("/api/validate", json={"fen": "garbage", "move": "e2e4"})
        assert response.status_code == 400


class TestStatus:
    def test_start_position(self, client):
        data = client.post("/api/status", json={"fen": START_FEN}).json()
        assert data["turn"] == "white"
        assert data["in_check"] is False
        assert data["game_over"] is False
        assert data["winner"] is None
        assert len(data["legal_moves"]) == 20
        assert data["legal_moves"][0] == "a2a4"

    def test_checkmate(self, client):
        data = client.post("/api/status", json={"fen": FOOLS_MATE_FEN}).json()
        assert data["in_check"] is True
        assert data["checkmate"] is True
        assert data["stalemate"] is False
        assert data["game_over"] is True
        assert data["winner"] == "black"

    def test_stalemate(self, client):
        data = client.post("/api/status", json={"fen": STALEMATE_FEN}).json()
        assert data["stalemate"] is True
        assert data["game_over"] is True
        assert data["winner"] is None
        assert data["legal_moves"] == []

    def test_bad_fen(self, client):
        assert client.post("/api/status", json={"fen": ""}).status_code == 400


class TestMove:
    def test_easy(self, client):
        response = client.post("/api/move", json={"fen": START_FEN, "difficulty": "easy"})
        assert response.status_code == 200
        data = response.json()
        legal = client.post("/api/status", json={"fen": START_FEN}).json()["legal_moves"]
        assert data["move"] in legal
        assert data["nodes"] == 0
        assert " b " in data["fen"]

    def test_medium_takes_queen(self, client):
        fen = "7k/8/8/8/8/8/8/R3q2K w - - 0 1"
        data = client.post("/api/move", json={"fen": fen, "difficulty": "medium"}).json()
        assert data["move"] == "a1e1"
        assert data["nodes"] > 0

    def test_default_difficulty(self, client):
        fen = "7k/8/8/8/8/8/8/R3q2K w - - 0 1"
        assert client.post("/api/move", json={"fen": fen}).json()["move"] == "a1e1"

    def test_no_move(self, client):
        response = client.post("/api/move", json={"fen": STALEMATE_FEN, "difficulty": "easy"})
        assert response.status_code == 400

    def test_unknown_difficulty(self, client):
        response = client.post("/api/move", json={"fen": START_FEN, "difficulty": "brutal"})
        assert response.status_code == 422

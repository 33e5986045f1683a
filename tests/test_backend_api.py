import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).parent.parent))

from backend.app.core.cleanup import cleanup_scheduler
from backend.app.main import app
from backend.app.state.store import registry

PREFIX = "/api/game"


@pytest.fixture
def client():
    return TestClient(app)


def new_game(client):
    response = client.post(PREFIX)
    assert response.status_code == 200
    return response.json()


def move(client, game_id, row, col):
    return client.post(f"{PREFIX}/{game_id}/move", json={"row": row, "col": col})


def test_create_game(client):
    data = new_game(client)

    assert data["status"] == "NEW"
    assert data["current_player"] == "X"
    assert data["winner"] is None
    assert data["last_move"] is None
    assert len(data["board"]) == 3
    assert data["board"][1][2] == {"position": {"row": 1, "col": 2}, "player": None}
    assert data["id"] in registry


def test_wire_format_is_snake_case(client):
    game_id = new_game(client)["id"]
    data = move(client, game_id, 0, 0).json()

    assert set(data) == {"id", "board", "current_player", "status", "winner", "last_move"}
    assert set(data["last_move"]) == {"player", "position", "timestamp"}

    error = move(client, game_id, 0, 0)
    assert error.status_code == 400
    assert set(error.json()) == {"detail"}


def test_get_game(client):
    game_id = new_game(client)["id"]

    response = client.get(f"{PREFIX}/{game_id}")

    assert response.status_code == 200
    assert response.json()["id"] == game_id


def test_get_unknown_game_is_404(client):
    response = client.get(f"{PREFIX}/invalid-id")
    assert response.status_code == 404
    assert "invalid-id" in response.json()["detail"]


def test_make_move(client):
    game_id = new_game(client)["id"]

    response = move(client, game_id, 1, 1)

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "IN_PROGRESS"
    assert data["current_player"] == "O"
    assert data["board"][1][1]["player"] == "X"
    assert data["last_move"]["player"] == "X"
    assert data["last_move"]["position"] == {"row": 1, "col": 1}
    assert data["last_move"]["timestamp"]


def test_invalid_move_is_400(client):
    game_id = new_game(client)["id"]
    move(client, game_id, 1, 1)

    assert move(client, game_id, 1, 1).status_code == 400
    assert move(client, game_id, 3, 0).status_code == 400
    assert move(client, game_id, -1, 0).status_code == 400


def test_move_on_unknown_game_is_404(client):
    assert move(client, "invalid-id", 0, 0).status_code == 404


def test_move_on_completed_game_is_409(client):
    game_id = new_game(client)["id"]
    for row, col in [(0, 0), (1, 0), (0, 1), (1, 1), (0, 2)]:
        data = move(client, game_id, row, col).json()
    assert data["status"] == "COMPLETED"
    assert data["winner"] == "X"

    response = move(client, game_id, 2, 2)

    assert response.status_code == 409
    assert client.get(f"{PREFIX}/{game_id}").json() == data


def test_ai_move(client):
    game_id = new_game(client)["id"]
    for row, col in [(1, 1), (0, 0), (2, 2)]:
        move(client, game_id, row, col)

    response = client.post(f"{PREFIX}/{game_id}/ai-move")

    assert response.status_code == 200
    data = response.json()
    assert data["last_move"]["player"] == "O"
    assert data["last_move"]["position"] == {"row": 0, "col": 2}


def test_ai_move_on_unknown_game_is_404(client):
    assert client.post(f"{PREFIX}/invalid-id/ai-move").status_code == 404


def test_ai_move_on_abandoned_game_is_409(client):
    game_id = new_game(client)["id"]
    client.post(f"{PREFIX}/{game_id}/abandon")

    assert client.post(f"{PREFIX}/{game_id}/ai-move").status_code == 409


def test_abandon_game(client):
    game_id = new_game(client)["id"]

    response = client.post(f"{PREFIX}/{game_id}/abandon")

    assert response.status_code == 200
    assert response.json()["status"] == "ABANDONED"
    assert move(client, game_id, 0, 0).status_code == 409


def test_abandon_unknown_game_is_404(client):
    assert client.post(f"{PREFIX}/invalid-id/abandon").status_code == 404


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "active"
    assert data["active_games"] == len(registry)


def test_lifespan_runs_cleanup_scheduler():
    with TestClient(app) as client:
        assert cleanup_scheduler.running
        assert client.get("/health").status_code == 200
    assert not cleanup_scheduler.running

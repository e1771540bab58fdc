import time

import pytest
from fastapi.testclient import TestClient
from wordfind.server import create_app
from wordfind.settings import settings

CAT_BOARD = [["c", "a"], ["t", "s"]]


@pytest.fixture
def client():
    with TestClient(create_app()) as c:
        yield c


def _wait_for_state(client, state: str, timeout: float = 30.0) -> dict:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        data = client.get("/round").json()
        if data["state"] == state:
            return data
        time.sleep(0.05)
    raise AssertionError(f"round never reached {state!r}: {data}")


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    assert resp.json()["dictionary_words"] > 0


def test_no_round_yet(client):
    assert client.get("/round").status_code == 409
    assert client.post("/round/submit", json={"word": "cat"}).status_code == 409


def test_round_flow_on_fixed_board(client):
    resp = client.post("/round", json={"board": CAT_BOARD})
    assert resp.status_code == 202
    assert resp.json()["board"] == CAT_BOARD

    data = _wait_for_state(client, "running")
    assert data["findable_count"] >= 3
    assert data["loading"] is False

    resp = client.post("/round/submit", json={"word": "cat"})
    assert resp.json()["accepted"] is True
    resp = client.post("/round/submit", json={"word": "cat"})
    assert resp.json()["accepted"] is False
    resp = client.post("/round/submit", json={"word": "dog"})
    assert resp.json()["accepted"] is False
    assert resp.json()["words_found"] == ["cat"]


def test_preview_highlights_path(client):
    client.post("/round", json={"board": CAT_BOARD})
    resp = client.get("/round/preview", params={"word": "cat"})
    data = resp.json()
    assert data["path"] == [[0, 0], [0, 1], [1, 0]]
    assert [[cell["selected"] for cell in row] for row in data["board"]] == [[True, True], [True, False]]

    data = client.get("/round/preview", params={"word": "dog"}).json()
    assert data["path"] is None
    assert not any(cell["selected"] for row in data["board"] for cell in row)


def test_random_board_uses_settings(client):
    resp = client.post("/round")
    board = resp.json()["board"]
    assert len(board) == settings.BOARD_HEIGHT
    assert all(len(row) == settings.BOARD_WIDTH for row in board)


def test_round_ends_and_rejects_words(client, monkeypatch):
    monkeypatch.setattr(settings, "ROUND_DURATION_MS", 300)
    client.post("/round", json={"board": CAT_BOARD})
    data = _wait_for_state(client, "ended")
    assert data["time_remaining_ms"] == 0
    assert client.post("/round/submit", json={"word": "cat"}).json()["accepted"] is False


def test_invalid_board_rejected(client):
    resp = client.post("/round", json={"board": [["c", "a"], ["t"]]})
    assert resp.status_code == 400
    resp = client.post("/round", json={"board": [["ca", "t"]]})
    assert resp.status_code == 400


def test_submit_requires_word(client):
    client.post("/round", json={"board": CAT_BOARD})
    assert client.post("/round/submit", json={"text": "cat"}).status_code == 400


def test_settings_roundtrip(client, monkeypatch):
    monkeypatch.setattr(settings, "BOARD_WIDTH", settings.BOARD_WIDTH)
    resp = client.get("/api/settings")
    assert resp.json()["field_types"]["BOARD_WIDTH"] == "int"

    resp = client.post("/api/settings", json={"BOARD_WIDTH": 5})
    assert resp.status_code == 200
    assert resp.json()["updated"]["BOARD_WIDTH"] == 5

    resp = client.post("/api/settings", json={"FINDER_WORKERS": 3})
    assert resp.status_code == 400
    assert "FINDER_WORKERS" in resp.json()["errors"]

# tests/test_server.py
import pytest

from memory_match.config import TestingConfig
from memory_match.server import create_app


@pytest.fixture
def app(scheduler):
    return create_app(TestingConfig, scheduler=scheduler)


@pytest.fixture
def client(app):
    return app.test_client()


def game_of(app):
    return app.extensions["memory_match"]


def pair_ids(game):
    by_symbol = {}
    for c in game.board.cards:
        by_symbol.setdefault(c.symbol, []).append(c.id)
    return list(by_symbol.values())


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.get_json() == {"status": "ok"}


def test_state_hides_symbols(client):
    data = client.get("/state").get_json()
    assert data["status"] == "ok"
    board = data["board"]
    assert len(board["cards"]) == 2 * len(TestingConfig.SYMBOLS)
    assert all(c["symbol"] is None for c in board["cards"])
    assert board["is_complete"] is False


def test_pick_reveals_one_symbol(app, client):
    r = client.post("/pick", json={"card": 3})
    assert r.status_code == 200
    cards = r.get_json()["board"]["cards"]
    assert cards[3]["state"] == "revealed"
    assert cards[3]["symbol"] == game_of(app).board.card(3).symbol
    assert [c["symbol"] for i, c in enumerate(cards) if i != 3] == [None] * (len(cards) - 1)


@pytest.mark.parametrize("body", [
    {}, {"card": "x"}, {"card": None}, {"other": 1},
    {"card": 2.9}, {"card": "2"}, {"card": True}, [2],
])
def test_pick_malformed(app, client, body):
    r = client.post("/pick", json=body)
    assert r.status_code == 400
    assert r.get_json()["status"] == "error"
    assert game_of(app).board.pending == []


def test_pick_not_json(client):
    r = client.post("/pick", data="nope", content_type="text/plain")
    assert r.status_code == 400


def test_pick_out_of_range_is_noop(client):
    before = client.get("/state").get_json()["board"]
    r = client.post("/pick", json={"card": 500})
    assert r.status_code == 200
    assert r.get_json()["board"] == before


def test_full_game_over_http(app, client, scheduler):
    game = game_of(app)
    for first, second in pair_ids(game):
        client.post("/pick", json={"card": first})
        client.post("/pick", json={"card": second})
        scheduler.advance(0)

    board = client.get("/state").get_json()["board"]
    assert board["is_complete"] is True
    assert board["matched_pairs"] == len(TestingConfig.SYMBOLS)
    assert all(c["state"] == "matched" for c in board["cards"])

    text = client.get("/board").get_data(as_text=True)
    assert "?" not in text

    fresh = client.post("/reset").get_json()["board"]
    assert fresh["matched_pairs"] == 0
    assert fresh["generation"] != board["generation"]
    assert all(c["state"] == "hidden" for c in fresh["cards"])

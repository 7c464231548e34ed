import json

import pytest

from logic import end, info, move, start
from server import GameLog, create_app

HANDLERS = {"info": info, "start": start, "move": move, "end": end}


@pytest.fixture
def client():
    return create_app(HANDLERS).test_client()


def test_info_route(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.get_json()["apiversion"] == "1"
    assert response.headers["server"] == "battlesnake/github/starter-snake-python"


def test_move_route(client, make_game_state):
    data = make_game_state(you=[(5, 5), (4, 5)], food=[(8, 5)])
    response = client.post("/move", json=data)
    assert response.status_code == 200
    assert response.get_json() == {"move": "right"}


def test_move_route_falls_back_on_bad_request(client):
    response = client.post("/move", json={"turn": 3})
    assert response.status_code == 200
    assert response.get_json() == {"move": "up"}

    response = client.post("/move", data="not json", content_type="text/plain")
    assert response.get_json() == {"move": "up"}


def test_start_and_end_routes(client, make_game_state):
    data = make_game_state()
    for route in ("/start", "/end"):
        response = client.post(route, json=data)
        assert response.status_code == 200
        assert response.get_data(as_text=True) == "ok"


@pytest.mark.parametrize("route", ["/start", "/end"])
def test_start_and_end_reject_bad_request(client, route):
    response = client.post(route, json={"board": {"width": 11}})
    assert response.status_code == 400


def test_game_log(tmp_path, make_game_state):
    client = create_app(HANDLERS, log_dir=str(tmp_path)).test_client()
    first = make_game_state(game_id="first")
    second = make_game_state(game_id="second", turn=1)

    client.post("/start", json=first)
    client.post("/start", json=second)
    client.post("/move", json=first)
    client.post("/end", json=first)
    client.get("/")

    files = sorted(tmp_path.glob("*.jsonl"))
    assert len(files) == 2
    lines = {}
    for f in files:
        rows = [json.loads(line) for line in f.read_text().splitlines()]
        lines[rows[0]["game"]["id"]] = rows
    assert len(lines["first"]) == 3
    assert len(lines["second"]) == 1
    assert lines["second"][0]["turn"] == 1


def test_game_log_names_are_stable(tmp_path):
    game_log = GameLog(str(tmp_path))
    a = game_log.filename("a")
    b = game_log.filename("b")
    assert a != b
    assert game_log.filename("a") == a
    assert game_log.write({"turn": 0}).endswith(f"{game_log.filename('default')}.jsonl")


def test_game_log_without_game_object(tmp_path, make_game_state):
    client = create_app(HANDLERS, log_dir=str(tmp_path)).test_client()
    data = make_game_state()
    data["game"] = None

    for route in ("/start", "/move", "/end"):
        response = client.post(route, json=data)
        assert response.status_code == 200

    (log_file,) = tmp_path.glob("*.jsonl")
    assert len(log_file.read_text().splitlines()) == 3


def test_game_log_key():
    assert GameLog.key({"game": {"id": "abc"}}) == "abc"
    assert GameLog.key({"game": None}) == "default"
    assert GameLog.key({}) == "default"
    assert GameLog.key(None) == "default"

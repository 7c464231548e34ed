import pytest


def _points(coords):
    return [{"x": x, "y": y} for x, y in coords]


def build_game_state(you=((5, 5),), food=(), opponents=(), width=11, height=11,
                     turn=0, game_id="game-1"):
    """Battlesnake request body as the engine sends it. Opponents are bodies, head first."""
    you_snake = {
        "id": "you",
        "name": "Rav",
        "health": 90,
        "body": _points(you),
        "head": _points(you[:1])[0],
        "length": len(you),
    }
    snakes = [you_snake]
    for i, body in enumerate(opponents):
        snakes.append({
            "id": f"opp-{i}",
            "name": f"Opponent {i}",
            "health": 100,
            "body": _points(body),
            "head": _points(body[:1])[0],
            "length": len(body),
        })
    return {
        "game": {"id": game_id, "ruleset": {"name": "standard"}, "timeout": 500},
        "turn": turn,
        "board": {
            "width": width,
            "height": height,
            "food": _points(food),
            "hazards": [],
            "snakes": snakes,
        },
        "you": you_snake,
    }


@pytest.fixture
def make_game_state():
    return build_game_state

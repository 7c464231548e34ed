import json
import logging
import os
import threading
import typing
from datetime import datetime

from flask import Flask, abort, request

from game_state import GameStateError
from logic import FALLBACK_MOVE

logger = logging.getLogger(__name__)


class GameLog:
    """Appends every request of a game as one JSON line to <log_dir>/<game>.jsonl."""

    def __init__(self, log_dir):
        self.log_dir = log_dir
        self.files = {}
        self._lock = threading.Lock()

    def filename(self, game_key):
        with self._lock:
            if game_key not in self.files:
                # e.g. "26april18_05"; suffixed if another game started the same minute
                stem = datetime.now().strftime("%d%B%H_%M").lower()
                taken = set(self.files.values())
                name, n = stem, 1
                while name in taken:
                    n += 1
                    name = f"{stem}_{n}"
                self.files[game_key] = name
            return self.files[game_key]

    @staticmethod
    def key(data):
        game = data.get("game") if isinstance(data, dict) else None
        game_id = game.get("id") if isinstance(game, dict) else None
        return game_id if game_id is not None else "default"

    def write(self, data):
        os.makedirs(self.log_dir, exist_ok=True)
        log_file = os.path.join(self.log_dir, f"{self.filename(self.key(data))}.jsonl")
        with open(log_file, "a") as f:
            f.write(json.dumps(data) + "\n")
        return log_file


def create_app(handlers: typing.Dict, log_dir=None) -> Flask:
    app = Flask("Battlesnake")
    game_log = GameLog(log_dir) if log_dir else None

    if game_log is not None:
        @app.before_request
        def log_request():
            # Log each incoming request as a one-line JSON entry.
            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                return  # nothing to log
            game_log.write(data)

    @app.get("/")
    def on_info():
        return handlers["info"]()

    @app.post("/start")
    def on_start():
        game_state = request.get_json(silent=True)
        try:
            handlers["start"](game_state)
        except GameStateError as e:
            logger.error(f"[Start] Bad request: {e}")
            abort(400, description=str(e))
        return "ok"

    @app.post("/move")
    def on_move():
        game_state = request.get_json(silent=True)
        try:
            return handlers["move"](game_state)
        except GameStateError as e:
            logger.error(f"[Move ] Bad request, falling back to {FALLBACK_MOVE}: {e}")
            return {"move": FALLBACK_MOVE}

    @app.post("/end")
    def on_end():
        game_state = request.get_json(silent=True)
        try:
            handlers["end"](game_state)
        except GameStateError as e:
            logger.error(f"[End  ] Bad request: {e}")
            abort(400, description=str(e))
        if game_log is not None:
            logger.info(f"Game saved to {game_log.filename(game_log.key(game_state))}.jsonl")
        return "ok"

    @app.after_request
    def identify_server(response):
        response.headers.set(
            "server", "battlesnake/github/starter-snake-python"
        )
        return response

    return app


def run_server(handlers: typing.Dict, host="0.0.0.0", port=8000, log_dir=None):
    app = create_app(handlers, log_dir=log_dir)

    logging.getLogger("werkzeug").setLevel(logging.ERROR)

    logger.info(f"Running Battlesnake at http://{host}:{port}")
    app.run(host=host, port=port)

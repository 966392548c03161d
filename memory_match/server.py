# memory_match/server.py
from __future__ import annotations
import logging
from typing import Optional

from flask import Flask, current_app, jsonify, request

from .commands import MatchGame
from .config import Config
from .timer import Scheduler, ThreadingScheduler


def create_app(config_class=Config, scheduler: Optional[Scheduler] = None) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_class)

    # One in-memory game per app; the game's own lock covers threaded requests.
    game = MatchGame.from_config(app.config, scheduler=scheduler or ThreadingScheduler())
    game.on_complete(lambda snap: app.logger.info(
        f"[complete] generation={snap['generation']} pairs={snap['matched_pairs']}"
    ))
    app.extensions["memory_match"] = game

    @app.get("/health")
    def health():
        return jsonify({"status": "ok"})

    @app.get("/state")
    def api_state():
        return jsonify({"status": "ok", "board": _game().snapshot()})

    @app.get("/board")
    def api_board():
        return _game().board.to_string() + "\n", 200, {"Content-Type": "text/plain; charset=utf-8"}

    @app.post("/pick")
    def api_pick():
        data = request.get_json(force=True, silent=True) or {}
        card = data.get("card") if isinstance(data, dict) else None
        # JSON true/false and floats are not card ids
        if not isinstance(card, int) or isinstance(card, bool):
            app.logger.info(f"[pick-rejected] body={data!r}")
            return jsonify({"status": "error", "message": f"expected integer 'card', got {card!r}"}), 400

        return jsonify({"status": "ok", "board": _game().pick(card)})

    @app.post("/reset")
    def api_reset():
        return jsonify({"status": "ok", "board": _game().reset()})

    return app


def _game() -> MatchGame:
    return current_app.extensions["memory_match"]


if __name__ == "__main__":
    logging.basicConfig(level=Config.LOG_LEVEL)
    # debug=True only for development
    create_app().run(host="127.0.0.1", port=5000, debug=True, use_reloader=False)

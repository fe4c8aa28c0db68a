"""
main.py — Algorithm Playback Flask App
=======================================
JSON API over the Workspace.  Every screen keeps its own structure and
playback session on the server; the browser polls /state to animate.

Routes:
  GET  /api/algorithms                       – registry cards (?family=sorting)
  GET  /api/screens                          – screen names and their operations
  POST /api/screens/<screen>/structure       – replace the screen's data
  POST /api/screens/<screen>/record          – record an algorithm (idle session)
  POST /api/screens/<screen>/mutate          – run a structure operation (plays)
  POST /api/screens/<screen>/play            – transport
  POST /api/screens/<screen>/pause
  POST /api/screens/<screen>/resume
  POST /api/screens/<screen>/reset
  POST /api/screens/<screen>/step            – advance one frame by hand
  POST /api/screens/<screen>/speed           – {"speed": 1-100}
  GET  /api/screens/<screen>/state           – fire due ticks, then report

  POST /api/screens/pathfinding/grid/wall    – {"cell": [r, c]}  toggle a wall
  POST /api/screens/pathfinding/grid/start   – {"cell": [r, c]}
  POST /api/screens/pathfinding/grid/end     – {"cell": [r, c]}
  POST /api/screens/pathfinding/grid/weight  – {"cell": [r, c], "weight": n}
  POST /api/screens/pathfinding/grid/clear   – remove every wall

Errors come back as {"error": message}: 400 for bad input, 404 for an
unknown screen, 500 for a broken trace.
"""

import logging
import time
from typing import Any, Callable, Dict, Optional

from flask import Flask, abort, jsonify, request

from algorithms import algorithms_by_family, list_algorithms
from engine.errors import InvalidInput, MalformedTrace
from engine.frame import Family
from engine.screen import Screen, Workspace
from logging_setup import init_logging
from settings import AppConfig, load_config

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[AppConfig] = None,
    seed: Optional[int] = None,
    clock: Callable[[], float] = time.monotonic,
) -> Flask:
    config = config or AppConfig()
    app = Flask(__name__)
    app.config["ALGOPLAY"] = config
    workspace = Workspace(config, seed=seed, clock=clock)
    app.extensions["workspace"] = workspace

    # -----------------------------------------------------------------------
    # Helpers
    # -----------------------------------------------------------------------
    def get_screen(name: str) -> Screen:
        screen = workspace.get(name)
        if screen is None:
            abort(404, description=f"Unknown screen: {name}")
        return screen

    def body() -> Dict[str, Any]:
        data = request.get_json(silent=True)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise InvalidInput("Request body must be a JSON object", "body")
        return data

    def params_of(data: Dict[str, Any]) -> Dict[str, Any]:
        params = data.get("params", {})
        if not isinstance(params, dict):
            raise InvalidInput("params must be a JSON object", "params")
        return params

    def operation_of(data: Dict[str, Any]) -> str:
        operation = data.get("operation")
        if not isinstance(operation, str) or not operation:
            raise InvalidInput("Please choose an operation", "operation")
        return operation

    # -----------------------------------------------------------------------
    # Errors
    # -----------------------------------------------------------------------
    @app.errorhandler(InvalidInput)
    def handle_invalid_input(err: InvalidInput):
        logger.info("Refused request to %s: %s", request.path, err.message)
        payload = {"error": err.message}
        if err.field:
            payload["field"] = err.field
        return jsonify(payload), 400

    @app.errorhandler(MalformedTrace)
    def handle_malformed_trace(err: MalformedTrace):
        logger.exception("Malformed trace while handling %s", request.path)
        return jsonify({"error": str(err)}), 500

    @app.errorhandler(404)
    def handle_not_found(err):
        return jsonify({"error": err.description}), 404

    # -----------------------------------------------------------------------
    # Registry
    # -----------------------------------------------------------------------
    @app.route("/api/algorithms")
    def api_algorithms():
        family = request.args.get("family")
        if family is None:
            infos = list_algorithms()
        else:
            try:
                infos = algorithms_by_family(Family(family))
            except ValueError:
                raise InvalidInput(f"Unknown family: {family}", "family") from None
        return jsonify({"algorithms": [info.to_dict() for info in infos]})

    @app.route("/api/screens")
    def api_screens():
        return jsonify({"screens": workspace.to_dict(), "config": config.to_dict()})

    # -----------------------------------------------------------------------
    # Screen data & operations
    # -----------------------------------------------------------------------
    @app.route("/api/screens/<name>/structure", methods=["POST"])
    def api_structure(name: str):
        screen = get_screen(name)
        structure = workspace.build_structure(name, body())
        logger.info("%s: new structure", name)
        return jsonify(screen.replace_structure(structure))

    @app.route("/api/screens/<name>/record", methods=["POST"])
    def api_record(name: str):
        screen = get_screen(name)
        data = body()
        operation = operation_of(data)
        state = screen.record(operation, params_of(data))
        logger.info(
            "%s: recorded %s (%s frames)",
            name, operation, state["session"]["total_frames"],
        )
        return jsonify(state)

    @app.route("/api/screens/<name>/mutate", methods=["POST"])
    def api_mutate(name: str):
        screen = get_screen(name)
        data = body()
        operation = operation_of(data)
        state = screen.mutate(operation, params_of(data), autoplay=bool(data.get("autoplay", True)))
        logger.info("%s: started %s", name, operation)
        return jsonify(state)

    # -----------------------------------------------------------------------
    # Transport
    # -----------------------------------------------------------------------
    @app.route("/api/screens/<name>/play", methods=["POST"])
    def api_play(name: str):
        return jsonify(get_screen(name).play())

    @app.route("/api/screens/<name>/pause", methods=["POST"])
    def api_pause(name: str):
        return jsonify(get_screen(name).pause())

    @app.route("/api/screens/<name>/resume", methods=["POST"])
    def api_resume(name: str):
        return jsonify(get_screen(name).resume())

    @app.route("/api/screens/<name>/reset", methods=["POST"])
    def api_reset(name: str):
        return jsonify(get_screen(name).reset())

    @app.route("/api/screens/<name>/step", methods=["POST"])
    def api_step(name: str):
        return jsonify(get_screen(name).step())

    @app.route("/api/screens/<name>/speed", methods=["POST"])
    def api_speed(name: str):
        data = body()
        if "speed" not in data:
            raise InvalidInput("Please enter a speed between 1 and 100", "speed")
        return jsonify(get_screen(name).set_speed(data["speed"]))

    @app.route("/api/screens/<name>/state")
    def api_state(name: str):
        return jsonify(get_screen(name).state())

    # -----------------------------------------------------------------------
    # Grid edits
    # -----------------------------------------------------------------------
    def grid_edit(change: Callable[[Any, Dict[str, Any]], bool]):
        screen = get_screen("pathfinding")
        data = body()
        changed = screen.edit(lambda grid: change(grid, data))
        state = screen.state()
        state["changed"] = changed
        return jsonify(state)

    def cell_of(data: Dict[str, Any]) -> Any:
        if "cell" not in data:
            raise InvalidInput("Please choose a cell", "cell")
        return data["cell"]

    def set_weight(grid, data: Dict[str, Any]) -> bool:
        grid.set_weight(cell_of(data), data.get("weight"))
        return True

    def clear_walls(grid, data: Dict[str, Any]) -> bool:
        had_walls = bool(grid.walls())
        grid.clear_walls()
        return had_walls

    @app.route("/api/screens/pathfinding/grid/wall", methods=["POST"])
    def api_grid_wall():
        return grid_edit(lambda grid, data: grid.toggle_wall(cell_of(data)))

    @app.route("/api/screens/pathfinding/grid/start", methods=["POST"])
    def api_grid_start():
        return grid_edit(lambda grid, data: grid.move_start(cell_of(data)))

    @app.route("/api/screens/pathfinding/grid/end", methods=["POST"])
    def api_grid_end():
        return grid_edit(lambda grid, data: grid.move_end(cell_of(data)))

    @app.route("/api/screens/pathfinding/grid/weight", methods=["POST"])
    def api_grid_weight():
        return grid_edit(set_weight)

    @app.route("/api/screens/pathfinding/grid/clear", methods=["POST"])
    def api_grid_clear():
        return grid_edit(clear_walls)

    return app


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    settings = load_config()
    init_logging(settings.log_dir)
    logger.info("Starting algorithm playback server on http://%s:%d", settings.host, settings.port)
    create_app(settings).run(debug=settings.debug, host=settings.host, port=settings.port)

from __future__ import annotations

from flask import Flask, jsonify

from gofire.control.sequencer import STATUS_FAULT, Sequencer

WELCOME = "Welcome to GoFire server. Supported handlers: /off /on /flameup /flamedown"

TEXT_PLAIN = {"Content-Type": "text/plain; charset=utf-8"}

# URL path -> recipe name
ROUTES = {
    "/off": "off",
    "/on": "on",
    "/flameup": "flameup",
    "/flamedown": "flamedown",
}


def create_app(sequencer: Sequencer) -> Flask:
    app = Flask(__name__)

    @app.route("/", methods=["GET", "POST"])
    def index():
        return WELCOME, 200, TEXT_PLAIN

    def make_handler(recipe: str):
        def handler():
            """
            Run the recipe and answer with its status token
            (``<recipe>_ok``, ``<recipe>_busy`` or ``<recipe>_fault``).
            """
            outcome = sequencer.try_run(recipe)
            status = 500 if outcome.status == STATUS_FAULT else 200
            return outcome.token, status, TEXT_PLAIN

        return handler

    for path, recipe in ROUTES.items():
        app.add_url_rule(path, endpoint=recipe, view_func=make_handler(recipe), methods=["GET", "POST"])

    @app.route("/status", methods=["GET"])
    def status():
        """
        Endpoint to get whether an operation is running plus the last finished one.
        """
        last = sequencer.last_outcome
        return jsonify({"busy": sequencer.busy, "last": last.as_dict() if last else None})

    return app

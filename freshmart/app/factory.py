from __future__ import annotations

import logging
from datetime import datetime

from flask import Flask, render_template
from werkzeug.exceptions import HTTPException

from freshmart.app.common.auth import nav_state
from freshmart.app.common.request_context import attach_request_id, init_request_id
from freshmart.app.config import Config
from freshmart.app.register import register_blueprints
from freshmart.app.views.render import TEMPLATE_DIR, format_money


def create_app(config_object: type[Config] = Config) -> Flask:
    app = Flask(__name__, template_folder=str(TEMPLATE_DIR), static_folder=None)
    app.config.from_object(config_object)

    # Basic logging (enough to follow backend calls)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    app.jinja_env.filters["money"] = format_money

    # Request id (forwarded to the backend)
    @app.before_request
    def _before_request():
        init_request_id()

    @app.after_request
    def _after_request(response):
        return attach_request_id(response)

    # Health endpoint
    @app.get("/health")
    def health():
        return {"status": "ok"}, 200

    register_blueprints(app)

    @app.context_processor
    def inject_nav():
        """Logged-in state for the navbar, read from the session record."""
        return {**nav_state(), "current_year": datetime.now().year}

    # Error handlers
    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        return render_template("errors/error.html", code=err.code, name=err.name, description=err.description), err.code or 500

    @app.errorhandler(Exception)
    def handle_unexpected(err: Exception):
        app.logger.exception("Unhandled exception")
        return (
            render_template(
                "errors/error.html",
                code=500,
                name="Internal Server Error",
                description="Something went wrong. Please try again.",
            ),
            500,
        )

    return app

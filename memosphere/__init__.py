import logging
import time
from datetime import timedelta

from flask import Flask, g, jsonify, request
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from memosphere import analyzer
from memosphere.auth import bp as auth_bp, login_manager
from memosphere.cli import init_db_command, prune_sessions_command, seed_command
from memosphere.config import settings
from memosphere.database import init_engine
from memosphere.pages import bp as pages_bp
from memosphere.routes import bp as entries_bp
from memosphere.sessions import DatabaseSessionInterface

logger = logging.getLogger(__name__)


def create_app(overrides=None):
    app = Flask(__name__)
    app.config.from_object(settings)
    if overrides:
        app.config.update(overrides)

    if not app.config.get("DATABASE_URL"):
        raise ValueError("DATABASE_URL must be set. Did you forget to provision a database?")

    app.config["PERMANENT_SESSION_LIFETIME"] = timedelta(days=app.config["SESSION_LIFETIME_DAYS"])
    app.session_interface = DatabaseSessionInterface()

    init_engine(app.config["DATABASE_URL"], echo=app.config["SQL_ECHO"])
    analyzer.configure(app.config["ANTHROPIC_API_KEY"], app.config["ANTHROPIC_MODEL"])
    login_manager.init_app(app)

    app.register_blueprint(auth_bp)
    app.register_blueprint(entries_bp)
    app.register_blueprint(pages_bp)

    app.cli.add_command(init_db_command)
    app.cli.add_command(seed_command)
    app.cli.add_command(prune_sessions_command)

    register_error_handlers(app)
    register_request_logging(app)
    return app


def register_error_handlers(app):

    @app.errorhandler(ValidationError)
    def handle_validation_error(e):
        errors = [
            {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
            for err in e.errors()
        ]
        return jsonify({"message": "Validation failed", "errors": errors}), 400

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        # Routing redirects are HTTPExceptions too
        if e.code is None or e.code < 400:
            return e
        return jsonify({"message": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"message": "Internal Server Error"}), 500


def register_request_logging(app):

    @app.before_request
    def start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def log_request(response):
        if request.path.startswith("/api"):
            elapsed_ms = (time.perf_counter() - g.get("request_started", time.perf_counter())) * 1000
            logger.info("%s %s %s in %dms", request.method, request.path, response.status_code, elapsed_ms)
        return response

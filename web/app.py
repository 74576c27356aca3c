"""Flask JSON API for generating, saving and browsing STAR reports."""
import sys
import time

from flask import Flask, request, jsonify, g
from loguru import logger
from werkzeug.exceptions import HTTPException

from config import WEB_HOST, WEB_PORT, LOGS_DIR, APP_VERSION
from core.errors import GenerationError, StoreError, ValidationError
from core.generation import GenerationService
from storage.db import Database
from web.blueprints._utils import error_response, now_iso

LOG_FILE = LOGS_DIR / "app.log"


def _setup_logging():
    """Configure loguru file + stderr logging with rotation."""
    LOGS_DIR.mkdir(parents=True, exist_ok=True)
    logger.remove()
    logger.add(
        str(LOG_FILE),
        rotation="5 MB",
        retention=5,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
    )
    logger.add(sys.stderr, level="INFO", format="{time:HH:mm:ss} | {level: <8} | {message}")


def _open_database():
    """Open the report store; None if it is unavailable.

    Generation does not depend on the store, so the app still starts.
    """
    try:
        return Database()
    except StoreError as e:
        logger.error("Report store unavailable, starting without persistence: {}", e)
        return None


def _register_error_handlers(app):
    @app.errorhandler(ValidationError)
    def _validation_error(e):
        return error_response(e.message, 400, fields=e.fields)

    @app.errorhandler(GenerationError)
    def _generation_error(e):
        logger.error("Generation failed: {}", e.message)
        return error_response(e.message, 502)

    @app.errorhandler(StoreError)
    def _store_error(e):
        return error_response(str(e), 503)

    @app.errorhandler(404)
    def _not_found(e):
        return error_response("The requested resource does not exist", 404)

    @app.errorhandler(405)
    def _method_not_allowed(e):
        return error_response("Method not allowed", 405)

    @app.errorhandler(Exception)
    def _unhandled(e):
        if isinstance(e, HTTPException):
            return e
        logger.exception("Unhandled error on {} {}", request.method, request.path)
        return error_response("Internal server error", 500)


def create_app():
    _setup_logging()
    logger.info("Starting STAR report builder v{}", APP_VERSION)

    app = Flask(__name__)
    app.json.ensure_ascii = False
    app.config["MAX_CONTENT_LENGTH"] = 1 * 1024 * 1024

    # Shared instances (accessed via current_app in blueprints)
    app.db = _open_database()
    app.generator = GenerationService.from_config()

    # --- Request logging ---
    @app.before_request
    def _log_request():
        g.request_start = time.time()

    @app.after_request
    def _after_request(response):
        duration = time.time() - getattr(g, "request_start", time.time())
        if request.path.startswith("/api/"):
            logger.info(
                "{} {} {} {:.0f}ms",
                request.method, request.path, response.status_code,
                duration * 1000,
            )
        return response

    _register_error_handlers(app)

    # --- Status ---
    @app.route("/")
    def index():
        return jsonify({
            "message": "STAR report builder API is running",
            "status": "online",
            "time": now_iso(),
        })

    @app.route("/healthz")
    def healthz():
        if app.db is None:
            return jsonify({"status": "degraded", "db": "unavailable"}), 503
        try:
            count = app.db.count_reports()
        except StoreError as e:
            return jsonify({"status": "degraded", "db": "error", "error": str(e)}), 503
        return jsonify({"status": "ok", "db": "connected", "reports": count})

    # --- Register Blueprints ---
    from web.blueprints.generate import generate_bp
    from web.blueprints.reports import reports_bp
    from web.blueprints.settings import settings_bp

    app.register_blueprint(generate_bp)
    app.register_blueprint(reports_bp)
    app.register_blueprint(settings_bp)

    return app


if __name__ == "__main__":
    app = create_app()
    print("\n  STAR Report Builder")
    print(f"  http://{WEB_HOST}:{WEB_PORT}\n")
    app.run(host=WEB_HOST, port=WEB_PORT, debug=True)

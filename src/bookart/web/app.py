"""Flask application factory for the Book Art API."""

import logging
from typing import Optional

from flask import Flask, jsonify

from ..config import Config, get_config
from ..db.sqlite import Database
from .art import art_bp
from .auth import auth_bp
from .catalog import CATALOG_BLUEPRINTS
from .errors import register_error_handlers
from .search import search_bp

logger = logging.getLogger(__name__)


def create_app(config: Optional[Config] = None, db: Optional[Database] = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config: Configuration; loaded from the environment if None
        db: Database to serve; opened from ``config.database_url`` if None
    """
    config = config or get_config()

    app = Flask(__name__)
    app.config.update(
        SECRET_KEY=config.secret_key,
        TOKEN_TTL=config.token_ttl,
    )
    app.json.sort_keys = False

    if db is None:
        db = Database(config.database_url)
        db.create_tables()
    app.extensions["bookart.db"] = db

    register_error_handlers(app)

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    for blueprint, prefix in CATALOG_BLUEPRINTS:
        app.register_blueprint(blueprint, url_prefix=prefix)
    app.register_blueprint(art_bp, url_prefix="/api/art")
    app.register_blueprint(search_bp, url_prefix="/api/search")

    @app.get("/api/health")
    def health_check():
        return jsonify({"status": "ok"})

    for problem in config.validate():
        logger.warning(problem)

    return app


def run_server(
    host: Optional[str] = None, port: Optional[int] = None, debug: bool = False
) -> None:
    """Run the API with Flask's development server."""
    config = get_config()
    app = create_app(config)
    host = host or config.host
    port = port or config.port
    logger.info("Book Art API running at http://%s:%s", host, port)
    app.run(host=host, port=port, debug=debug)

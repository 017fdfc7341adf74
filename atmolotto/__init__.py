"""Flask application package."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from dotenv import load_dotenv
from flask import Flask


def create_app(overrides: Mapping[str, Any] | None = None) -> Flask:
    """Application factory.

    Args:
        overrides: Optional config values applied on top of the environment
            config class (used by tests and scripts).

    Returns:
        Configured Flask application.
    """
    load_dotenv()

    from atmolotto.config import get_config
    from atmolotto.db import init_db
    from atmolotto.error_handlers import register_error_handlers
    from atmolotto.logging_config import configure_logging
    from atmolotto.routes.health import health_bp
    from atmolotto.routes.lottery import lottery_bp
    from atmolotto.routes.random import random_bp
    from atmolotto.routes.sync import sync_bp

    app = Flask(__name__)
    app.config.from_object(get_config())
    if overrides:
        app.config.update(dict(overrides))

    configure_logging(app)
    init_db(app)
    register_error_handlers(app)

    app.register_blueprint(health_bp)
    app.register_blueprint(lottery_bp, url_prefix="/api/lottery")
    app.register_blueprint(random_bp, url_prefix="/api/random")
    app.register_blueprint(sync_bp, url_prefix="/api/sync")

    return app

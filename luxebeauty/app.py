import os
from typing import Dict, List, Optional

from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS

from .checkout import resume_pending_checkouts
from .database import build_mongo_uri, ensure_indexes, init_database
from .errors import register_error_handlers
from .routes import register_blueprints
from .tokens import init_tokens

load_dotenv()

DEFAULT_ALLOWED_ORIGINS = [
    "http://localhost:5173",
    "https://luxebeautys.netlify.app",
]


def resolve_allowed_origins(environ: Dict[str, str]) -> List[str]:
    allowed_origins = list(DEFAULT_ALLOWED_ORIGINS)
    allowed_origins.append((environ.get("FRONTEND_URL") or "").strip())
    cors_extra = environ.get("CORS_ALLOWED_ORIGINS", "")
    if cors_extra:
        for origin in cors_extra.split(","):
            trimmed = origin.strip()
            if trimmed:
                allowed_origins.append(trimmed)
    return [origin for origin in allowed_origins if origin]


def prepare_database(app: Flask, db):
    try:
        db.command("ping")
        app.logger.info("Pinged your deployment. You successfully connected to MongoDB!")
    except Exception as exc:
        app.logger.warning("Unable to ping MongoDB: %s", exc)

    try:
        ensure_indexes(db)
    except Exception as exc:
        app.logger.warning("Unable to ensure indexes: %s", exc)

    try:
        resumed = resume_pending_checkouts(db)
        if resumed:
            app.logger.info("Finished cart cleanup for %d interrupted checkouts", resumed)
    except Exception as exc:
        app.logger.warning("Unable to resume interrupted checkouts: %s", exc)


def create_app(test_config: Optional[Dict] = None, database=None) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)

    # --- Configuration ---
    app.config["JWT_SECRET_KEY"] = (
        os.getenv("ACCESS_TOKEN_SECRET")
        or os.getenv("JWT_SECRET_KEY")
        or "change-me-in-production"
    )
    app.config["MONGO_URI"] = build_mongo_uri(os.environ)
    app.config["STRIPE_SECRET_KEY"] = os.getenv("STRIPE_SECRET_KEY", "")
    app.config["STRIPE_API_BASE"] = os.getenv("STRIPE_API_BASE", "")
    app.config["CORS_ORIGINS"] = resolve_allowed_origins(os.environ)
    if test_config:
        app.config.update(test_config)

    # --- Initialize extensions ---
    CORS(app, supports_credentials=True, origins=app.config["CORS_ORIGINS"])
    init_tokens(app)
    db = init_database(app, database)
    register_error_handlers(app)
    register_blueprints(app)

    @app.route("/")
    def index():
        return "online cosmetic shop running"

    @app.route("/health")
    def health():
        return {"status": "ok"}, 200

    if not app.config.get("SKIP_DATABASE_SETUP"):
        prepare_database(app, db)

    return app


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 5001))
    create_app().run(host="0.0.0.0", port=port)

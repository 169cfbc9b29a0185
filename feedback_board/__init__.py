import os
from flask import Flask

# Load .env only for local/dev. In prod, env vars come from the platform.
if os.getenv("APP_ENV", "development") != "production":
    from dotenv import load_dotenv
    load_dotenv(".env")


from .config import get_config, DEFAULT_ADMIN_TOKEN
from .extensions import db, migrate, cors
from .errors import register_error_handlers
from .observability import init_logging, init_sentry
from .schema import init_schema, MIGRATIONS_DIR
from .security import init_security

# env var -> config key it feeds
_REQUIRED_IN_PRODUCTION = {
    "ADMIN_TOKEN": "ADMIN_TOKEN",
    "DATABASE_URL": "SQLALCHEMY_DATABASE_URI",
}


def create_app(overrides=None):
    app = Flask(__name__)

    # Config: class-based, then explicit overrides (tests, scripts)
    app.config.from_object(get_config())
    if overrides:
        app.config.update(overrides)

    app_env = (os.getenv("APP_ENV", "development") or "development").lower()
    if app_env == "production":
        # Enforce hard requirements at startup (not at import time)
        for env_name, key in _REQUIRED_IN_PRODUCTION.items():
            if not (os.getenv(env_name) or (overrides or {}).get(key)):
                raise RuntimeError(f"Missing required environment variable: {env_name}")

    init_logging(app)
    init_sentry(app)

    if app_env == "production":
        init_security(app)

    if app.config.get("ADMIN_TOKEN") == DEFAULT_ADMIN_TOKEN:
        app.logger.warning("ADMIN_TOKEN not set; using the insecure development default")

    # Init extensions
    db.init_app(app)
    migrate.init_app(app, db, directory=MIGRATIONS_DIR)
    origins = app.config.get("CORS_ORIGINS") or "*"
    if origins != "*":
        origins = [o.strip() for o in origins.split(",") if o.strip()]
    cors.init_app(app, resources={r"/api/*": {"origins": origins}})

    from .blueprints.api import bp as api_bp
    app.register_blueprint(api_bp)

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}, 200

    register_error_handlers(app)

    # CLI commands (ops-grade utilities)
    from .cli import register_cli
    register_cli(app)

    init_schema(app)

    return app

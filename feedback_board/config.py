import os

DEFAULT_ADMIN_TOKEN = "dev-admin-token-insecure"  # local development only; never deploy with this


def _flag(name: str, default: str) -> bool:
    return (os.getenv(name, default) or default).lower() in ("1", "true", "yes", "on")


class BaseConfig:
    # Admin gate: shared static token sent as x-admin-token
    ADMIN_TOKEN = os.environ.get("ADMIN_TOKEN", DEFAULT_ADMIN_TOKEN)

    # Database (env in prod; dev falls back to a local SQLite file)
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL") or "sqlite:///feedback.sqlite"
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Upgrade the schema to head when the app starts
    AUTO_MIGRATE = _flag("AUTO_MIGRATE", "true")

    # Server
    PORT = int(os.environ.get("PORT", "4000"))

    # Browser clients live on another origin (comma-separated list or "*")
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")

    # Logging / misc
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    LOG_JSON = False
    FORCE_HTTPS = _flag("FORCE_HTTPS", "false")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG")


class ProductionConfig(BaseConfig):
    DEBUG = False
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "WARNING")
    LOG_JSON = True
    FORCE_HTTPS = _flag("FORCE_HTTPS", "true")


class TestingConfig(BaseConfig):
    TESTING = True
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.environ.get("TEST_DATABASE_URL", "sqlite:///:memory:")
    ADMIN_TOKEN = "test-admin-token"
    AUTO_MIGRATE = False


_ENV_MAP = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}


def get_config():
    env = os.environ.get("APP_ENV", "development").lower()
    return _ENV_MAP.get(env, DevelopmentConfig)

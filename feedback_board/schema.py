from pathlib import Path

from flask_migrate import upgrade

# migrations/ sits next to the package in the source tree
MIGRATIONS_DIR = str(Path(__file__).resolve().parents[1] / "migrations")


def init_schema(app):
    """Bring the database up to the latest Alembic revision."""
    if not app.config.get("AUTO_MIGRATE"):
        return
    with app.app_context():
        upgrade(directory=MIGRATIONS_DIR)
    app.logger.info("schema_ready", extra={"event": "schema_ready"})

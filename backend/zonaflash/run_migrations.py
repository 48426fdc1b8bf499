"""
Run Alembic migrations programmatically.

Safe to call on every startup; Alembic is a no-op when already at head.
"""
from pathlib import Path
import logging

from alembic import command
from alembic.config import Config

from .core.config import settings

logger = logging.getLogger(__name__)


def run_migrations() -> None:
    """Upgrade the database at DATABASE_URL to the latest revision."""
    # alembic.ini sits in backend/, one level above this package
    project_root = Path(__file__).resolve().parents[1]
    alembic_ini = project_root / "alembic.ini"

    if not alembic_ini.exists():
        logger.error(f"Alembic config not found at {alembic_ini}")
        raise FileNotFoundError(f"Alembic config not found at {alembic_ini}")

    cfg = Config(str(alembic_ini))
    cfg.set_main_option("script_location", str(project_root / "alembic"))
    cfg.set_main_option("sqlalchemy.url", settings.database_url)

    database_url = settings.database_url
    logger.info(f"Running Alembic migrations to head on {database_url.split('@')[-1]}")
    command.upgrade(cfg, "head")
    logger.info("Alembic migrations complete.")

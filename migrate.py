#!/usr/bin/env python
"""Database migration script for the share repair schema."""
import sys
import logging
import os
import traceback
from pathlib import Path
from alembic.config import Config
from alembic import command

# Load .env file if it exists (before any other imports)
from dotenv import load_dotenv
load_dotenv()

logger = logging.getLogger(__name__)

ALEMBIC_INI = Path(__file__).resolve().parent / "alembic.ini"


def run_migrations(database_url: str | None = None) -> int:
    """Run all pending database migrations."""
    try:
        logger.info("=" * 70)
        logger.info("Starting database migrations...")
        logger.info("=" * 70)

        db_url = database_url or os.getenv("DATABASE_URL")
        if db_url:
            # Hide password for logging
            safe_url = db_url.split('@')[1] if '@' in db_url else "local SQLite"
            logger.info(f"Database: {safe_url}")
        else:
            logger.warning("DATABASE_URL not set, will use default from alembic.ini")

        if not ALEMBIC_INI.exists():
            logger.error(f"alembic.ini not found at {ALEMBIC_INI}")
            return 1

        alembic_cfg = Config(str(ALEMBIC_INI))
        if database_url:
            alembic_cfg.attributes["database_url"] = database_url

        logger.info("Running migrations to head...")
        try:
            command.upgrade(alembic_cfg, "head")
        except Exception as upgrade_error:
            logger.error(f"Error during upgrade command: {upgrade_error}")
            logger.error(f"Error type: {type(upgrade_error).__name__}")
            logger.error("Upgrade traceback:")
            logger.error(traceback.format_exc())
            raise

        logger.info("=" * 70)
        logger.info("✓ Database migrations completed successfully!")
        logger.info("=" * 70)
        return 0

    except Exception as e:
        logger.error("=" * 70)
        logger.error(f"✗ Migration failed: {e}")
        logger.error("=" * 70)
        logger.error("Full traceback:")
        logger.error(traceback.format_exc())
        return 1


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    exit_code = run_migrations()
    logger.info(f"Migration script exiting with code {exit_code}")
    sys.exit(exit_code)

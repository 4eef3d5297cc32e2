#!/usr/bin/env python
"""Run the share repair steps against the configured database.

Usage:
    python repair.py --config config/config.json             # Run repair
    python repair.py --config config/config.json --dry-run   # Only count affected shares
"""
import argparse
import logging
import sys
import traceback

# Load .env file if it exists
from dotenv import load_dotenv
load_dotenv()

from sqlalchemy.orm import sessionmaker

from sharerepair.clock import SystemClock
from sharerepair.config_loader import load_system_config
from sharerepair.database.session import create_db_engine, get_database_url
from sharerepair.groups import GroupManager
from sharerepair.notifications import DatabaseNotificationManager
from sharerepair.output import ConsoleOutput
from sharerepair.repair import Repair, RemoveLinkShares
from version import __version__

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Remove potentially over exposing link shares")
    parser.add_argument("--config", help="Path to the system config JSON file (holds the previous version)")
    parser.add_argument("--database-url", help="Database URL (defaults to DATABASE_URL)")
    parser.add_argument("--admin-group", default="admin", help="Group whose members are always notified")
    parser.add_argument("--dry-run", action="store_true", help="Count affected shares without removing them")
    parser.add_argument("--no-progress", action="store_true", help="Disable the progress bar")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        logger.info("=" * 70)
        logger.info("Share repair %s", __version__)
        logger.info("=" * 70)

        config = load_system_config(args.config)
        engine = create_db_engine(args.database_url or get_database_url())
        session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

        step = RemoveLinkShares(
            engine=engine,
            config=config,
            group_manager=GroupManager(session_factory),
            notification_manager=DatabaseNotificationManager(session_factory),
            clock=SystemClock(),
            admin_group=args.admin_group,
        )

        if args.dry_run:
            total = step.preview()
            logger.info("DRY RUN: %d link shares would be removed", total)
            return 0

        Repair([step]).run(ConsoleOutput(show_progress=not args.no_progress))

        logger.info("=" * 70)
        logger.info("✓ Share repair completed successfully")
        logger.info("=" * 70)
        return 0

    except Exception as e:
        logger.error("=" * 70)
        logger.error(f"✗ Share repair failed: {e}")
        logger.error("=" * 70)
        logger.error("Full traceback:")
        logger.error(traceback.format_exc())
        return 1


if __name__ == "__main__":
    sys.exit(main())

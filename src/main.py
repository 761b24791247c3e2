"""Command-line entry point for database maintenance.

Usage:
    python main.py init            # create missing tables
    python main.py seed [--seed N] # replace all data with demo data
"""

import argparse
import logging
import random
import sys
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from config import DATABASE_URL
from core.database import Database
from core.logging_config import setup_logging
from utils.seed import seed_database

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Homework tracker database tools")
    parser.add_argument(
        "--database-url",
        default=DATABASE_URL,
        help="SQLAlchemy database URL (default: %(default)s)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("init", help="Create missing tables")
    seed_parser = subparsers.add_parser("seed", help="Replace all data with demo data")
    seed_parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for reproducible data"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run one maintenance command.

    Returns:
        Process exit code.
    """
    setup_logging()
    args = build_parser().parse_args(argv)

    database = Database(args.database_url)
    try:
        database.init()
        if args.command == "seed":
            with database.session() as db:
                counts = seed_database(db, rng=random.Random(args.seed))
            for table, count in counts.items():
                print(f"{count} {table} were inserted.")
    except SQLAlchemyError as e:
        logger.error("Database command '%s' failed: %s", args.command, e)
        return 1
    finally:
        database.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Standalone database initialization script
Creates (or drops) the meals table for the configured DATABASE_URL
"""

import sys
import logging
import argparse
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("init_db")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Manage the Daily Diet database schema")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--drop", action="store_true", help="Drop the meals table")
    group.add_argument(
        "--reset", action="store_true", help="Drop and recreate the meals table"
    )
    args = parser.parse_args(argv)

    from sqlalchemy import inspect
    from domain.models import engine, init_database, drop_database

    try:
        if args.drop or args.reset:
            drop_database()
            logger.info("✓ Tables dropped")
        if not args.drop:
            init_database()
            tables = inspect(engine).get_table_names()
            logger.info(f"✓ {len(tables)} tables present: {', '.join(tables)}")
    except Exception as e:
        logger.error(f"✗ Database initialization failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

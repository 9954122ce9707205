"""Storefront database management CLI.

Creates or drops the relational schema behind the storefront domain. Only
relational providers are touched; the in-memory provider needs no schema.

Usage:
    PROTEAN_ENV=production python src/manage.py setup-db   # Create all tables
    PROTEAN_ENV=production python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys

from storefront.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def _initialized_domain():
    from storefront.domain import storefront

    storefront.init()
    return storefront


def setup_databases():
    from storefront.utils.db import setup_db

    created = setup_db(_initialized_domain())
    if not created:
        logger.warning("manage.no_relational_provider", action="setup-db")
    for name in created:
        logger.info("manage.schema_created", provider=name)


def drop_databases():
    from storefront.utils.db import drop_db

    dropped = drop_db(_initialized_domain())
    if not dropped:
        logger.warning("manage.no_relational_provider", action="drop-db")
    for name in dropped:
        logger.info("manage.schema_dropped", provider=name)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args(argv)
    configure_logging()

    if args.command == "setup-db":
        setup_databases()
    elif args.command == "drop-db":
        drop_databases()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()

"""Engagement database management CLI.

Creates and drops the database schema for the engagement domain using the
setup_db/drop_db utilities in ``engagement.utils.db``.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def setup_database():
    """Create the engagement database schema."""
    from engagement.domain import engagement
    from engagement.utils.db import setup_db

    print("Initializing engagement domain...")
    engagement.init()
    print("Creating engagement database schema...")
    setup_db(engagement)
    print("Done.")


def drop_database():
    """Drop the engagement database schema."""
    from engagement.domain import engagement
    from engagement.utils.db import drop_db

    print("Initializing engagement domain...")
    engagement.init()
    print("Dropping engagement database schema...")
    drop_db(engagement)
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Engagement database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()

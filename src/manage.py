"""Inventory database management CLI.

Creates and drops the database schema for the stock ledger aggregate and
its projections. Only relational providers (sqlite, postgresql) need it;
the default in-memory provider has no schema.

Usage:
    PROTEAN_ENV=production python src/manage.py setup-db   # Create all tables
    PROTEAN_ENV=production python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def setup_database():
    from inventory.domain import inventory
    from inventory.utils.db import setup_db

    print("Initializing inventory domain...")
    inventory.init()
    print("Creating inventory database schema...")
    setup_db(inventory)
    print("Done.")


def drop_database():
    from inventory.domain import inventory
    from inventory.utils.db import drop_db

    print("Initializing inventory domain...")
    inventory.init()
    print("Dropping inventory database schema...")
    drop_db(inventory)
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Inventory database management")
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

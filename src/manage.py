"""Cartwheel database management CLI.

Creates and drops the relational schemas of every domain, and loads the demo
catalogue. Set ``PROTEAN_ENV=production`` to target the sqlite databases.

Usage:
    python src/manage.py setup-db                  # Create all tables
    python src/manage.py setup-db --domain ordering
    python src/manage.py drop-db                   # Drop all tables
    python src/manage.py seed-catalogue [--force]
"""

import argparse
import sys

DOMAIN_NAMES = ["identity", "catalogue", "ordering"]


def _domains(names=None):
    from catalogue.domain import catalogue
    from identity.domain import identity
    from ordering.domain import ordering

    all_domains = {"identity": identity, "catalogue": catalogue, "ordering": ordering}
    return {name: all_domains[name] for name in (names or DOMAIN_NAMES)}


def setup_databases(domains=None):
    """Create database schemas for the specified (or all) domains."""
    from shared.db import setup_db

    for name, domain in _domains(domains).items():
        print(f"Initializing {name} domain...")
        domain.init()
        print(f"Creating {name} database schema...")
        setup_db(domain)
        print(f"  {name} schema ready.")

    print("Done.")


def drop_databases(domains=None):
    """Drop database schemas for the specified (or all) domains."""
    from shared.db import drop_db

    for name, domain in _domains(domains).items():
        print(f"Initializing {name} domain...")
        domain.init()
        print(f"Dropping {name} database schema...")
        drop_db(domain)
        print(f"  {name} schema dropped.")

    print("Done.")


def seed(force=False):
    from app import seed_catalogue

    count = seed_catalogue(force=force)
    print(f"Seeded {count} products." if count else "Catalogue already populated.")


def main():
    parser = argparse.ArgumentParser(description="Cartwheel database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for command, help_text in (("setup-db", "Create all database tables"), ("drop-db", "Drop all database tables")):
        sub = subparsers.add_parser(command, help=help_text)
        sub.add_argument(
            "--domain",
            choices=DOMAIN_NAMES,
            nargs="*",
            help="Specific domain(s) to target (default: all)",
        )

    seed_parser = subparsers.add_parser("seed-catalogue", help="Load the demo products")
    seed_parser.add_argument("--force", action="store_true", help="Seed even if products exist")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_databases(args.domain)
    elif args.command == "drop-db":
        drop_databases(args.domain)
    elif args.command == "seed-catalogue":
        seed(args.force)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()

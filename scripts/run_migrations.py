#!/usr/bin/env python3
"""Apply Alembic migrations before the bot starts.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py --sql      # print the SQL instead

Failures are reported to Logfire and re-raised so the deploy stops.
"""

import argparse
import sys

import logfire
from alembic import command
from alembic.config import Config

from gate.config import Settings
from gate.util.observability import configure_logfire


def main() -> int:
    parser = argparse.ArgumentParser(description="Upgrade the gate schema")
    parser.add_argument("revision", nargs="?", default="head")
    parser.add_argument("--sql", action="store_true", help="offline mode")
    args = parser.parse_args()

    configure_logfire(Settings())

    with logfire.span("run_migrations", revision=args.revision, offline=args.sql):
        try:
            command.upgrade(Config("alembic.ini"), args.revision, sql=args.sql)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            raise

    logfire.info("Schema at revision", revision=args.revision)
    return 0


if __name__ == "__main__":
    sys.exit(main())

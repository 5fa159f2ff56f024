"""Apply (or print) the Alembic migrations for the edge functions' tables.

Run by an operator, never by a request handler::

    DATABASE_URL=postgresql+psycopg://... python backend/scripts/run_migrations.py
    python backend/scripts/run_migrations.py --sql   # emit SQL only
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from alembic import command
from alembic.config import Config

BACKEND_DIR = Path(__file__).resolve().parents[1]
sys.path.append(str(BACKEND_DIR / "src"))

from app.db.connection import get_database_url  # noqa: E402
from app.db.connection import with_service_role  # noqa: E402
from app.utils.logging import configure_logging  # noqa: E402
from app.utils.logging import get_logger  # noqa: E402

logger = get_logger(__name__)


def _escape_config(value: str) -> str:
    return value.replace("%", "%%")


def build_config(database_url: str) -> Config:
    config = Config()
    config.set_main_option("script_location", str(BACKEND_DIR / "db" / "alembic"))
    config.set_main_option("sqlalchemy.url", _escape_config(database_url))
    return config


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--revision", default="head", help="Target revision")
    parser.add_argument(
        "--sql",
        action="store_true",
        help="Print the SQL instead of executing it",
    )
    args = parser.parse_args(argv)

    configure_logging()

    database_url = get_database_url()
    service_role_key = os.getenv("SERVICE_ROLE_KEY")
    if service_role_key:
        database_url = with_service_role(database_url, service_role_key)

    config = build_config(database_url)
    logger.info("Upgrading to %s%s", args.revision, " (offline)" if args.sql else "")
    command.upgrade(config, args.revision, sql=args.sql)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

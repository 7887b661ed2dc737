#!/usr/bin/env python3
"""
Bootstrap the interview-scheduling schema against DATABASE_URL.

The API runs the same routine on startup; this script is for running it ahead
of a deploy or against a fresh database.
"""

import logging
import sys
from pathlib import Path

# Make `import backend...` work when run as `python backend/migrate.py`.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.entrevistas import config  # noqa: E402
from backend.entrevistas.bootstrap import run_migrations  # noqa: E402

logger = logging.getLogger("migrate")


def migrate() -> bool:
    try:
        created = run_migrations(config.DATABASE_URL, sslmode=config.DATABASE_SSLMODE)
    except Exception:
        logger.exception("Migration failed")
        return False

    if created:
        logger.info("Database schema created")
    else:
        logger.info("Database schema already up to date")
    return True


def main() -> int:
    logging.basicConfig(level=config.LOG_LEVEL, format="%(levelname)s %(message)s")
    return 0 if migrate() else 1


if __name__ == "__main__":
    sys.exit(main())

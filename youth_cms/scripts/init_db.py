"""
Create missing tables and seed rows (site content, branches, bootstrap superadmin).

  python -m youth_cms.scripts.init_db

Idempotent: running it again inserts nothing new.
"""

import logging
import sys

from youth_cms.core.config import get_settings
from youth_cms.core.database import engine
from youth_cms.services.bootstrap import DatabaseInitializer

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    """Run the database initializer once."""
    try:
        DatabaseInitializer(engine, get_settings()).run_once()
        return 0
    except Exception as e:
        logger.exception("Database initialization failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())

import os

# Must be set before anything imports spotmap.core.config. Store tests only run against spotmap_test_db.
os.environ.setdefault("DATABASE_URL", "postgresql+asyncpg://localhost/spotmap")

from tests.fixtures import *  # noqa: E402,F401,F403

import os
from typing import Optional

# Database connection URL (async)
# Example: "postgresql+asyncpg://user@localhost/spotmap_db"
SQLALCHEMY_DATABASE_URL: str = os.environ["DATABASE_URL"]

# If not specified, caching is disabled and every map request hits the database.
# Example: "redis://localhost:6379/0"
REDIS_URL: Optional[str] = os.environ.get("REDIS_URL")

# Allow requests from this origin
ALLOW_ORIGIN: Optional[str] = os.environ.get("ALLOW_ORIGIN")

# If true, enable docs and openapi.json endpoints
ENABLE_DOCS: bool = os.environ.get("ENABLE_DOCS") == "1"

# Rate limit for the map pins endpoint, in slowapi notation
MAP_PINS_RATE_LIMIT: str = "120/minute"
_map_pins_rate_limit: Optional[str] = os.environ.get("MAP_PINS_RATE_LIMIT")
if _map_pins_rate_limit:
    if "/" in _map_pins_rate_limit:
        MAP_PINS_RATE_LIMIT = _map_pins_rate_limit
    else:
        print(f"Malformed MAP_PINS_RATE_LIMIT, defaulting to {MAP_PINS_RATE_LIMIT}")

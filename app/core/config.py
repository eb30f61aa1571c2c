import os
from typing import List


def get_cors_origins() -> List[str]:
    """Get CORS origins from environment and defaults."""
    default_origins = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    # Add additional origins from environment variable
    env_origins = os.getenv("CORS_ORIGINS", "")
    if env_origins:
        additional_origins = [origin.strip() for origin in env_origins.split(",") if origin.strip()]
        default_origins.extend(additional_origins)

    return default_origins


ASSUMPTIONS_VERSION = "2026.10.0"

# Upstream pool statistics (Space Farmers pool API)
POOL_STATS_URL = os.getenv("POOL_STATS_URL", "https://spacefarmers.io/api/pool/stats")
POOL_STATS_TIMEOUT_SECONDS = float(os.getenv("POOL_STATS_TIMEOUT_SECONDS", "5"))

# Refreshes never complete faster than this, so clients don't flicker
MIN_REFRESH_SECONDS = float(os.getenv("MIN_REFRESH_SECONDS", "0.6"))

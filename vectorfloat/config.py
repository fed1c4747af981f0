"""Service configuration read from environment variables."""
from __future__ import annotations

import logging
import os

LOG_LEVEL_NAME = os.environ.get("VECTORFLOAT_LOG_LEVEL", "INFO").upper()
# Upper bound on the number of values accepted by a single HTTP request
MAX_VECTOR_LENGTH = int(os.environ.get("VECTORFLOAT_MAX_LENGTH", 100_000))


def log_level() -> int:
    """Resolve the configured level name, falling back to INFO for unknown names."""
    level = logging.getLevelName(LOG_LEVEL_NAME)
    return level if isinstance(level, int) else logging.INFO

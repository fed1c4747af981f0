"""Standard Python logging configuration."""
from __future__ import annotations

import logging
import sys

from vectorfloat.config import log_level


def setup_logging() -> None:
    """Configure standard Python logging.

    Call **exactly once** at app startup. The level comes from VECTORFLOAT_LOG_LEVEL.
    """
    if getattr(setup_logging, "_configured", False):  # type: ignore[attr-defined]
        return

    level = log_level()

    formatter = logging.Formatter(
        fmt='[%(asctime)s] [%(process)d] [%(levelname)s] %(name)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S %z'
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    # uvicorn loggers propagate to the root logger instead of printing on their own
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.propagate = True
        logger.setLevel(level)

    setup_logging._configured = True  # type: ignore[attr-defined]

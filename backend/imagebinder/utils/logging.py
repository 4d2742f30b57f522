"""
ImageBinder — Application logger and pipeline step timer.

The level comes from settings: APP_LOG_LEVEL when set, otherwise DEBUG
with APP_DEBUG=true and INFO without. At DEBUG the layout engine logs
every placement it computes.
"""

import logging
import time
from contextlib import contextmanager
from typing import Generator

from imagebinder.core.config import settings

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
    datefmt="%H:%M:%S",
)

logger = logging.getLogger("imagebinder")
logger.setLevel(settings.log_level)


@contextmanager
def step_timer(step_name: str) -> Generator[None, None, None]:
    """Log the start and duration of a pipeline step; failures are logged and re-raised."""
    logger.info("▶ %s — started", step_name)
    start = time.perf_counter()
    try:
        yield
    except Exception as exc:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.warning(
            "✗ %s — failed after %.0f ms (%s)", step_name, elapsed_ms, type(exc).__name__
        )
        raise
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info("✔ %s — completed in %.0f ms", step_name, elapsed_ms)

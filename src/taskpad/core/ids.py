"""Task identifier generation."""

from __future__ import annotations

import logging
import random
import time
import uuid

logger = logging.getLogger(__name__)


def _fallback_id() -> str:
    fraction = f"{random.random():.16f}"[2:]
    return f"{time.time_ns():x}-{fraction}"


def new_id() -> str:
    """Return a fresh task identifier.

    Uses the OS random source through ``uuid4``. Platforms without one get a
    timestamp + random fraction composite instead.
    """
    try:
        return str(uuid.uuid4())
    except NotImplementedError:
        logger.debug("Secure random source unavailable; using time-based task id")
        return _fallback_id()


__all__ = ["new_id"]

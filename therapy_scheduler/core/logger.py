# therapy_scheduler/core/logger.py

import logging
import sys
from typing import Optional

from therapy_scheduler.core.config import get_settings

logger = logging.getLogger("therapy_scheduler")
logger.setLevel(get_settings().LOG_LEVEL.upper())
logger.propagate = False  # Prevent log duplication

if not logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter("[%(asctime)s] %(levelname)s - %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def describe_secret(value: Optional[str]) -> str:
    """Loggable stand-in for a secret: presence and length only."""
    return f"present (len={len(value)})" if value else "missing"

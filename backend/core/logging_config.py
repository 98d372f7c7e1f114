"""
Logging bootstrap for entry points
"""

import logging
from typing import Optional

from core.config import settings


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure the root logger once.

    Components never call this; they log through their own module logger
    (or an injected one). Only entry points such as main.py configure output.

    Args:
        level: Log level name (default from settings.log_level)
    """
    level_name = (level or settings.log_level).upper()
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level_name)
        return

    logging.basicConfig(level=level_name, format=settings.log_format)

    # Quiet chatty client libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

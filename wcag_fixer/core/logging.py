"""
Logging setup for applications embedding the engine.

Library modules only create module-level loggers; configuring handlers is
left to the host. configure_logging() is a convenience for scripts and tests.
"""

import logging
from typing import Optional

from .config import settings


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for the engine.

    Args:
        level: Level name (e.g. "DEBUG"). Defaults to settings.LOG_LEVEL.
    """
    resolved = getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO)
    logging.basicConfig(
        level=resolved,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("wcag_fixer").setLevel(resolved)

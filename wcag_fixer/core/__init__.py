"""
Core - Settings, logging setup and location descriptors.
"""

from .config import Settings, settings
from .location import LocationService
from .logging import configure_logging

__all__ = [
    "Settings",
    "settings",
    "LocationService",
    "configure_logging",
]

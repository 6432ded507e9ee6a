"""
railmap: live zoomable map of a simulated railroad world.

Renders track, rolling stock and players in a pan/zoom canvas and can keep
the view centered on a followed entity.
"""

__version__ = "0.1.0"
__author__ = "railmap Contributors"

from .settings import AppSettings
from .utils.logging_config import setup_logging
from .world import WorldData, WorldLoader

__all__ = [
    "AppSettings",
    "setup_logging",
    "WorldData",
    "WorldLoader",
]

"""World snapshot models and loading."""

from .models import Frame, Player, Spline, SplineSegment, Vector3, WorldData
from .loader import WorldLoader
from .demo import build_demo_world

__all__ = [
    "Frame",
    "Player",
    "Spline",
    "SplineSegment",
    "Vector3",
    "WorldData",
    "WorldLoader",
    "build_demo_world",
]

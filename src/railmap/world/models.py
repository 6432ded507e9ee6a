"""
Data models for a world snapshot.

A snapshot is a read-only description of everything the map draws:
players, rolling stock frames and track splines, all in world units.
"""

from dataclasses import dataclass, field
from typing import NamedTuple


class Vector3(NamedTuple):
    """World-space position or rotation."""

    x: float
    y: float
    z: float = 0.0


@dataclass(frozen=True)
class Player:
    """A player avatar in the world."""

    name: str
    location: Vector3
    rotation: Vector3 = Vector3(0.0, 0.0, 0.0)


@dataclass(frozen=True)
class Frame:
    """A piece of rolling stock (locomotive, tender, car)."""

    type: str
    location: Vector3
    rotation: Vector3 = Vector3(0.0, 0.0, 0.0)
    name: str = ""
    number: str = ""


@dataclass(frozen=True)
class SplineSegment:
    """Straight piece of a spline between two control points."""

    start: Vector3
    end: Vector3
    visible: bool = True


@dataclass(frozen=True)
class Spline:
    """Track or ground work spline made of segments."""

    type: int
    segments: tuple[SplineSegment, ...] = ()


@dataclass(frozen=True)
class WorldData:
    """Complete world snapshot consumed by the renderers."""

    players: tuple[Player, ...] = field(default_factory=tuple)
    frames: tuple[Frame, ...] = field(default_factory=tuple)
    splines: tuple[Spline, ...] = field(default_factory=tuple)

    def get_entity(self, kind: str, index: int) -> Player | Frame | None:
        """Look up a player or frame by kind value and index."""
        items: tuple[Player | Frame, ...]
        if kind == "player":
            items = self.players
        elif kind == "frame":
            items = self.frames
        else:
            return None
        if 0 <= index < len(items):
            return items[index]
        return None

"""Loading world snapshots from JSON files.

Snapshot layout::

    {
        "Players": [{"Name": "...", "Location": [x, y, z], "Rotation": [p, y, r]}],
        "Frames": [{"Type": "...", "Name": "...", "Number": "...",
                    "Location": [x, y, z], "Rotation": [p, y, r]}],
        "Splines": [{"Type": 0, "Segments": [
            {"LocationStart": [x, y, z], "LocationEnd": [x, y, z], "Visible": true}
        ]}]
    }
"""

import logging
from pathlib import Path
from typing import Any

import orjson

from .models import Frame, Player, Spline, SplineSegment, Vector3, WorldData


class WorldLoader:
    """Loads world snapshots from JSON files."""

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def load_from_json(self, path: Path) -> WorldData:
        """Load a world snapshot from a JSON file.

        Args:
            path: Path to JSON file

        Returns:
            Parsed WorldData

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If JSON is invalid or doesn't match the snapshot layout
        """
        if not path.exists():
            raise FileNotFoundError(f"World snapshot not found: {path}")

        try:
            data = orjson.loads(path.read_bytes())
        except orjson.JSONDecodeError as e:
            raise ValueError(f"Failed to parse JSON from {path}: {e}") from e

        try:
            world = self.parse(data)
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid world snapshot in {path}: {e}") from e

        self.logger.debug(
            f"Loaded world from {path}: {len(world.players)} player(s), "
            f"{len(world.frames)} frame(s), {len(world.splines)} spline(s)"
        )
        return world

    def parse(self, data: Any) -> WorldData:
        """Build WorldData from an already decoded snapshot."""
        if not isinstance(data, dict):
            raise ValueError("snapshot root must be an object")

        players = tuple(
            Player(
                name=str(item.get("Name", "")),
                location=_vector(item["Location"]),
                rotation=_vector(item.get("Rotation", (0, 0, 0))),
            )
            for item in _records(data, "Players")
        )
        frames = tuple(
            Frame(
                type=str(item.get("Type", "")),
                name=str(item.get("Name", "")),
                number=str(item.get("Number", "")),
                location=_vector(item["Location"]),
                rotation=_vector(item.get("Rotation", (0, 0, 0))),
            )
            for item in _records(data, "Frames")
        )
        splines = tuple(
            Spline(
                type=int(item.get("Type", 0)),
                segments=tuple(
                    SplineSegment(
                        start=_vector(segment["LocationStart"]),
                        end=_vector(segment["LocationEnd"]),
                        visible=bool(segment.get("Visible", True)),
                    )
                    for segment in _records(item, "Segments")
                ),
            )
            for item in _records(data, "Splines")
        )
        return WorldData(players=players, frames=frames, splines=splines)


def _vector(value: Any) -> Vector3:
    """Convert a ``[x, y]`` or ``[x, y, z]`` array into a Vector3."""
    if not isinstance(value, (list, tuple)) or len(value) not in (2, 3):
        raise ValueError(f"expected [x, y, z] array, got {value!r}")
    return Vector3(*(float(v) for v in value))


def _records(data: dict, key: str) -> list:
    """Return ``data[key]`` as a list of objects, empty when missing."""
    items = data.get(key, [])
    if not isinstance(items, list):
        raise ValueError(f"{key} must be an array")
    for item in items:
        if not isinstance(item, dict):
            raise ValueError(f"{key} entries must be objects, got {item!r}")
    return items

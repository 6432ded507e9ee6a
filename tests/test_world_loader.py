"""Tests for world snapshot loading."""

from pathlib import Path

import orjson
import pytest

from railmap.gui.main_window import MainWindow
from railmap.world import Vector3, WorldLoader


SNAPSHOT = {
    "Players": [
        {"Name": "Alice", "Location": [100.0, -200.0, 5.0], "Rotation": [0, 90, 0]},
    ],
    "Frames": [
        {"Type": "porter_040", "Name": "Porter", "Number": "7", "Location": [1, 2, 3]},
        {"Type": "flatcar_logs", "Location": [4, 5]},
    ],
    "Splines": [
        {
            "Type": 4,
            "Segments": [
                {"LocationStart": [0, 0, 0], "LocationEnd": [10, 0, 0], "Visible": True},
                {"LocationStart": [10, 0, 0], "LocationEnd": [20, 5, 0], "Visible": False},
            ],
        }
    ],
}


def _write(tmp_path: Path, data: object) -> Path:
    path = tmp_path / "world.json"
    path.write_bytes(orjson.dumps(data))
    return path


class TestWorldLoader:
    def test_load_snapshot(self, tmp_path: Path) -> None:
        world = WorldLoader().load_from_json(_write(tmp_path, SNAPSHOT))

        assert len(world.players) == 1
        assert world.players[0].name == "Alice"
        assert world.players[0].location == Vector3(100.0, -200.0, 5.0)
        assert world.players[0].rotation.y == 90

        assert world.frames[0].number == "7"
        assert world.frames[1].location == Vector3(4, 5, 0)
        assert world.frames[1].rotation == Vector3(0, 0, 0)

        assert world.splines[0].type == 4
        assert not world.splines[0].segments[1].visible

    def test_get_entity(self, tmp_path: Path) -> None:
        world = WorldLoader().load_from_json(_write(tmp_path, SNAPSHOT))

        assert world.get_entity("player", 0) is world.players[0]
        assert world.get_entity("frame", 1) is world.frames[1]
        assert world.get_entity("frame", 5) is None
        assert world.get_entity("switch", 0) is None

    def test_empty_snapshot(self, tmp_path: Path) -> None:
        world = WorldLoader().load_from_json(_write(tmp_path, {}))

        assert world.players == ()
        assert world.splines == ()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            WorldLoader().load_from_json(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "world.json"
        path.write_text("{ not json")

        with pytest.raises(ValueError, match="Failed to parse JSON"):
            WorldLoader().load_from_json(path)

    @pytest.mark.parametrize(
        "data",
        [
            [],
            {"Players": [{"Name": "x"}]},
            {"Players": [{"Location": [1]}]},
            {"Frames": [{"Location": "here"}]},
            {"Players": [1]},
            {"Frames": {"Location": [0, 0, 0]}},
            {"Splines": [{"Segments": ["a"]}]},
        ],
    )
    def test_invalid_layout(self, tmp_path: Path, data: object) -> None:
        with pytest.raises(ValueError, match="Invalid world snapshot"):
            WorldLoader().load_from_json(_write(tmp_path, data))


def test_reload_skips_malformed_snapshot(qapp, app_settings, tmp_path: Path) -> None:
    path = _write(tmp_path, SNAPSHOT)
    window = MainWindow(app_settings, world_path=path)
    try:
        world = window.map_view.renderer.world
        assert world is not None and world.players[0].name == "Alice"

        path.write_bytes(orjson.dumps({"Players": [1]}))
        window.reload_world(str(path))

        assert window.map_view.renderer.world is world
    finally:
        window.close()

"""Tests for world to canvas mapping."""

import pytest

from railmap.gui.map_view import WorldBounds, compute_canvas_metrics
from railmap.settings import ConfigError


class TestCanvasMetrics:
    def test_default_bounds(self) -> None:
        metrics = compute_canvas_metrics(WorldBounds(-200000, 200000, -200000, 200000), 8000)

        assert metrics.world_width == 400000
        assert metrics.world_height == 400000
        assert metrics.scale == 2
        assert metrics.projected_width == 8000
        assert metrics.projected_height == 8000

    def test_asymmetric_bounds_use_larger_axis(self) -> None:
        metrics = compute_canvas_metrics(WorldBounds(-200000, 200000, -100000, 100000), 8000)

        assert metrics.scale == 2
        assert metrics.projected_width == 8000
        assert metrics.projected_height == 4000
        # Uniform: same ratio on both axes
        assert metrics.projected_width / metrics.world_width == pytest.approx(
            metrics.projected_height / metrics.world_height
        )

    def test_single_zero_axis_is_allowed(self) -> None:
        metrics = compute_canvas_metrics(WorldBounds(0, 1000, 5, 5), 100)

        assert metrics.scale == 10
        assert metrics.projected_height == 0

    def test_world_to_canvas_corners(self) -> None:
        metrics = compute_canvas_metrics()

        assert metrics.world_to_canvas(-200000, -200000) == (0, 0)
        assert metrics.world_to_canvas(200000, 200000) == (8000, 8000)
        assert metrics.world_to_canvas(0, 0) == (4000, 4000)
        assert metrics.world_length(100) == 2


class TestInvalidBounds:
    def test_zero_extent_fails_fast(self) -> None:
        with pytest.raises(ConfigError):
            WorldBounds(10, 10, -3, -3)

    def test_inverted_bounds(self) -> None:
        with pytest.raises(ConfigError):
            WorldBounds(100, -100, -100, 100)

    def test_non_positive_image_size(self) -> None:
        with pytest.raises(ConfigError):
            compute_canvas_metrics(image_size=0)

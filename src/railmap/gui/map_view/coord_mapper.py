"""World to canvas coordinate mapping.

The world is projected onto a square canvas image with one uniform scale,
chosen so that the larger world axis exactly fills the image. World units
are centimeters, hence the factor of 100.
"""

from dataclasses import dataclass

from railmap.settings.types import ConfigError

IMAGE_SIZE = 8000
WORLD_UNITS_PER_METER = 100


@dataclass(frozen=True)
class WorldBounds:
    """Fixed extents of the simulated world."""

    min_x: float = -200000
    max_x: float = 200000
    min_y: float = -200000
    max_y: float = 200000

    def __post_init__(self) -> None:
        if self.max_x < self.min_x or self.max_y < self.min_y:
            raise ConfigError(f"World bounds are inverted: {self}")
        if self.width == 0 and self.height == 0:
            raise ConfigError(f"World bounds have zero extent: {self}")

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


DEFAULT_WORLD_BOUNDS = WorldBounds()


@dataclass(frozen=True)
class CanvasMetrics:
    """Scale and offset constants shared by every renderer and the camera.

    Attributes:
        bounds: World extents the metrics were computed from
        image_size: Edge of the square canvas image in canvas units
        world_width: Extent of the world along X
        world_height: Extent of the world along Y
        scale: Canvas units per world meter, same for both axes
        projected_width: Width of the world on the canvas
        projected_height: Height of the world on the canvas
    """

    bounds: WorldBounds
    image_size: float
    world_width: float
    world_height: float
    scale: float
    projected_width: float
    projected_height: float

    def world_to_canvas(self, x: float, y: float) -> tuple[float, float]:
        """Convert a world position to canvas coordinates."""
        canvas_x = (x - self.bounds.min_x) / WORLD_UNITS_PER_METER * self.scale
        canvas_y = (y - self.bounds.min_y) / WORLD_UNITS_PER_METER * self.scale
        return (canvas_x, canvas_y)

    def world_length(self, length: float) -> float:
        """Convert a world distance to a canvas distance."""
        return length / WORLD_UNITS_PER_METER * self.scale


def compute_canvas_metrics(
    bounds: WorldBounds = DEFAULT_WORLD_BOUNDS, image_size: float = IMAGE_SIZE
) -> CanvasMetrics:
    """Compute canvas metrics for the given world bounds.

    Raises:
        ConfigError: If image_size is not positive
    """
    if image_size <= 0:
        raise ConfigError(f"Canvas image size must be positive: {image_size}")

    world_width = bounds.width
    world_height = bounds.height
    scale = image_size * WORLD_UNITS_PER_METER / max(world_width, world_height)

    return CanvasMetrics(
        bounds=bounds,
        image_size=image_size,
        world_width=world_width,
        world_height=world_height,
        scale=scale,
        projected_width=world_width / WORLD_UNITS_PER_METER * scale,
        projected_height=world_height / WORLD_UNITS_PER_METER * scale,
    )

"""Built-in world used when no snapshot file is given."""

from .models import Frame, Player, Spline, SplineSegment, Vector3, WorldData


def build_demo_world() -> WorldData:
    """A small loop of track with one train and one player."""
    corners = [
        Vector3(-60000, -40000, 0),
        Vector3(60000, -40000, 0),
        Vector3(60000, 40000, 0),
        Vector3(-60000, 40000, 0),
    ]
    loop = Spline(
        type=0,
        segments=tuple(
            SplineSegment(start=corners[i], end=corners[(i + 1) % len(corners)])
            for i in range(len(corners))
        ),
    )
    return WorldData(
        players=(Player(name="Engineer", location=Vector3(-58000, -40000, 0)),),
        frames=(
            Frame(type="porter_040", name="Porter", number="1",
                  location=Vector3(-56000, -40000, 0)),
        ),
        splines=(loop,),
    )

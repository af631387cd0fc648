"""Radial layout for the circle-of-fifths diagram.

Everything here is a pure function of its arguments: the diagram is
re-laid out from the static table on every frame, so nothing can drift.

Angles follow the trigonometric convention: 0 degrees points along +x and
positive angles turn counter-clockwise. Twelve positions 30 degrees apart
cover the circle, one per pitch class.
"""

import math
from dataclasses import dataclass
from typing import Iterable, Mapping

from .exceptions import PreconditionError

CLOCK_POSITIONS = 12
DEGREES_PER_POSITION = 360 / CLOCK_POSITIONS


@dataclass(frozen=True)
class Ring:
    """A concentric circle of the diagram."""
    name: str
    radius: float


@dataclass(frozen=True)
class RadialPoint:
    """A static label on a ring, at an angle in degrees."""
    label: str
    ring: str
    angle: float


@dataclass(frozen=True)
class PlacedLabel:
    """A label projected into layout coordinates.

    ``x`` is where the text starts, already shifted left by half the label
    length so the text is centred on its anchor.
    """
    x: float
    y: float
    label: str


@dataclass(frozen=True)
class LayoutSpace:
    """Rectangular coordinate domain the diagram is projected into."""
    x_min: float = -200.0
    x_max: float = 200.0
    y_min: float = -200.0
    y_max: float = 200.0

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    def contains(self, x: float, y: float) -> bool:
        return self.x_min <= x <= self.x_max and self.y_min <= y <= self.y_max


def clock_angle(position: int) -> float:
    """Angle for a clock position: 0 is 12 o'clock, positions run clockwise.

    Every ring places its labels through this function, so labels at the
    same position on different rings get exactly the same angle.
    """
    return (90 - position * DEGREES_PER_POSITION) % 360


def place_point(radius: float, angle_degrees: float, label: str) -> PlacedLabel:
    """Project one label from polar to rectangular coordinates."""
    radians = angle_degrees * math.pi / 180
    x = radius * math.cos(radians) - len(label) / 2
    y = radius * math.sin(radians)
    return PlacedLabel(x=x, y=y, label=label)


def layout_points(
    points: Iterable[RadialPoint],
    rings: Mapping[str, Ring],
) -> list[PlacedLabel]:
    """Place every point on its ring.

    Points outside any LayoutSpace are returned as-is; discarding them is
    up to whoever draws the result.

    Raises:
        PreconditionError: If a point names a ring that is not configured.
    """
    placed = []
    for point in points:
        ring = rings.get(point.ring)
        if ring is None:
            raise PreconditionError(
                f"point {point.label!r} refers to unknown ring {point.ring!r}"
            )
        placed.append(place_point(ring.radius, point.angle, point.label))
    return placed


def ring_outline(radius: float, steps: int = 96) -> list[tuple[float, float]]:
    """Evenly spaced points along a ring, for drawing the circle itself."""
    outline = []
    for i in range(steps):
        radians = 2 * math.pi * i / steps
        outline.append((radius * math.cos(radians), radius * math.sin(radians)))
    return outline


def to_cell(
    x: float,
    y: float,
    space: LayoutSpace,
    width: int,
    height: int,
) -> tuple[int, int] | None:
    """Map a layout coordinate to a (row, col) cell of a width x height area.

    y grows upwards in layout space and downwards on screen. Returns None
    for points outside ``space`` or when the area has no cells.
    """
    if width <= 0 or height <= 0 or not space.contains(x, y):
        return None
    col = round((x - space.x_min) / space.width * (width - 1))
    row = round((space.y_max - y) / space.height * (height - 1))
    return row, col

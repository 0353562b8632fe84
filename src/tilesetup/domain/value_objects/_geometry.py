"""Core geometry value objects in micro-units."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class Alignment(str, Enum):
    """Where the full tiles are anchored along one axis.

    START anchors at the left/top edge and leaves the remainder at the far
    edge, END does the opposite, CENTER splits the remainder across both.
    """

    START = "start"
    CENTER = "center"
    END = "end"


class Rotation(IntEnum):
    """Allowed tile rotations in degrees."""

    R0 = 0
    R90 = 90
    R180 = 180
    R270 = 270


@dataclass(frozen=True)
class Point:
    """A position in micro-units, origin at the top-left of the area."""

    x: int
    y: int

    def translate(self, dx: int, dy: int) -> Point:
        """Return this point moved by (dx, dy)."""
        return Point(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Dimension:
    """Immutable width/height pair in micro-units."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("Dimensions must be non-negative")

    @property
    def area(self) -> int:
        """Area in micro-units squared."""
        return self.width * self.height

    @property
    def is_square(self) -> bool:
        return self.width == self.height

    def swapped(self) -> Dimension:
        """Return the dimension rotated a quarter turn."""
        return Dimension(self.height, self.width)


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned rectangle in micro-units."""

    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("Bounds must have non-negative size")

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def center(self) -> Point:
        return Point(self.x + self.width // 2, self.y + self.height // 2)

    def corners(self) -> tuple[Point, Point, Point, Point]:
        """Top-left, top-right, bottom-left and bottom-right corners."""
        return (
            Point(self.x, self.y),
            Point(self.right, self.y),
            Point(self.x, self.bottom),
            Point(self.right, self.bottom),
        )

    def contains(self, point: Point) -> bool:
        """Whether ``point`` lies inside or on the edge of these bounds."""
        return self.x <= point.x <= self.right and self.y <= point.y <= self.bottom

    def intersection(self, other: Bounds) -> Bounds | None:
        """Overlapping region, or None when the rectangles only touch or are apart."""
        left = max(self.x, other.x)
        top = max(self.y, other.y)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        if left >= right or top >= bottom:
            return None
        return Bounds(left, top, right - left, bottom - top)

"""Mask geometry variants and tile/mask intersection results.

Mask geometry is one of three frozen variants. Geometry never changes in
place: moving or resizing a mask swaps in a new geometry value.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ._geometry import Bounds, Point


class ShapeType(str, Enum):
    """Kinds of mask geometry."""

    RECTANGLE = "rectangle"
    CIRCLE = "circle"
    POLYGON = "polygon"


@dataclass(frozen=True)
class RectangleGeometry:
    """Axis-aligned rectangle given by its top-left corner and size."""

    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("Rectangle size must be non-negative")

    @property
    def shape_type(self) -> ShapeType:
        return ShapeType.RECTANGLE

    @property
    def bounds(self) -> Bounds:
        return Bounds(self.x, self.y, self.width, self.height)

    def contains(self, point: Point) -> bool:
        return self.bounds.contains(point)

    def moved_to(self, position: Point) -> RectangleGeometry:
        return RectangleGeometry(position.x, position.y, self.width, self.height)

    def resized(self, width: int, height: int) -> RectangleGeometry:
        return RectangleGeometry(self.x, self.y, width, height)


@dataclass(frozen=True)
class CircleGeometry:
    """Circle given by centre and radius."""

    cx: int
    cy: int
    radius: int

    def __post_init__(self) -> None:
        if self.radius < 0:
            raise ValueError("Circle radius must be non-negative")

    @property
    def shape_type(self) -> ShapeType:
        return ShapeType.CIRCLE

    @property
    def bounds(self) -> Bounds:
        return Bounds(
            self.cx - self.radius, self.cy - self.radius, 2 * self.radius, 2 * self.radius
        )

    def contains(self, point: Point) -> bool:
        dx = point.x - self.cx
        dy = point.y - self.cy
        return dx * dx + dy * dy <= self.radius * self.radius

    def moved_to(self, position: Point) -> CircleGeometry:
        """Place the circle so its bounding box starts at ``position``."""
        return CircleGeometry(
            position.x + self.radius, position.y + self.radius, self.radius
        )

    def resized(self, radius: int) -> CircleGeometry:
        """Change the radius, keeping the bounding box's top-left corner fixed."""
        left = self.cx - self.radius
        top = self.cy - self.radius
        return CircleGeometry(left + radius, top + radius, radius)


@dataclass(frozen=True)
class PolygonGeometry:
    """Simple polygon given by its vertices in order."""

    points: tuple[Point, ...]

    @property
    def shape_type(self) -> ShapeType:
        return ShapeType.POLYGON

    @property
    def bounds(self) -> Bounds:
        if not self.points:
            return Bounds(0, 0, 0, 0)
        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]
        return Bounds(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))

    def contains(self, point: Point) -> bool:
        """Ray-casting point-in-polygon test."""
        inside = False
        count = len(self.points)
        j = count - 1
        for i in range(count):
            xi, yi = self.points[i].x, self.points[i].y
            xj, yj = self.points[j].x, self.points[j].y
            if (yi > point.y) != (yj > point.y):
                crossing_x = (xj - xi) * (point.y - yi) / (yj - yi) + xi
                if point.x < crossing_x:
                    inside = not inside
            j = i
        return inside

    def moved_to(self, position: Point) -> PolygonGeometry:
        """Translate every vertex so the bounding box starts at ``position``."""
        origin = self.bounds
        dx = position.x - origin.x
        dy = position.y - origin.y
        return PolygonGeometry(tuple(p.translate(dx, dy) for p in self.points))

    def resized(self, width: int, height: int) -> PolygonGeometry:
        """Scale the vertices into a bounding box of the given size."""
        box = self.bounds
        points = []
        for p in self.points:
            x = box.x + (p.x - box.x) * width // box.width if box.width else p.x
            y = box.y + (p.y - box.y) * height // box.height if box.height else p.y
            points.append(Point(x, y))
        return PolygonGeometry(tuple(points))


MaskGeometry = RectangleGeometry | CircleGeometry | PolygonGeometry


class IntersectionType(str, Enum):
    """How a mask overlaps a single tile."""

    NONE = "none"
    FULL = "full"
    PARTIAL_LEFT = "partial_left"
    PARTIAL_RIGHT = "partial_right"
    PARTIAL_TOP = "partial_top"
    PARTIAL_BOTTOM = "partial_bottom"
    PARTIAL_CORNER = "partial_corner"
    MINIMAL = "minimal"

    @property
    def hides_tile(self) -> bool:
        """Whether a tile with this intersection is masked."""
        return self not in (IntersectionType.NONE, IntersectionType.MINIMAL)


@dataclass(frozen=True)
class IntersectionResult:
    """Outcome of testing one mask shape against one tile.

    Attributes:
        type: Classification of the overlap.
        ratio: Overlap as a fraction of tile area, in [0, 1].
        intersected_area: Overlapping rectangle, when it is known exactly.
        remaining_area: Part of the tile left uncovered by a single-edge cut.
    """

    type: IntersectionType
    ratio: float
    intersected_area: Bounds | None = None
    remaining_area: Bounds | None = None

    def __post_init__(self) -> None:
        if not 0.0 <= self.ratio <= 1.0:
            raise ValueError("Intersection ratio must be between 0 and 1")

    @classmethod
    def none(cls) -> IntersectionResult:
        return cls(IntersectionType.NONE, 0.0)

"""Non-destructive masking of tile cells.

A mask hides the cells it overlaps by clearing ``visible`` and recording its
id in ``masked_by``. Nothing else about a cell changes, so removing the mask
restores the cell exactly. A cell stays hidden until every mask covering it
has been removed.

Rectangles are intersected exactly. Circles and polygons are approximated by
sampling the tile's four corners and its centre.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Callable

from tilesetup.domain.entities import Grid, MaskShape, TileCell
from tilesetup.domain.exceptions import DuplicateMaskError, InvalidShapeError
from tilesetup.domain.value_objects import (
    Bounds,
    CircleGeometry,
    IntersectionResult,
    IntersectionType,
    MaskGeometry,
    Point,
    PolygonGeometry,
    RectangleGeometry,
)

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[list[str]], None]

SAMPLE_POINTS = 5


@dataclass(frozen=True)
class MaskingConfig:
    """Thresholds for classifying mask/tile overlap.

    Attributes:
        minimal_intersection_threshold: Overlap ratios below this are MINIMAL
            and do not hide the tile.
        full_coverage_threshold: Rectangle overlap ratios above this are FULL.
        enable_partial_cutting: Keep the intersection detail of partially
            covered tiles on the mask, for cut-piece planning.
    """

    minimal_intersection_threshold: float = 0.05
    full_coverage_threshold: float = 0.99
    enable_partial_cutting: bool = False

    def __post_init__(self) -> None:
        if not 0 <= self.minimal_intersection_threshold <= 1:
            raise ValueError("Minimal intersection threshold must be between 0 and 1")
        if not 0 <= self.full_coverage_threshold <= 1:
            raise ValueError("Full coverage threshold must be between 0 and 1")


DEFAULT_MASKING_CONFIG = MaskingConfig()


# =============================================================================
# Intersection
# =============================================================================


def rectangle_intersection(
    tile: Bounds, rect: RectangleGeometry, config: MaskingConfig = DEFAULT_MASKING_CONFIG
) -> IntersectionResult:
    """Exact overlap between a tile and a rectangle mask.

    The partial direction names the side of the tile left uncovered:
    PARTIAL_LEFT means the overlap stops short of the tile's left edge, so
    the left strip remains (reported as ``remaining_area``). Uncovered strips
    on both axes give PARTIAL_CORNER.
    """
    overlap = tile.intersection(rect.bounds)
    if overlap is None or tile.area == 0:
        return IntersectionResult.none()

    ratio = overlap.area / tile.area
    if ratio < config.minimal_intersection_threshold:
        return IntersectionResult(IntersectionType.MINIMAL, ratio, intersected_area=overlap)
    if ratio > config.full_coverage_threshold:
        return IntersectionResult(IntersectionType.FULL, ratio, intersected_area=overlap)

    left_cut = overlap.x > tile.x
    right_cut = overlap.right < tile.right
    top_cut = overlap.y > tile.y
    bottom_cut = overlap.bottom < tile.bottom

    remaining: Bounds | None = None
    if (left_cut or right_cut) and (top_cut or bottom_cut):
        kind = IntersectionType.PARTIAL_CORNER
    elif left_cut:
        kind = IntersectionType.PARTIAL_LEFT
        remaining = Bounds(tile.x, tile.y, overlap.x - tile.x, tile.height)
    elif right_cut:
        kind = IntersectionType.PARTIAL_RIGHT
        remaining = Bounds(overlap.right, tile.y, tile.right - overlap.right, tile.height)
    elif top_cut:
        kind = IntersectionType.PARTIAL_TOP
        remaining = Bounds(tile.x, tile.y, tile.width, overlap.y - tile.y)
    elif bottom_cut:
        kind = IntersectionType.PARTIAL_BOTTOM
        remaining = Bounds(tile.x, overlap.bottom, tile.width, tile.bottom - overlap.bottom)
    else:
        kind = IntersectionType.FULL

    return IntersectionResult(kind, ratio, intersected_area=overlap, remaining_area=remaining)


def _sample_points(tile: Bounds) -> list[Point]:
    return [*tile.corners(), tile.center]


def circle_intersection(
    tile: Bounds, circle: CircleGeometry, config: MaskingConfig = DEFAULT_MASKING_CONFIG
) -> IntersectionResult:
    """Approximate overlap between a tile and a circle mask.

    A tile with all four corners inside is FULL. A tile with no corner and
    not its centre inside is NONE, even if the circle's edge crosses it.
    Anything else is PARTIAL_CORNER with ratio ``inside / 5``.
    """
    corners_inside = sum(1 for corner in tile.corners() if circle.contains(corner))
    center_inside = circle.contains(tile.center)

    if corners_inside == 4:
        return IntersectionResult(IntersectionType.FULL, 1.0)
    if corners_inside == 0 and not center_inside:
        return IntersectionResult.none()

    ratio = (corners_inside + (1 if center_inside else 0)) / SAMPLE_POINTS
    if ratio < config.minimal_intersection_threshold:
        return IntersectionResult(IntersectionType.MINIMAL, ratio)
    return IntersectionResult(IntersectionType.PARTIAL_CORNER, ratio)


def polygon_intersection(
    tile: Bounds, polygon: PolygonGeometry, config: MaskingConfig = DEFAULT_MASKING_CONFIG
) -> IntersectionResult:
    """Approximate overlap between a tile and a polygon mask.

    Samples the four corners and the centre with a ray-casting test.
    Degenerate polygons (fewer than three points) never intersect.
    """
    if len(polygon.points) < 3:
        return IntersectionResult.none()

    inside = sum(1 for point in _sample_points(tile) if polygon.contains(point))
    if inside == SAMPLE_POINTS:
        return IntersectionResult(IntersectionType.FULL, 1.0)
    if inside == 0:
        return IntersectionResult.none()

    ratio = inside / SAMPLE_POINTS
    if ratio < config.minimal_intersection_threshold:
        return IntersectionResult(IntersectionType.MINIMAL, ratio)
    return IntersectionResult(IntersectionType.PARTIAL_CORNER, ratio)


def shape_intersection(
    tile: Bounds, geometry: MaskGeometry, config: MaskingConfig = DEFAULT_MASKING_CONFIG
) -> IntersectionResult:
    """Dispatch to the intersection test for the geometry's type."""
    match geometry:
        case RectangleGeometry():
            return rectangle_intersection(tile, geometry, config)
        case CircleGeometry():
            return circle_intersection(tile, geometry, config)
        case PolygonGeometry():
            return polygon_intersection(tile, geometry, config)


# =============================================================================
# Engine
# =============================================================================


class MaskingEngine:
    """Owns the masks drawn over one grid and keeps cell visibility in sync.

    The engine edits the cells of the grid it is bound to in place. Use
    ``attach_grid`` when the grid is replaced (for example after a pattern
    change) so masks are re-applied to the new cells.

    Example:
        engine = MaskingEngine(result.grid)
        engine.add_rectangle_mask("window", RectangleGeometry(x, y, w, h), "Window")
        engine.move_shape("window", Point(x2, y2))   # old cells restored
        engine.remove_mask("window")                 # every cell restored
    """

    def __init__(self, grid: Grid, config: MaskingConfig | None = None) -> None:
        self._grid = grid
        self.config = config or DEFAULT_MASKING_CONFIG
        self._masks: dict[str, MaskShape] = {}
        self._tile_masks: dict[str, set[str]] = {}
        self._callbacks: list[ChangeCallback] = []

    @property
    def grid(self) -> Grid:
        return self._grid

    # -------------------------------------------------------------------------
    # Adding masks
    # -------------------------------------------------------------------------

    def add_rectangle_mask(
        self, mask_id: str, geometry: RectangleGeometry, label: str = ""
    ) -> MaskShape:
        return self.add_mask(mask_id, geometry, label)

    def add_circle_mask(self, mask_id: str, geometry: CircleGeometry, label: str = "") -> MaskShape:
        return self.add_mask(mask_id, geometry, label)

    def add_polygon_mask(
        self, mask_id: str, geometry: PolygonGeometry, label: str = ""
    ) -> MaskShape:
        return self.add_mask(mask_id, geometry, label)

    def add_mask(
        self, mask_id: str, geometry: MaskGeometry, label: str = "", active: bool = True
    ) -> MaskShape:
        """Add a mask of any geometry and hide the cells it covers.

        Raises:
            DuplicateMaskError: If ``mask_id`` is already in use.
            InvalidShapeError: If a polygon has fewer than three points.
        """
        if mask_id in self._masks:
            raise DuplicateMaskError(mask_id)
        if isinstance(geometry, PolygonGeometry) and len(geometry.points) < 3:
            raise InvalidShapeError("Polygon mask needs at least 3 points")

        mask = MaskShape(id=mask_id, geometry=geometry, label=label, active=active)
        affected = self._apply_mask(mask) if active else []
        self._masks[mask_id] = mask
        logger.debug(f"Added {mask.shape_type.value} mask '{mask_id}' covering {len(affected)} tiles")
        self._notify(affected)
        return mask

    # -------------------------------------------------------------------------
    # Removing and changing masks
    # -------------------------------------------------------------------------

    def remove_mask(self, mask_id: str) -> list[str]:
        """Remove a mask and restore the cells only it was hiding.

        Returns:
            Ids of the cells the mask covered; empty for an unknown id.
        """
        mask = self._masks.get(mask_id)
        if mask is None:
            return []
        restored = self._unmask(mask)
        del self._masks[mask_id]
        self._notify(restored)
        return restored

    def move_shape(self, mask_id: str, new_position: Point) -> list[str]:
        """Move a mask so its bounding box starts at ``new_position``.

        Returns:
            Ids of cells uncovered or newly covered; empty for an unknown id.
        """
        mask = self._masks.get(mask_id)
        if mask is None:
            return []
        return self._reshape(mask, mask.geometry.moved_to(new_position))

    def resize_shape(
        self,
        mask_id: str,
        width: int | None = None,
        height: int | None = None,
        radius: int | None = None,
    ) -> list[str]:
        """Resize a mask, keeping its bounding box's top-left corner fixed.

        Rectangles and polygons take ``width``/``height``; circles take
        ``radius``. Omitted values keep their current size.

        Returns:
            Ids of cells uncovered or newly covered; empty for an unknown id.
        """
        mask = self._masks.get(mask_id)
        if mask is None:
            return []

        geometry = mask.geometry
        match geometry:
            case RectangleGeometry():
                resized: MaskGeometry = geometry.resized(
                    width if width is not None else geometry.width,
                    height if height is not None else geometry.height,
                )
            case CircleGeometry():
                resized = geometry.resized(radius if radius is not None else geometry.radius)
            case PolygonGeometry():
                box = geometry.bounds
                resized = geometry.resized(
                    width if width is not None else box.width,
                    height if height is not None else box.height,
                )
        return self._reshape(mask, resized)

    def set_geometry(self, mask_id: str, geometry: MaskGeometry) -> list[str]:
        """Replace a mask's geometry outright (used to restore snapshots)."""
        mask = self._masks.get(mask_id)
        if mask is None:
            return []
        return self._reshape(mask, geometry)

    def toggle_mask_active(self, mask_id: str) -> list[str]:
        """Switch a mask between hiding its cells and being dormant."""
        mask = self._masks.get(mask_id)
        if mask is None:
            return []
        mask.active = not mask.active
        affected = self._apply_mask(mask) if mask.active else self._unmask(mask)
        self._notify(affected)
        return affected

    def clear_all_masks(self) -> list[str]:
        """Remove every mask and return the ids of all restored cells."""
        restored: dict[str, None] = {}
        for mask_id in list(self._masks):
            restored.update(dict.fromkeys(self.remove_mask(mask_id)))
        return list(restored)

    def attach_grid(self, grid: Grid) -> list[str]:
        """Bind to a replacement grid and re-apply every active mask to it.

        Mask ids owned by this engine are first stripped from the new cells,
        since a copied grid may carry membership computed against the old
        cell positions.
        """
        for mask in self._masks.values():
            mask.covered_tiles.clear()
        self._tile_masks.clear()
        self._grid = grid

        affected: dict[str, None] = {}
        for cell in grid:
            stale = [m for m in cell.masked_by if m in self._masks]
            if stale:
                cell.masked_by = [m for m in cell.masked_by if m not in self._masks]
                cell.visible = not cell.masked_by
                affected[cell.id] = None
        for mask in self._masks.values():
            if mask.active:
                affected.update(dict.fromkeys(self._apply_mask(mask)))

        result = list(affected)
        self._notify(result)
        return result

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_mask(self, mask_id: str) -> MaskShape | None:
        return self._masks.get(mask_id)

    def get_all_masks(self) -> list[MaskShape]:
        return list(self._masks.values())

    def get_active_masks(self) -> list[MaskShape]:
        return [mask for mask in self._masks.values() if mask.active]

    def get_masks_for_tile(self, tile_id: str) -> list[MaskShape]:
        """Masks currently hiding the given cell."""
        return [self._masks[m] for m in self._tile_masks.get(tile_id, ()) if m in self._masks]

    def get_masked_tile_count(self) -> int:
        """Number of cells hidden by at least one mask."""
        return len(self._tile_masks)

    def get_mask_at_position(self, position: Point) -> MaskShape | None:
        """First mask whose shape contains ``position``."""
        for mask in self._masks.values():
            if mask.geometry.contains(position):
                return mask
        return None

    def intersection_for(self, tile_id: str, mask_id: str) -> IntersectionResult:
        """Current intersection between one cell and one mask."""
        cell = self._grid.get(tile_id)
        mask = self._masks.get(mask_id)
        if cell is None or mask is None:
            return IntersectionResult.none()
        return shape_intersection(self._grid.cell_bounds(cell), mask.geometry, self.config)

    def __contains__(self, mask_id: object) -> bool:
        return mask_id in self._masks

    def __len__(self) -> int:
        return len(self._masks)

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def export_masks(self) -> list[MaskShape]:
        """Detached copies of every mask, in creation order."""
        return [
            MaskShape(
                id=mask.id,
                geometry=mask.geometry,
                label=mask.label,
                active=mask.active,
                covered_tiles=set(mask.covered_tiles),
                created_at=mask.created_at,
            )
            for mask in self._masks.values()
        ]

    def import_masks(self, shapes: Iterable[MaskShape]) -> None:
        """Add every shape as a new mask.

        Raises:
            DuplicateMaskError: If an id is already in use.
        """
        for shape in shapes:
            self.add_mask(shape.id, shape.geometry, shape.label, active=shape.active)

    # -------------------------------------------------------------------------
    # Change notification
    # -------------------------------------------------------------------------

    def on_change(self, callback: ChangeCallback) -> None:
        self._callbacks.append(callback)

    def off_change(self, callback: ChangeCallback) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def _notify(self, affected: list[str]) -> None:
        for callback in list(self._callbacks):
            try:
                callback(affected)
            except Exception:
                logger.exception("Masking change callback failed")

    # -------------------------------------------------------------------------
    # Internal bookkeeping
    # -------------------------------------------------------------------------

    def _reshape(self, mask: MaskShape, geometry: MaskGeometry) -> list[str]:
        """Un-mask at the old geometry, swap geometry, re-mask at the new one."""
        previous = self._unmask(mask)
        mask.geometry = geometry
        current = self._apply_mask(mask) if mask.active else []
        affected = list(dict.fromkeys([*previous, *current]))
        self._notify(affected)
        return affected

    def _apply_mask(self, mask: MaskShape) -> list[str]:
        affected: list[str] = []
        mask.partial_intersections.clear()
        for cell in self._grid:
            result = shape_intersection(self._grid.cell_bounds(cell), mask.geometry, self.config)
            if not result.type.hides_tile:
                continue
            if self.config.enable_partial_cutting and result.type is not IntersectionType.FULL:
                mask.partial_intersections[cell.id] = result
            self._hide(cell, mask)
            affected.append(cell.id)
        return affected

    def _hide(self, cell: TileCell, mask: MaskShape) -> None:
        cell.visible = False
        if mask.id not in cell.masked_by:
            cell.masked_by.append(mask.id)
        mask.covered_tiles.add(cell.id)
        self._tile_masks.setdefault(cell.id, set()).add(mask.id)

    def _unmask(self, mask: MaskShape) -> list[str]:
        restored: list[str] = []
        for tile_id in sorted(mask.covered_tiles, key=self._grid_order):
            cell = self._grid.get(tile_id)
            if cell is None:
                continue
            cell.masked_by = [m for m in cell.masked_by if m != mask.id]
            if not cell.masked_by:
                cell.visible = True
            covering = self._tile_masks.get(tile_id)
            if covering is not None:
                covering.discard(mask.id)
                if not covering:
                    del self._tile_masks[tile_id]
            restored.append(tile_id)
        mask.covered_tiles.clear()
        mask.partial_intersections.clear()
        return restored

    def _grid_order(self, tile_id: str) -> tuple[int, int]:
        cell = self._grid.get(tile_id)
        return (cell.row, cell.col) if cell is not None else (-1, -1)

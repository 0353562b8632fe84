"""Grid generation: turns area, tile and gap sizes into a grid of tile cells.

Each axis is solved independently. The number of whole tiles is the largest
``n`` with ``n * tile + (n - 1) * gap <= area``, which rearranges to
``n = floor((area + gap) / (tile + gap))``. Whatever length is left over is
placed at one or both edges depending on the start-line alignment, and
becomes a column (or row) of cut pieces when it is at least 1 mm.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from tilesetup.domain import units
from tilesetup.domain.entities import Grid, TileCell, tile_id
from tilesetup.domain.exceptions import LayoutValidationError
from tilesetup.domain.value_objects import (
    Alignment,
    AxisLayout,
    CutPiece,
    Dimension,
    FieldError,
    FullPiece,
    Piece,
    PieceDimension,
    Point,
    SplitPiece,
    TileKind,
    ValidationCode,
)

logger = logging.getLogger(__name__)

# Input limits in display millimetres
AREA_MIN_MM = 100
AREA_MAX_MM = 99_999_999
TILE_MIN_MM = 10
TILE_MAX_MM = 9_999
GAP_MIN_MM = 0
GAP_MAX_MM = 50
MAX_TILES = 10_000

# Cut pieces at or above this percentage of a full tile are "large"
LARGE_PIECE_THRESHOLD = 50


@dataclass(frozen=True)
class LayoutInput:
    """Layout request in micro-units.

    Values are plain integers rather than ``Dimension`` so that out-of-range
    input (including negatives) reaches ``validate_layout_input`` intact.
    """

    area_width: int
    area_height: int
    tile_width: int
    tile_height: int
    gap: int = 0
    align_x: Alignment = Alignment.START
    align_y: Alignment = Alignment.START

    @classmethod
    def from_mm(
        cls,
        area_width: float,
        area_height: float,
        tile_width: float,
        tile_height: float,
        gap: float = 0,
        align_x: Alignment = Alignment.START,
        align_y: Alignment = Alignment.START,
    ) -> LayoutInput:
        """Build an input from display millimetres."""
        return cls(
            area_width=units.to_micro(area_width),
            area_height=units.to_micro(area_height),
            tile_width=units.to_micro(tile_width),
            tile_height=units.to_micro(tile_height),
            gap=units.to_micro(gap),
            align_x=align_x,
            align_y=align_y,
        )

    @property
    def area(self) -> Dimension:
        return Dimension(self.area_width, self.area_height)

    @property
    def tile_size(self) -> Dimension:
        return Dimension(self.tile_width, self.tile_height)


@dataclass(frozen=True)
class GridStatistics:
    """Counts and areas over the visible cells of a grid.

    Attributes:
        total_count: Visible cells.
        full_count: Visible uncut tiles.
        large_count: Visible pieces at or above half a tile (split pieces included).
        small_count: Visible pieces below half a tile (split pieces included).
        large_piece: Size of the first large piece found, if any.
        small_piece: Size of the first small piece found, if any.
        covered_area: Visible tile area in micro-units squared.
    """

    total_count: int
    full_count: int
    large_count: int
    small_count: int
    large_piece: PieceDimension | None
    small_piece: PieceDimension | None
    covered_area: int

    @property
    def covered_area_m2(self) -> float:
        return units.micro_area_to_m2(self.covered_area)


@dataclass(frozen=True)
class LayoutResult:
    """Generated grid together with its per-axis layout and statistics."""

    grid: Grid
    input: LayoutInput
    axis_x: AxisLayout
    axis_y: AxisLayout
    statistics: GridStatistics

    @property
    def tile_size(self) -> Dimension:
        return self.grid.tile_size

    @property
    def gap(self) -> int:
        return self.grid.gap

    @property
    def total_tile_count(self) -> int:
        return self.statistics.total_count

    @property
    def full_tile_count(self) -> int:
        return self.statistics.full_count

    @property
    def large_piece_count(self) -> int:
        return self.statistics.large_count

    @property
    def small_piece_count(self) -> int:
        return self.statistics.small_count

    @property
    def large_piece_dimension(self) -> PieceDimension | None:
        return self.statistics.large_piece

    @property
    def small_piece_dimension(self) -> PieceDimension | None:
        return self.statistics.small_piece

    @property
    def column_count(self) -> int:
        return self.grid.column_count

    @property
    def row_count(self) -> int:
        return self.grid.row_count

    @property
    def left_remainder(self) -> int:
        return self.axis_x.near_edge

    @property
    def right_remainder(self) -> int:
        return self.axis_x.far_edge

    @property
    def top_remainder(self) -> int:
        return self.axis_y.near_edge

    @property
    def bottom_remainder(self) -> int:
        return self.axis_y.far_edge

    @property
    def total_area_m2(self) -> float:
        return units.micro_area_to_m2(self.input.area_width * self.input.area_height)

    @property
    def covered_area_m2(self) -> float:
        return self.statistics.covered_area_m2


# =============================================================================
# Validation
# =============================================================================


def _check_range(
    errors: list[FieldError],
    field: str,
    label: str,
    value: int,
    min_mm: int,
    max_mm: int,
    required: bool = True,
) -> None:
    if required and value <= 0:
        errors.append(
            FieldError(field, ValidationCode.REQUIRED, f"{label} is required")
        )
        return
    if value < units.to_micro(min_mm):
        errors.append(
            FieldError(
                field, ValidationCode.MIN_VALUE, f"{label} must be at least {min_mm}mm"
            )
        )
    elif value > units.to_micro(max_mm):
        errors.append(
            FieldError(
                field, ValidationCode.MAX_VALUE, f"{label} must be at most {max_mm}mm"
            )
        )


def validate_layout_input(layout_input: LayoutInput) -> list[FieldError]:
    """Check a layout input against every limit.

    All problems are collected rather than stopping at the first one.

    Returns:
        Field errors in check order; an empty list means the input is valid.
    """
    errors: list[FieldError] = []
    li = layout_input

    _check_range(errors, "area_width", "Area width", li.area_width, AREA_MIN_MM, AREA_MAX_MM)
    _check_range(errors, "area_height", "Area height", li.area_height, AREA_MIN_MM, AREA_MAX_MM)
    _check_range(errors, "tile_width", "Tile width", li.tile_width, TILE_MIN_MM, TILE_MAX_MM)
    _check_range(errors, "tile_height", "Tile height", li.tile_height, TILE_MIN_MM, TILE_MAX_MM)
    _check_range(errors, "gap", "Gap", li.gap, GAP_MIN_MM, GAP_MAX_MM, required=False)

    if li.tile_width > li.area_width:
        errors.append(
            FieldError(
                "tile_width",
                ValidationCode.TILE_LARGER_THAN_AREA,
                "Tile width cannot exceed area width",
            )
        )
    if li.tile_height > li.area_height:
        errors.append(
            FieldError(
                "tile_height",
                ValidationCode.TILE_LARGER_THAN_AREA,
                "Tile height cannot exceed area height",
            )
        )

    min_tile = min(li.tile_width, li.tile_height)
    if min_tile > 0 and li.gap >= min_tile:
        errors.append(
            FieldError(
                "gap",
                ValidationCode.GAP_LARGER_THAN_TILE,
                "Gap must be smaller than the tile",
            )
        )

    if min(li.area_width, li.area_height, li.tile_width, li.tile_height) > 0:
        estimated = -(-li.area_width // li.tile_width) * -(-li.area_height // li.tile_height)
        if estimated > MAX_TILES:
            errors.append(
                FieldError(
                    "general",
                    ValidationCode.OVERFLOW,
                    f"Too many tiles ({estimated}); the maximum is {MAX_TILES}",
                )
            )

    return errors


# =============================================================================
# Per-axis calculation and classification
# =============================================================================


def calculate_axis(area: int, tile: int, gap: int, alignment: Alignment) -> AxisLayout:
    """Fit whole tiles along one axis and distribute the remainder.

    Args:
        area: Axis length in micro-units.
        tile: Tile length along the axis.
        gap: Joint width between tiles.
        alignment: Start-line alignment for this axis.

    Returns:
        Whole-tile count, used length and near/far edge remainders.
    """
    count = units.floor_div(area + gap, tile + gap)
    used = count * tile + (count - 1) * gap if count > 0 else 0
    remainder = units.sub(area, used)

    match alignment:
        case Alignment.START:
            near, far = 0, remainder
        case Alignment.END:
            near, far = remainder, 0
        case Alignment.CENTER:
            near = remainder // 2
            far = remainder - near

    return AxisLayout(
        count=count, used_length=used, remainder=remainder, near_edge=near, far_edge=far
    )


def classify_piece(cut_width: int, cut_height: int, full_width: int, full_height: int) -> TileKind:
    """Classify a cell by comparing its size to the nominal tile.

    A cell with exactly the nominal size is FULL. Anything else is LARGE when
    its truncated area percentage is at least 50, SMALL otherwise.
    """
    if cut_width == full_width and cut_height == full_height:
        return TileKind.FULL
    ratio = units.floor_div(cut_width * cut_height * 100, full_width * full_height)
    return TileKind.LARGE if ratio >= LARGE_PIECE_THRESHOLD else TileKind.SMALL


def calculate_area_ratio(width: int, height: int, full_width: int, full_height: int) -> int:
    """Piece area as a percentage of a full tile, rounded half-up."""
    full_area = full_width * full_height
    if full_area == 0:
        return 0
    return (width * height * 200 + full_area) // (2 * full_area)


def _segments(axis: AxisLayout, tile: int) -> list[int]:
    """Cell lengths along an axis, near edge first."""
    segments: list[int] = []
    if axis.near_edge >= units.MIN_PIECE_SIZE:
        segments.append(axis.near_edge)
    segments.extend([tile] * axis.count)
    if axis.far_edge >= units.MIN_PIECE_SIZE:
        segments.append(axis.far_edge)
    return segments


def _piece_for(width: int, height: int, tile: Dimension) -> Piece:
    kind = classify_piece(width, height, tile.width, tile.height)
    if kind is TileKind.FULL:
        return FullPiece()
    return CutPiece(kind, Dimension(width, height))


# =============================================================================
# Statistics
# =============================================================================


def summarize_grid(grid: Grid) -> GridStatistics:
    """Count and measure the visible cells of a grid.

    Masked cells are excluded, so the result reflects what actually needs
    to be laid after masking and editing.
    """
    nominal = grid.tile_size
    total = full = large = small = 0
    covered = 0
    large_piece: PieceDimension | None = None
    small_piece: PieceDimension | None = None

    for cell in grid:
        if not cell.visible:
            continue
        total += 1
        size = cell.resolve_size(nominal)
        covered += size.area

        match cell.piece:
            case FullPiece():
                full += 1
            case CutPiece(kind=TileKind.LARGE):
                large += 1
                if large_piece is None:
                    large_piece = _piece_dimension(size, nominal)
            case CutPiece():
                small += 1
                if small_piece is None:
                    small_piece = _piece_dimension(size, nominal)
            case SplitPiece():
                ratio = calculate_area_ratio(size.width, size.height, nominal.width, nominal.height)
                if ratio >= LARGE_PIECE_THRESHOLD:
                    large += 1
                else:
                    small += 1

    return GridStatistics(
        total_count=total,
        full_count=full,
        large_count=large,
        small_count=small,
        large_piece=large_piece,
        small_piece=small_piece,
        covered_area=covered,
    )


def _piece_dimension(size: Dimension, nominal: Dimension) -> PieceDimension:
    return PieceDimension(
        width=size.width,
        height=size.height,
        area_ratio=calculate_area_ratio(size.width, size.height, nominal.width, nominal.height),
    )


# =============================================================================
# Engine
# =============================================================================


class GridEngine:
    """Generates tile grids from validated layout input."""

    def generate(self, layout_input: LayoutInput) -> LayoutResult:
        """Generate the grid and statistics for a layout.

        Args:
            layout_input: Area, tile, gap and alignment in micro-units.

        Returns:
            A new grid with its per-axis layout and statistics.

        Raises:
            LayoutValidationError: If the input violates any limit. No grid
                is built in that case.
        """
        errors = validate_layout_input(layout_input)
        if errors:
            raise LayoutValidationError(errors)

        tile = layout_input.tile_size
        gap = layout_input.gap
        axis_x = calculate_axis(layout_input.area_width, tile.width, gap, layout_input.align_x)
        axis_y = calculate_axis(layout_input.area_height, tile.height, gap, layout_input.align_y)

        grid = self.build_grid(axis_x, axis_y, tile, gap)
        logger.debug(
            f"Generated {grid.row_count}x{grid.column_count} grid "
            f"({axis_x.count}x{axis_y.count} whole tiles, "
            f"remainder {axis_x.remainder}x{axis_y.remainder})"
        )

        return LayoutResult(
            grid=grid,
            input=layout_input,
            axis_x=axis_x,
            axis_y=axis_y,
            statistics=summarize_grid(grid),
        )

    def build_grid(
        self, axis_x: AxisLayout, axis_y: AxisLayout, tile: Dimension, gap: int
    ) -> Grid:
        """Assemble cells row by row, accumulating positions.

        No gap is added after the last cell of a row or column.
        """
        widths = _segments(axis_x, tile.width)
        heights = _segments(axis_y, tile.height)

        rows: list[list[TileCell]] = []
        y = 0
        for r, height in enumerate(heights):
            row: list[TileCell] = []
            x = 0
            for c, width in enumerate(widths):
                row.append(
                    TileCell(
                        id=tile_id(r, c),
                        row=r,
                        col=c,
                        position=Point(x, y),
                        piece=_piece_for(width, height, tile),
                    )
                )
                x += width
                if c < len(widths) - 1:
                    x += gap
            rows.append(row)
            y += height
            if r < len(heights) - 1:
                y += gap

        return Grid(rows, tile, gap)

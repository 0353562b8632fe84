"""Domain entities for the tile layout engine.

Tile cells and masks are mutable: the masking engine and history commands
edit them in place. Grids themselves are only ever replaced wholesale by the
grid and pattern engines.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from datetime import datetime

from .value_objects import (
    Bounds,
    CutPiece,
    Dimension,
    FullPiece,
    IntersectionResult,
    MaskGeometry,
    Piece,
    Point,
    Rotation,
    ShapeType,
    SplitPiece,
    TileKind,
)


def tile_id(row: int, col: int) -> str:
    """Stable id for the tile generated at (row, col)."""
    return f"tile_{row}_{col}"


@dataclass
class TileCell:
    """One cell of a layout grid.

    Attributes:
        id: Stable identifier, unique within its grid.
        row: Grid row index.
        col: Grid column index.
        position: Top-left corner in micro-units.
        piece: Full tile, cut piece or split piece.
        rotation: Rotation applied by the pattern or the user.
        visible: False while at least one mask covers the cell.
        masked_by: Ids of the masks covering the cell, in masking order.
        locked: Locked cells are protected from editing in the UI.
    """

    id: str
    row: int
    col: int
    position: Point
    piece: Piece = field(default_factory=FullPiece)
    rotation: Rotation = Rotation.R0
    visible: bool = True
    masked_by: list[str] = field(default_factory=list)
    locked: bool = False

    @property
    def kind(self) -> TileKind:
        return self.piece.kind

    def resolve_size(self, nominal: Dimension) -> Dimension:
        """Actual size of this cell, given the grid's nominal tile size."""
        match self.piece:
            case FullPiece():
                return nominal
            case CutPiece(size=size) | SplitPiece(size=size):
                return size

    def copy(self) -> TileCell:
        """Independent copy of this cell."""
        return replace(self, masked_by=list(self.masked_by))


class Grid:
    """Rectangular, row-major array of tile cells.

    The grid keeps an id -> (row, col) index so commands and masks can refer
    to cells by id and resolve them in constant time.
    """

    def __init__(
        self,
        rows: list[list[TileCell]],
        tile_size: Dimension,
        gap: int = 0,
    ) -> None:
        if rows and any(len(row) != len(rows[0]) for row in rows):
            raise ValueError("All grid rows must have the same length")
        self._rows = rows
        self.tile_size = tile_size
        self.gap = gap
        self._index: dict[str, tuple[int, int]] = {}
        for r, row in enumerate(rows):
            for c, cell in enumerate(row):
                if cell.id in self._index:
                    raise ValueError(f"Duplicate tile id in grid: {cell.id}")
                self._index[cell.id] = (r, c)

    @property
    def rows(self) -> list[list[TileCell]]:
        return self._rows

    @property
    def row_count(self) -> int:
        return len(self._rows)

    @property
    def column_count(self) -> int:
        return len(self._rows[0]) if self._rows else 0

    def __iter__(self) -> Iterator[TileCell]:
        for row in self._rows:
            yield from row

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, tile_id: object) -> bool:
        return tile_id in self._index

    def get(self, tile_id: str) -> TileCell | None:
        """Look up a cell by id."""
        location = self._index.get(tile_id)
        if location is None:
            return None
        r, c = location
        return self._rows[r][c]

    def cell_at(self, row: int, col: int) -> TileCell:
        return self._rows[row][col]

    def cell_size(self, cell: TileCell) -> Dimension:
        return cell.resolve_size(self.tile_size)

    def cell_bounds(self, cell: TileCell) -> Bounds:
        """Axis-aligned footprint of a cell."""
        size = self.cell_size(cell)
        return Bounds(cell.position.x, cell.position.y, size.width, size.height)

    def copy(self) -> Grid:
        """Deep copy: every cell in the result is a new object."""
        return Grid(
            [[cell.copy() for cell in row] for row in self._rows],
            self.tile_size,
            self.gap,
        )


@dataclass
class GridHandle:
    """Re-pointable reference to the grid currently being edited.

    Commands hold a handle plus a tile id instead of a cell reference, so
    they keep resolving correctly after the grid is replaced.
    """

    grid: Grid

    def resolve(self, tile_id: str) -> TileCell | None:
        return self.grid.get(tile_id)

    def replace(self, grid: Grid) -> Grid:
        """Point the handle at ``grid`` and return the previous grid."""
        previous = self.grid
        self.grid = grid
        return previous


@dataclass
class MaskShape:
    """A user-drawn region that hides the tiles it overlaps.

    Attributes:
        id: User-assigned id, unique among the engine's masks.
        geometry: Current shape.
        label: Optional display label (e.g. "window").
        active: Inactive masks keep their geometry but hide nothing.
        covered_tiles: Ids of the cells this mask currently hides.
        created_at: Creation time.
        partial_intersections: Intersection detail for partially covered
            cells, recorded only when partial cutting is enabled.
    """

    id: str
    geometry: MaskGeometry
    label: str = ""
    active: bool = True
    covered_tiles: set[str] = field(default_factory=set)
    created_at: datetime = field(default_factory=datetime.now)
    partial_intersections: dict[str, IntersectionResult] = field(
        default_factory=dict, repr=False
    )

    @property
    def shape_type(self) -> ShapeType:
        return self.geometry.shape_type

    @property
    def position(self) -> Point:
        """Top-left corner of the shape's bounding box."""
        bounds = self.geometry.bounds
        return Point(bounds.x, bounds.y)

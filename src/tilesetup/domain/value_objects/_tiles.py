"""Tile piece variants and layout summary value objects.

A tile cell is either a full tile, a cut piece or a manually split piece.
Full tiles carry no size of their own; their size is the layout's nominal
tile size. Cut and split pieces always carry an explicit size.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ._geometry import Dimension


class TileKind(str, Enum):
    """Classification of a tile cell."""

    FULL = "full"
    LARGE = "large"
    SMALL = "small"
    SPLIT = "split"


@dataclass(frozen=True)
class FullPiece:
    """An uncut tile. Its size is the grid's nominal tile size."""

    @property
    def kind(self) -> TileKind:
        return TileKind.FULL


@dataclass(frozen=True)
class CutPiece:
    """A tile cut to fit an edge remainder."""

    kind: TileKind
    size: Dimension

    def __post_init__(self) -> None:
        if self.kind not in (TileKind.LARGE, TileKind.SMALL):
            raise ValueError(f"Cut piece kind must be large or small, got '{self.kind}'")

    def swapped(self) -> CutPiece:
        return CutPiece(self.kind, self.size.swapped())


@dataclass(frozen=True)
class SplitPiece:
    """A piece produced by manually subdividing another tile."""

    size: Dimension
    parent_id: str | None = None
    split_ratio: float | None = None

    def __post_init__(self) -> None:
        if self.split_ratio is not None and not 0 < self.split_ratio < 1:
            raise ValueError("Split ratio must be between 0 and 1")

    @property
    def kind(self) -> TileKind:
        return TileKind.SPLIT

    def swapped(self) -> SplitPiece:
        return SplitPiece(self.size.swapped(), self.parent_id, self.split_ratio)


Piece = FullPiece | CutPiece | SplitPiece


@dataclass(frozen=True)
class PieceDimension:
    """Size of a representative cut piece.

    Attributes:
        width: Piece width in micro-units.
        height: Piece height in micro-units.
        area_ratio: Piece area as a rounded percentage of a full tile.
    """

    width: int
    height: int
    area_ratio: int


@dataclass(frozen=True)
class AxisLayout:
    """How whole tiles and remainder divide one axis of the area.

    Attributes:
        count: Number of whole tiles that fit.
        used_length: Length occupied by the whole tiles and the gaps between them.
        remainder: Area length not covered by whole tiles.
        near_edge: Remainder placed before the first whole tile (left/top).
        far_edge: Remainder placed after the last whole tile (right/bottom).
    """

    count: int
    used_length: int
    remainder: int
    near_edge: int
    far_edge: int

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError("Tile count must be non-negative")
        if self.near_edge + self.far_edge != self.remainder:
            raise ValueError("Edge remainders must sum to the total remainder")

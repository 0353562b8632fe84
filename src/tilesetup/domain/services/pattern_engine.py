"""Tile laying patterns.

Each pattern is a pure function of a cell's (row, col) and the nominal tile
size that returns a ``PatternOffset``: a translation, a rotation and whether
the cell's width and height swap. Patterns are registered with their
metadata through ``pattern_registry.register``.

``apply_pattern`` is the only way a pattern reaches a grid. It always builds
a new grid and never touches the one it is given.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from tilesetup.domain import units
from tilesetup.domain.entities import Grid, TileCell
from tilesetup.domain.exceptions import UnknownPatternError
from tilesetup.domain.value_objects import (
    CutPiece,
    Dimension,
    FullPiece,
    Rotation,
    SplitPiece,
)

logger = logging.getLogger(__name__)


class PatternId(str, Enum):
    """Stable identifiers of the registered patterns."""

    LINEAR_SQUARE = "LINEAR_SQUARE"
    DIAMOND = "DIAMOND"
    RUNNING_BOND_SQUARE = "RUNNING_BOND_SQUARE"
    STACK_BOND = "STACK_BOND"
    VERTICAL_STACK = "VERTICAL_STACK"
    DIAGONAL_RUNNING = "DIAGONAL_RUNNING"
    RUNNING_BOND_OFFSET = "RUNNING_BOND_OFFSET"
    VERTICAL_RUNNING_BOND = "VERTICAL_RUNNING_BOND"
    VERTICAL_STACK_OFFSET = "VERTICAL_STACK_OFFSET"
    ONE_THIRD_RUNNING_BOND = "ONE_THIRD_RUNNING_BOND"
    DIAGONAL_RUNNING_POINT = "DIAGONAL_RUNNING_POINT"
    TRADITIONAL_RUNNING_BOND = "TRADITIONAL_RUNNING_BOND"
    TRADITIONAL_HERRINGBONE = "TRADITIONAL_HERRINGBONE"
    STRAIGHT_HERRINGBONE = "STRAIGHT_HERRINGBONE"
    BASKET_WEAVE = "BASKET_WEAVE"


class OffsetType(str, Enum):
    """Broad family of offset a pattern applies."""

    NONE = "none"
    HALF = "half"
    THIRD = "third"
    CUSTOM = "custom"


@dataclass(frozen=True)
class PatternOffset:
    """Per-cell adjustment produced by a pattern."""

    dx: int = 0
    dy: int = 0
    rotation: Rotation = Rotation.R0
    swap_dimensions: bool = False


OffsetFunction = Callable[[int, int, int, int, int], PatternOffset]
"""(row, col, tile_width, tile_height, gap) -> PatternOffset"""


@dataclass(frozen=True)
class PatternDefinition:
    """A registered pattern and its metadata.

    Attributes:
        id: Stable identifier.
        name_ko: Korean display name.
        name_en: English display name.
        description: Short description for pattern pickers.
        offset_type: Offset family.
        base_rotation: Nominal rotation in degrees, for renderers.
        alternating: Whether neighbouring cells alternate orientation.
        requires_rectangular: Whether the pattern only makes sense for
            non-square tiles.
        calculate_offset: The offset function.
    """

    id: PatternId
    name_ko: str
    name_en: str
    description: str
    offset_type: OffsetType
    base_rotation: int
    alternating: bool
    requires_rectangular: bool
    calculate_offset: OffsetFunction = field(repr=False, compare=False)


class PatternRegistry:
    """Registry of pattern definitions, kept in registration order."""

    def __init__(self) -> None:
        self._patterns: dict[PatternId, PatternDefinition] = {}

    def register(
        self,
        pattern_id: PatternId,
        *,
        name_ko: str,
        name_en: str,
        description: str,
        offset_type: OffsetType = OffsetType.NONE,
        base_rotation: int = 0,
        alternating: bool = False,
        requires_rectangular: bool = False,
    ) -> Callable[[OffsetFunction], OffsetFunction]:
        """Decorator registering an offset function under ``pattern_id``.

        Raises:
            ValueError: If the id is already registered.
        """

        def decorator(func: OffsetFunction) -> OffsetFunction:
            if pattern_id in self._patterns:
                raise ValueError(f"Pattern '{pattern_id.value}' already registered")
            self._patterns[pattern_id] = PatternDefinition(
                id=pattern_id,
                name_ko=name_ko,
                name_en=name_en,
                description=description,
                offset_type=offset_type,
                base_rotation=base_rotation,
                alternating=alternating,
                requires_rectangular=requires_rectangular,
                calculate_offset=func,
            )
            return func

        return decorator

    def get(self, pattern_id: PatternId | str) -> PatternDefinition:
        """Look up a pattern by id.

        Raises:
            UnknownPatternError: If nothing is registered under ``pattern_id``.
        """
        try:
            key = PatternId(pattern_id)
        except ValueError:
            raise UnknownPatternError(str(pattern_id)) from None
        if key not in self._patterns:
            raise UnknownPatternError(key.value)
        return self._patterns[key]

    def __contains__(self, pattern_id: object) -> bool:
        try:
            return PatternId(pattern_id) in self._patterns
        except ValueError:
            return False

    def all(self) -> list[PatternDefinition]:
        return list(self._patterns.values())

    def compatible(self, is_square: bool) -> list[PatternDefinition]:
        """Patterns suitable for the tile shape.

        Rectangular-only patterns are left out for square tiles.
        """
        return [p for p in self._patterns.values() if not (is_square and p.requires_rectangular)]


pattern_registry = PatternRegistry()


# =============================================================================
# Offset helpers
# =============================================================================


def _half(size: int) -> int:
    return size // 2


def _third_step(size: int, index: int) -> int:
    """Offset for a 0/33/66 percent cycle."""
    return size * (index % 3) // 3


# =============================================================================
# Pattern definitions
# =============================================================================


@pattern_registry.register(
    PatternId.LINEAR_SQUARE,
    name_ko="직선 사각",
    name_en="Linear Square",
    description="Basic straight grid",
)
def _linear_square(row: int, col: int, tile_w: int, tile_h: int, gap: int) -> PatternOffset:
    return PatternOffset()


@pattern_registry.register(
    PatternId.DIAMOND,
    name_ko="다이아몬드",
    name_en="Diamond",
    description="Tiles set at 45 degrees",
    offset_type=OffsetType.HALF,
    base_rotation=45,
)
def _diamond(row: int, col: int, tile_w: int, tile_h: int, gap: int) -> PatternOffset:
    # The 45 degree turn is left to the renderer (base_rotation).
    return PatternOffset(dx=_half(tile_w) if row % 2 else 0)


@pattern_registry.register(
    PatternId.RUNNING_BOND_SQUARE,
    name_ko="벽돌쌓기 (사각)",
    name_en="Running Bond Square",
    description="Every other row shifted by half a tile",
    offset_type=OffsetType.HALF,
)
def _running_bond_square(row: int, col: int, tile_w: int, tile_h: int, gap: int) -> PatternOffset:
    return PatternOffset(dx=_half(tile_w) if row % 2 else 0)


@pattern_registry.register(
    PatternId.STACK_BOND,
    name_ko="스택 본드",
    name_en="Stack Bond",
    description="Tiles aligned in straight columns",
)
def _stack_bond(row: int, col: int, tile_w: int, tile_h: int, gap: int) -> PatternOffset:
    return PatternOffset()


@pattern_registry.register(
    PatternId.VERTICAL_STACK,
    name_ko="수직 스택",
    name_en="Vertical Stack",
    description="Stack bond with tiles stood on end",
    base_rotation=90,
    requires_rectangular=True,
)
def _vertical_stack(row: int, col: int, tile_w: int, tile_h: int, gap: int) -> PatternOffset:
    return PatternOffset(rotation=Rotation.R90, swap_dimensions=True)


@pattern_registry.register(
    PatternId.DIAGONAL_RUNNING,
    name_ko="대각 러닝",
    name_en="Diagonal Running",
    description="Rows shifted progressively by a quarter tile",
    offset_type=OffsetType.CUSTOM,
)
def _diagonal_running(row: int, col: int, tile_w: int, tile_h: int, gap: int) -> PatternOffset:
    return PatternOffset(dx=(row * tile_w // 4) % tile_w)


@pattern_registry.register(
    PatternId.RUNNING_BOND_OFFSET,
    name_ko="러닝 본드 오프셋",
    name_en="Running Bond Offset",
    description="Rows shifted by thirds of a tile",
    offset_type=OffsetType.THIRD,
)
def _running_bond_offset(row: int, col: int, tile_w: int, tile_h: int, gap: int) -> PatternOffset:
    return PatternOffset(dx=_third_step(tile_w, row))


@pattern_registry.register(
    PatternId.VERTICAL_RUNNING_BOND,
    name_ko="수직 러닝 본드",
    name_en="Vertical Running Bond",
    description="Every other column shifted by half a tile",
    offset_type=OffsetType.HALF,
)
def _vertical_running_bond(row: int, col: int, tile_w: int, tile_h: int, gap: int) -> PatternOffset:
    return PatternOffset(dy=_half(tile_h) if col % 2 else 0)


@pattern_registry.register(
    PatternId.VERTICAL_STACK_OFFSET,
    name_ko="수직 스택 오프셋",
    name_en="Vertical Stack Offset",
    description="Columns shifted by thirds of a tile",
    offset_type=OffsetType.THIRD,
)
def _vertical_stack_offset(row: int, col: int, tile_w: int, tile_h: int, gap: int) -> PatternOffset:
    return PatternOffset(dy=_third_step(tile_h, col))


@pattern_registry.register(
    PatternId.ONE_THIRD_RUNNING_BOND,
    name_ko="1/3 러닝 본드",
    name_en="1/3 Running Bond",
    description="Repeating one-third offset",
    offset_type=OffsetType.THIRD,
)
def _one_third_running_bond(row: int, col: int, tile_w: int, tile_h: int, gap: int) -> PatternOffset:
    return PatternOffset(dx=_third_step(tile_w, row))


@pattern_registry.register(
    PatternId.DIAGONAL_RUNNING_POINT,
    name_ko="대각 러닝 포인트",
    name_en="Diagonal Running Point",
    description="Half offset with alternating orientation",
    offset_type=OffsetType.HALF,
    alternating=True,
    requires_rectangular=True,
)
def _diagonal_running_point(row: int, col: int, tile_w: int, tile_h: int, gap: int) -> PatternOffset:
    turned = (row + col) % 2 == 1
    return PatternOffset(
        dx=_half(tile_w) if row % 2 else 0,
        rotation=Rotation.R90 if turned else Rotation.R0,
        swap_dimensions=turned,
    )


@pattern_registry.register(
    PatternId.TRADITIONAL_RUNNING_BOND,
    name_ko="전통 러닝 본드",
    name_en="Traditional Running Bond",
    description="Classic brick pattern",
    offset_type=OffsetType.HALF,
)
def _traditional_running_bond(row: int, col: int, tile_w: int, tile_h: int, gap: int) -> PatternOffset:
    return PatternOffset(dx=_half(tile_w) if row % 2 else 0)


@pattern_registry.register(
    PatternId.TRADITIONAL_HERRINGBONE,
    name_ko="전통 헤링본",
    name_en="Traditional Herringbone",
    description="Interlocking V pattern",
    offset_type=OffsetType.CUSTOM,
    alternating=True,
    requires_rectangular=True,
)
def _traditional_herringbone(row: int, col: int, tile_w: int, tile_h: int, gap: int) -> PatternOffset:
    match (row % 2, col % 2):
        case (0, 0):
            return PatternOffset()
        case (0, 1):
            return PatternOffset(dx=tile_h, rotation=Rotation.R90, swap_dimensions=True)
        case (1, 0):
            return PatternOffset(dy=_half(tile_w), rotation=Rotation.R90, swap_dimensions=True)
        case _:
            return PatternOffset(dx=_half(tile_h), dy=_half(tile_w))


@pattern_registry.register(
    PatternId.STRAIGHT_HERRINGBONE,
    name_ko="직선 헤링본",
    name_en="Straight Herringbone",
    description="Herringbone at right angles",
    alternating=True,
    requires_rectangular=True,
)
def _straight_herringbone(row: int, col: int, tile_w: int, tile_h: int, gap: int) -> PatternOffset:
    turned = (row + col) % 2 == 1
    return PatternOffset(
        rotation=Rotation.R90 if turned else Rotation.R0, swap_dimensions=turned
    )


@pattern_registry.register(
    PatternId.BASKET_WEAVE,
    name_ko="바스켓 위브",
    name_en="Basket Weave",
    description="Alternating horizontal and vertical pairs",
    offset_type=OffsetType.CUSTOM,
    alternating=True,
    requires_rectangular=True,
)
def _basket_weave(row: int, col: int, tile_w: int, tile_h: int, gap: int) -> PatternOffset:
    in_block = col % 2
    if (row // 2 + col // 2) % 2 == 1:
        return PatternOffset(
            dy=in_block * tile_w, rotation=Rotation.R90, swap_dimensions=True
        )
    return PatternOffset(dx=in_block * tile_w)


# =============================================================================
# Application
# =============================================================================


@dataclass(frozen=True)
class ApplyPatternOptions:
    """Which per-cell editing state survives a pattern change."""

    preserve_visibility: bool = True
    preserve_masking: bool = True
    preserve_locks: bool = True


@dataclass(frozen=True)
class PatternValidation:
    """Warnings and errors for using a pattern with a given tile size."""

    is_valid: bool
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


def _patterned_cell(source: TileCell, offset: PatternOffset, options: ApplyPatternOptions) -> TileCell:
    piece = source.piece
    if offset.swap_dimensions:
        match piece:
            case CutPiece() | SplitPiece():
                piece = piece.swapped()
            case FullPiece():
                pass
    return TileCell(
        id=source.id,
        row=source.row,
        col=source.col,
        position=source.position.translate(offset.dx, offset.dy),
        piece=piece,
        rotation=offset.rotation,
        visible=source.visible if options.preserve_visibility else True,
        masked_by=list(source.masked_by) if options.preserve_masking else [],
        locked=source.locked if options.preserve_locks else False,
    )


def apply_pattern(
    grid: Grid,
    pattern_id: PatternId | str,
    options: ApplyPatternOptions | None = None,
    tile_size: Dimension | None = None,
) -> Grid:
    """Return a new grid with ``pattern_id`` applied to every cell.

    Each cell's offset is added to its current position and its rotation is
    set from the pattern. Width and height swap only for cut and split
    pieces; full tiles take their size from the nominal tile.

    Args:
        grid: Source grid. It is not modified.
        pattern_id: Registered pattern id.
        options: What editing state to carry over from ``grid``.
        tile_size: Nominal tile size for the offsets; defaults to the grid's.

    Returns:
        A new grid whose cells are all new objects.

    Raises:
        UnknownPatternError: If ``pattern_id`` is not registered.
    """
    pattern = pattern_registry.get(pattern_id)
    options = options or ApplyPatternOptions()
    tile = tile_size or grid.tile_size

    if pattern.requires_rectangular and tile.is_square:
        logger.warning(f"Pattern '{pattern.name_en}' is intended for rectangular tiles")

    rows = [
        [
            _patterned_cell(
                cell,
                pattern.calculate_offset(cell.row, cell.col, tile.width, tile.height, grid.gap),
                options,
            )
            for cell in row
        ]
        for row in grid.rows
    ]
    return Grid(rows, grid.tile_size, grid.gap)


def get_all_patterns() -> list[PatternDefinition]:
    """Every registered pattern in registration order."""
    return pattern_registry.all()


def get_pattern(pattern_id: PatternId | str) -> PatternDefinition:
    return pattern_registry.get(pattern_id)


def compatible_patterns(is_square: bool) -> list[PatternDefinition]:
    return pattern_registry.compatible(is_square)


PREVIEW_SIZE = 4
PREVIEW_TILE = units.to_micro(100)
PREVIEW_GAP = units.to_micro(2)


def generate_pattern_preview(pattern_id: PatternId | str) -> list[list[PatternOffset]]:
    """Offsets for a 4x4 block of 100 mm tiles with 2 mm gaps, for thumbnails.

    Raises:
        UnknownPatternError: If ``pattern_id`` is not registered.
    """
    pattern = pattern_registry.get(pattern_id)
    return [
        [
            pattern.calculate_offset(row, col, PREVIEW_TILE, PREVIEW_TILE, PREVIEW_GAP)
            for col in range(PREVIEW_SIZE)
        ]
        for row in range(PREVIEW_SIZE)
    ]


HERRINGBONE_PATTERNS = frozenset(
    {PatternId.TRADITIONAL_HERRINGBONE, PatternId.STRAIGHT_HERRINGBONE}
)


def validate_pattern_application(
    pattern_id: PatternId | str, tile_size: Dimension
) -> PatternValidation:
    """Check whether a pattern suits the given tile size.

    Unlike ``apply_pattern`` this never raises: an unknown id is reported as
    an error entry.
    """
    if pattern_id not in pattern_registry:
        return PatternValidation(is_valid=False, errors=[f"Unknown pattern: {pattern_id}"])

    pattern = pattern_registry.get(pattern_id)
    warnings: list[str] = []

    if pattern.requires_rectangular and tile_size.is_square:
        warnings.append(
            f"Pattern '{pattern.name_en}' is intended for rectangular tiles (width != height)"
        )

    if pattern.id in HERRINGBONE_PATTERNS and tile_size.height:
        ratio = tile_size.width / tile_size.height
        if ratio < 0.4 or ratio > 0.6:
            warnings.append("Herringbone looks best with tiles in a 1:2 ratio")

    if pattern.id is PatternId.DIAMOND and not tile_size.is_square:
        warnings.append("Diamond looks most balanced with square tiles")

    return PatternValidation(is_valid=True, warnings=warnings)

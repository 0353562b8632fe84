"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field

from tilesetup.domain import units
from tilesetup.domain.entities import Grid, MaskShape
from tilesetup.domain.exceptions import UnitError
from tilesetup.domain.services import (
    GridStatistics,
    LayoutInput,
    LayoutResult,
    PatternId,
    validate_layout_input,
)
from tilesetup.domain.value_objects import Alignment, MaskGeometry


@dataclass
class LayoutRequest:
    """Input DTO for a layout, in display millimetres."""

    area_width: float
    area_height: float
    tile_width: float
    tile_height: float
    gap: float = 0.0
    start_x: Alignment = Alignment.START
    start_y: Alignment = Alignment.START

    def validate(self) -> list[str]:
        """Validate input and return list of error messages."""
        try:
            layout_input = self.to_layout_input()
        except UnitError as e:
            return [f"general: {e}"]
        return [str(error) for error in validate_layout_input(layout_input)]

    def to_layout_input(self) -> LayoutInput:
        """Convert to a micro-unit LayoutInput."""
        return LayoutInput(
            area_width=units.to_micro(self.area_width),
            area_height=units.to_micro(self.area_height),
            tile_width=units.to_micro(self.tile_width),
            tile_height=units.to_micro(self.tile_height),
            gap=units.to_micro(self.gap),
            align_x=Alignment(self.start_x),
            align_y=Alignment(self.start_y),
        )


@dataclass(frozen=True)
class MaskSpec:
    """A mask to draw over a freshly generated layout (geometry in micro-units)."""

    id: str
    geometry: MaskGeometry
    label: str = ""
    active: bool = True


@dataclass
class LayoutOutput:
    """Output DTO containing a generated, patterned and masked layout.

    Attributes:
        result: Raw grid engine result (unpatterned grid and per-axis layout).
        grid: Grid after the pattern and masks were applied.
        statistics: Statistics over the visible cells of ``grid``.
        pattern_id: Pattern used to lay the tiles.
        masks: Masks applied to ``grid``.
        warnings: Non-blocking advisories (pattern suitability).
        errors: Blocking problems; when present the other fields are empty.
    """

    result: LayoutResult | None
    grid: Grid | None
    statistics: GridStatistics | None
    pattern_id: PatternId = PatternId.LINEAR_SQUARE
    masks: list[MaskShape] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if the output is valid (no errors)."""
        return len(self.errors) == 0

    @classmethod
    def failed(cls, errors: list[str], pattern_id: PatternId = PatternId.LINEAR_SQUARE) -> LayoutOutput:
        """Empty output carrying only errors."""
        return cls(result=None, grid=None, statistics=None, pattern_id=pattern_id, errors=errors)

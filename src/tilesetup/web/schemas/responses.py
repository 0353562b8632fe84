"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class SizeResponseSchema(BaseModel):
    width: float = Field(..., description="Width in mm")
    height: float = Field(..., description="Height in mm")


class GridShapeSchema(BaseModel):
    columns: int = Field(..., description="Number of columns")
    rows: int = Field(..., description="Number of rows")


class RemaindersSchema(BaseModel):
    """Edge remainders in mm."""

    left: float
    right: float
    top: float
    bottom: float


class PieceSchema(BaseModel):
    """Representative cut piece."""

    width: float = Field(..., description="Width in mm")
    height: float = Field(..., description="Height in mm")
    area_ratio: int = Field(..., description="Area as a percentage of a full tile")


class StatisticsSchema(BaseModel):
    """Counts over visible tiles."""

    total_count: int
    full_count: int
    large_count: int
    small_count: int
    large_piece: PieceSchema | None = None
    small_piece: PieceSchema | None = None
    covered_area_m2: float
    total_area_m2: float


class BoundsSchema(BaseModel):
    x: float
    y: float
    width: float
    height: float


class MaskSummarySchema(BaseModel):
    """A mask and the tiles it hides."""

    id: str
    type: str
    label: str
    active: bool
    bounds: BoundsSchema
    covered_tiles: list[str] = Field(default_factory=list)


class TileSchema(BaseModel):
    """One tile cell."""

    id: str
    row: int
    col: int
    x: float
    y: float
    width: float
    height: float
    kind: str
    rotation: int
    visible: bool
    locked: bool
    masked_by: list[str] = Field(default_factory=list)


class LayoutResponseSchema(BaseModel):
    """Response for layout generation."""

    pattern: str = Field(..., description="Pattern id used")
    area: SizeResponseSchema
    tile: SizeResponseSchema
    gap: float = Field(..., description="Grout gap in mm")
    grid: GridShapeSchema
    remainders: RemaindersSchema
    statistics: StatisticsSchema
    masks: list[MaskSummarySchema] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    tiles: list[TileSchema] | None = Field(
        default=None, description="Every tile cell, when requested"
    )


class PatternSchema(BaseModel):
    """Pattern catalogue entry."""

    id: str
    name_ko: str
    name_en: str
    description: str
    offset_type: str
    base_rotation: int
    alternating: bool
    requires_rectangular: bool


class PatternListSchema(BaseModel):
    patterns: list[PatternSchema]
    count: int


class PatternOffsetSchema(BaseModel):
    """Offset applied to one preview cell, in mm."""

    dx: float
    dy: float
    rotation: int
    swap_dimensions: bool


class PatternPreviewSchema(BaseModel):
    """Offsets for a 4x4 block of 100 mm tiles with 2 mm gaps."""

    pattern_id: str
    tile_size: float = Field(..., description="Preview tile size in mm")
    gap: float = Field(..., description="Preview gap in mm")
    offsets: list[list[PatternOffsetSchema]]


class ValidationResultSchema(BaseModel):
    """Response for configuration validation."""

    is_valid: bool = Field(..., description="Whether configuration is valid")
    errors: list[dict[str, Any]] = Field(default_factory=list)
    warnings: list[dict[str, Any]] = Field(default_factory=list)


class ErrorResponseSchema(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error type identifier")
    details: list[dict[str, Any]] | dict[str, Any] | None = Field(
        default=None, description="Additional error details"
    )

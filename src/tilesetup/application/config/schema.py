"""Pydantic models for tile layout project files.

All lengths are display millimetres. Range checks that depend on more than
one field (tile larger than area, too many tiles) are left to the layout
validator so they are reported with the same messages as the engine's.
"""

from typing import Annotated, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from tilesetup.domain.services import PatternId
from tilesetup.domain.value_objects import Alignment

# Supported schema versions for configuration files
# Version 1.0: Area, tile, gap, start line, pattern and masks
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})


class AreaConfig(BaseModel):
    """Size of the area to tile.

    Attributes:
        width: Area width in mm.
        height: Area height in mm.
    """

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)


class TileConfig(BaseModel):
    """Nominal tile size in mm."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)


class StartLineConfig(BaseModel):
    """Start-line alignment per axis."""

    model_config = ConfigDict(extra="forbid")

    x: Alignment = Alignment.START
    y: Alignment = Alignment.START


class RectangleMaskConfig(BaseModel):
    """Rectangular mask given by its top-left corner and size in mm."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    type: Literal["rectangle"] = "rectangle"
    id: str = Field(..., min_length=1)
    label: str = ""
    active: bool = True
    x: float
    y: float
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)


class CircleMaskConfig(BaseModel):
    """Circular mask given by centre and radius in mm."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    type: Literal["circle"] = "circle"
    id: str = Field(..., min_length=1)
    label: str = ""
    active: bool = True
    cx: float
    cy: float
    radius: float = Field(..., gt=0)


class PolygonMaskConfig(BaseModel):
    """Polygon mask given by its vertices in mm."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    type: Literal["polygon"] = "polygon"
    id: str = Field(..., min_length=1)
    label: str = ""
    active: bool = True
    points: list[tuple[float, float]] = Field(..., min_length=3)


MaskConfig = Annotated[
    RectangleMaskConfig | CircleMaskConfig | PolygonMaskConfig,
    Field(discriminator="type"),
]


class MaskingSettingsConfig(BaseModel):
    """Overlap thresholds for masking."""

    model_config = ConfigDict(extra="forbid")

    minimal_intersection_threshold: float = Field(default=0.05, ge=0, le=1)
    full_coverage_threshold: float = Field(default=0.99, ge=0, le=1)
    enable_partial_cutting: bool = False


class HistorySettingsConfig(BaseModel):
    """Undo/redo limits.

    Attributes:
        max_undo_stack_size: Number of undo entries kept.
        enable_merging: Merge rapid consecutive moves into one entry.
        merge_window_ms: Largest gap between merged commands, in milliseconds.
    """

    model_config = ConfigDict(extra="forbid")

    max_undo_stack_size: int = Field(default=50, ge=1, le=1000)
    enable_merging: bool = True
    merge_window_ms: int = Field(default=1000, ge=0)


class OutputConfig(BaseModel):
    """Output format configuration."""

    model_config = ConfigDict(extra="forbid")

    format: Literal["summary", "diagram", "json", "csv", "all"] = "summary"
    output_dir: str | None = None


class TileSetupConfiguration(BaseModel):
    """Root configuration model for a tile layout project file.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.0")
        area: Area to tile
        tile: Nominal tile size
        gap: Grout gap in mm
        start_line: Alignment of full tiles per axis
        pattern: Layout pattern id
        masks: Regions to leave untiled, discriminated on ``type``
        masking: Masking thresholds
        history: Undo/redo settings for editing sessions
        output: Output format configuration
    """

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    area: AreaConfig
    tile: TileConfig
    gap: float = Field(default=0.0, ge=0)
    start_line: StartLineConfig = Field(default_factory=StartLineConfig)
    pattern: PatternId = PatternId.LINEAR_SQUARE
    masks: list[MaskConfig] = Field(default_factory=list)
    masking: MaskingSettingsConfig = Field(default_factory=MaskingSettingsConfig)
    history: HistorySettingsConfig = Field(default_factory=HistorySettingsConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Validate that schema version is supported."""
        if v not in SUPPORTED_VERSIONS:
            supported = ", ".join(sorted(SUPPORTED_VERSIONS))
            raise ValueError(f"Unsupported schema version '{v}'. Supported: {supported}")
        return v

    @model_validator(mode="after")
    def validate_unique_mask_ids(self) -> "TileSetupConfiguration":
        """Mask ids must be unique within a project."""
        seen: set[str] = set()
        for mask in self.masks:
            if mask.id in seen:
                raise ValueError(f"Duplicate mask id '{mask.id}'")
            seen.add(mask.id)
        return self

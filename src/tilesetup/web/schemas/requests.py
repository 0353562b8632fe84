"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from tilesetup.application.config.schema import MaskConfig
from tilesetup.domain.services import PatternId
from tilesetup.domain.value_objects import Alignment


class SizeSchema(BaseModel):
    """Width and height in millimetres.

    Range checks are left to layout validation so that every out-of-range
    value is reported together, with ``error_type`` ``layout_validation``.
    """

    model_config = ConfigDict(allow_inf_nan=False)

    width: float = Field(..., description="Width in mm")
    height: float = Field(..., description="Height in mm")


class StartLineSchema(BaseModel):
    """Start-line alignment per axis."""

    x: Alignment = Field(default=Alignment.START, description="Horizontal alignment")
    y: Alignment = Field(default=Alignment.START, description="Vertical alignment")


class LayoutRequestSchema(BaseModel):
    """Request for generating a tile layout."""

    model_config = ConfigDict(allow_inf_nan=False)

    area: SizeSchema = Field(..., description="Area to tile")
    tile: SizeSchema = Field(..., description="Nominal tile size")
    gap: float = Field(default=0.0, description="Grout gap in mm")
    start_line: StartLineSchema = Field(
        default_factory=StartLineSchema, description="Start-line alignment"
    )
    pattern: PatternId = Field(default=PatternId.LINEAR_SQUARE, description="Layout pattern")
    masks: list[MaskConfig] = Field(default_factory=list, description="Regions to leave untiled")
    include_tiles: bool = Field(default=False, description="Include every tile cell in the response")


class GenerateFromConfigRequest(BaseModel):
    """Request for generating a layout from a full project file."""

    config: dict[str, Any] = Field(..., description="Full project configuration JSON")
    include_tiles: bool = Field(default=False, description="Include every tile cell in the response")


class ConfigValidateRequest(BaseModel):
    """Request for validating a configuration."""

    config: dict[str, Any] = Field(..., description="Project configuration JSON")

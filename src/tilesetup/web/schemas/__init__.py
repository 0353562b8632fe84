"""Pydantic schemas for the REST API."""

from tilesetup.web.schemas.requests import (
    ConfigValidateRequest,
    GenerateFromConfigRequest,
    LayoutRequestSchema,
    SizeSchema,
    StartLineSchema,
)
from tilesetup.web.schemas.responses import (
    ErrorResponseSchema,
    LayoutResponseSchema,
    MaskSummarySchema,
    PatternListSchema,
    PatternOffsetSchema,
    PatternPreviewSchema,
    PatternSchema,
    StatisticsSchema,
    TileSchema,
    ValidationResultSchema,
)

__all__ = [
    # Requests
    "ConfigValidateRequest",
    "GenerateFromConfigRequest",
    "LayoutRequestSchema",
    "SizeSchema",
    "StartLineSchema",
    # Responses
    "ErrorResponseSchema",
    "LayoutResponseSchema",
    "MaskSummarySchema",
    "PatternListSchema",
    "PatternOffsetSchema",
    "PatternPreviewSchema",
    "PatternSchema",
    "StatisticsSchema",
    "TileSchema",
    "ValidationResultSchema",
]

"""Adapter to convert a TileSetupConfiguration to DTOs and domain objects.

Lengths in project files are millimetres; everything produced here is in
micro-units except the ``LayoutRequest``, which converts on demand.
"""

from datetime import timedelta

from tilesetup.application.config.schema import (
    CircleMaskConfig,
    PolygonMaskConfig,
    RectangleMaskConfig,
    TileSetupConfiguration,
)
from tilesetup.application.dtos import LayoutRequest, MaskSpec
from tilesetup.domain import units
from tilesetup.domain.services import HistoryConfig, MaskingConfig
from tilesetup.domain.value_objects import (
    CircleGeometry,
    MaskGeometry,
    Point,
    PolygonGeometry,
    RectangleGeometry,
)


def config_to_request(config: TileSetupConfiguration) -> LayoutRequest:
    """Convert the area, tile, gap and start line into a LayoutRequest."""
    return LayoutRequest(
        area_width=config.area.width,
        area_height=config.area.height,
        tile_width=config.tile.width,
        tile_height=config.tile.height,
        gap=config.gap,
        start_x=config.start_line.x,
        start_y=config.start_line.y,
    )


def _mask_geometry(
    mask: RectangleMaskConfig | CircleMaskConfig | PolygonMaskConfig,
) -> MaskGeometry:
    match mask:
        case RectangleMaskConfig():
            return RectangleGeometry(
                units.to_micro(mask.x),
                units.to_micro(mask.y),
                units.to_micro(mask.width),
                units.to_micro(mask.height),
            )
        case CircleMaskConfig():
            return CircleGeometry(
                units.to_micro(mask.cx),
                units.to_micro(mask.cy),
                units.to_micro(mask.radius),
            )
        case PolygonMaskConfig():
            return PolygonGeometry(
                tuple(Point(units.to_micro(x), units.to_micro(y)) for x, y in mask.points)
            )


def mask_config_to_spec(
    mask: RectangleMaskConfig | CircleMaskConfig | PolygonMaskConfig,
) -> MaskSpec:
    """Convert one configured mask (mm) to a MaskSpec (micro-units)."""
    return MaskSpec(id=mask.id, geometry=_mask_geometry(mask), label=mask.label, active=mask.active)


def config_to_masks(config: TileSetupConfiguration) -> list[MaskSpec]:
    """Convert configured masks to MaskSpecs, in file order."""
    return [mask_config_to_spec(mask) for mask in config.masks]


def config_to_masking_config(config: TileSetupConfiguration) -> MaskingConfig:
    settings = config.masking
    return MaskingConfig(
        minimal_intersection_threshold=settings.minimal_intersection_threshold,
        full_coverage_threshold=settings.full_coverage_threshold,
        enable_partial_cutting=settings.enable_partial_cutting,
    )


def config_to_history_config(config: TileSetupConfiguration) -> HistoryConfig:
    settings = config.history
    return HistoryConfig(
        max_undo_stack_size=settings.max_undo_stack_size,
        enable_merging=settings.enable_merging,
        merge_window=timedelta(milliseconds=settings.merge_window_ms),
    )

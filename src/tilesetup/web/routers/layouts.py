"""Tile layout generation endpoints."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from tilesetup.application.commands import GenerateLayoutCommand
from tilesetup.application.config import (
    config_to_masking_config,
    config_to_masks,
    config_to_request,
    load_config_from_dict,
    mask_config_to_spec,
)
from tilesetup.application.dtos import LayoutOutput, LayoutRequest
from tilesetup.infrastructure.exporters import ExporterRegistry, layout_to_dict
from tilesetup.web.dependencies import GenerateCommandDep, ServiceFactoryDep
from tilesetup.web.exceptions import LayoutGenerationError, UnsupportedFormatError
from tilesetup.web.schemas.requests import GenerateFromConfigRequest, LayoutRequestSchema
from tilesetup.web.schemas.responses import ErrorResponseSchema, LayoutResponseSchema

router = APIRouter(prefix="/layouts", tags=["layouts"])


def _generate(command: GenerateLayoutCommand, request: LayoutRequestSchema) -> LayoutOutput:
    layout_request = LayoutRequest(
        area_width=request.area.width,
        area_height=request.area.height,
        tile_width=request.tile.width,
        tile_height=request.tile.height,
        gap=request.gap,
        start_x=request.start_line.x,
        start_y=request.start_line.y,
    )
    masks = [mask_config_to_spec(mask) for mask in request.masks]
    output = command.execute(layout_request, request.pattern, masks)
    if not output.is_valid:
        raise LayoutGenerationError(output.errors)
    return output


@router.post(
    "", response_model=LayoutResponseSchema, responses={422: {"model": ErrorResponseSchema}}
)
async def generate_layout(
    request: LayoutRequestSchema,
    command: GenerateCommandDep,
) -> LayoutResponseSchema:
    """Generate a tile layout from area and tile dimensions.

    Raises:
        LayoutGenerationError: If layout validation fails (422).
    """
    output = _generate(command, request)
    return LayoutResponseSchema.model_validate(layout_to_dict(output, request.include_tiles))


@router.post(
    "/from-config",
    response_model=LayoutResponseSchema,
    responses={422: {"model": ErrorResponseSchema}},
)
async def generate_from_config(
    request: GenerateFromConfigRequest,
    factory: ServiceFactoryDep,
) -> LayoutResponseSchema:
    """Generate a tile layout from a full project configuration.

    Raises:
        ConfigError: If the configuration fails schema validation (422).
        LayoutGenerationError: If layout validation fails (422).
    """
    config = load_config_from_dict(request.config)
    command = GenerateLayoutCommand(
        grid_engine=factory.get_grid_engine(),
        masking_config=config_to_masking_config(config),
    )
    output = command.execute(config_to_request(config), config.pattern, config_to_masks(config))
    if not output.is_valid:
        raise LayoutGenerationError(output.errors)
    return LayoutResponseSchema.model_validate(layout_to_dict(output, request.include_tiles))


@router.post(
    "/export/{format_name}",
    response_class=PlainTextResponse,
    responses={400: {"model": ErrorResponseSchema}, 422: {"model": ErrorResponseSchema}},
)
async def export_layout(
    format_name: str,
    request: LayoutRequestSchema,
    command: GenerateCommandDep,
    factory: ServiceFactoryDep,
) -> PlainTextResponse:
    """Generate a layout and return it in an export format (json or csv)."""
    if not ExporterRegistry.is_registered(format_name):
        raise UnsupportedFormatError(format_name, ExporterRegistry.available_formats())

    output = _generate(command, request)
    exporter = factory.get_exporter(format_name)
    media_type = "application/json" if format_name == "json" else f"text/{exporter.file_extension}"
    return PlainTextResponse(exporter.export_string(output), media_type=media_type)

"""Pattern catalogue endpoints."""

from fastapi import APIRouter

from tilesetup.domain import units
from tilesetup.domain.services import (
    PatternDefinition,
    compatible_patterns,
    generate_pattern_preview,
    get_all_patterns,
    get_pattern,
)
from tilesetup.domain.services.pattern_engine import PREVIEW_GAP, PREVIEW_TILE
from tilesetup.web.schemas.responses import (
    ErrorResponseSchema,
    PatternListSchema,
    PatternOffsetSchema,
    PatternPreviewSchema,
    PatternSchema,
)

router = APIRouter(prefix="/patterns", tags=["patterns"])


def _pattern_to_schema(pattern: PatternDefinition) -> PatternSchema:
    return PatternSchema(
        id=pattern.id.value,
        name_ko=pattern.name_ko,
        name_en=pattern.name_en,
        description=pattern.description,
        offset_type=pattern.offset_type.value,
        base_rotation=pattern.base_rotation,
        alternating=pattern.alternating,
        requires_rectangular=pattern.requires_rectangular,
    )


@router.get("", response_model=PatternListSchema)
async def list_patterns(square: bool = False) -> PatternListSchema:
    """List registered patterns, optionally only those suited to square tiles."""
    patterns = compatible_patterns(is_square=True) if square else get_all_patterns()
    return PatternListSchema(
        patterns=[_pattern_to_schema(p) for p in patterns],
        count=len(patterns),
    )


@router.get(
    "/{pattern_id}", response_model=PatternSchema, responses={404: {"model": ErrorResponseSchema}}
)
async def get_pattern_details(pattern_id: str) -> PatternSchema:
    """Get one pattern's metadata.

    Raises:
        UnknownPatternError: If the pattern is not registered (404).
    """
    return _pattern_to_schema(get_pattern(pattern_id))


@router.get(
    "/{pattern_id}/preview",
    response_model=PatternPreviewSchema,
    responses={404: {"model": ErrorResponseSchema}},
)
async def preview_pattern(pattern_id: str) -> PatternPreviewSchema:
    """Offsets for a 4x4 preview block of the pattern.

    Raises:
        UnknownPatternError: If the pattern is not registered (404).
    """
    pattern = get_pattern(pattern_id)
    offsets = generate_pattern_preview(pattern.id)
    return PatternPreviewSchema(
        pattern_id=pattern.id.value,
        tile_size=units.to_display(PREVIEW_TILE),
        gap=units.to_display(PREVIEW_GAP),
        offsets=[
            [
                PatternOffsetSchema(
                    dx=units.to_display(offset.dx, 3),
                    dy=units.to_display(offset.dy, 3),
                    rotation=int(offset.rotation),
                    swap_dimensions=offset.swap_dimensions,
                )
                for offset in row
            ]
            for row in offsets
        ],
    )

"""Application commands (use cases) for tile layout generation."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from tilesetup.domain.exceptions import LayoutValidationError, MaskError
from tilesetup.domain.services import (
    GridEngine,
    MaskingConfig,
    MaskingEngine,
    PatternId,
    apply_pattern,
    pattern_registry,
    summarize_grid,
    validate_pattern_application,
)

from .dtos import LayoutOutput, LayoutRequest, MaskSpec

if TYPE_CHECKING:
    from tilesetup.contracts.protocols import GridEngineProtocol

logger = logging.getLogger(__name__)


class GenerateLayoutCommand:
    """Command to generate a complete tile layout.

    Generates the grid, lays it in the requested pattern, draws the given
    masks over it and summarizes what remains visible.
    """

    def __init__(
        self,
        grid_engine: GridEngineProtocol | None = None,
        masking_config: MaskingConfig | None = None,
    ) -> None:
        self.grid_engine = grid_engine or GridEngine()
        self.masking_config = masking_config

    def execute(
        self,
        request: LayoutRequest,
        pattern_id: PatternId | str = PatternId.LINEAR_SQUARE,
        masks: Sequence[MaskSpec] = (),
    ) -> LayoutOutput:
        """Execute the layout generation command.

        Args:
            request: Area, tile and gap sizes in millimetres.
            pattern_id: Pattern to lay the tiles in.
            masks: Masks to draw over the patterned grid, in order.

        Returns:
            LayoutOutput with the grid and statistics, or with ``errors`` set
            (``"<field>: <message>"`` entries) when the input is rejected.
        """
        errors = request.validate()
        if pattern_id not in pattern_registry:
            errors.append(f"pattern: Unknown pattern: {pattern_id}")
        if errors:
            return LayoutOutput.failed(errors)

        pattern = PatternId(pattern_id)
        try:
            result = self.grid_engine.generate(request.to_layout_input())
        except LayoutValidationError as e:
            return LayoutOutput.failed([str(error) for error in e.errors], pattern)

        grid = apply_pattern(result.grid, pattern)
        validation = validate_pattern_application(pattern, result.tile_size)

        masking = MaskingEngine(grid, self.masking_config)
        for spec in masks:
            try:
                masking.add_mask(spec.id, spec.geometry, spec.label, active=spec.active)
            except MaskError as e:
                errors.append(f"masks: {e}")
        if errors:
            return LayoutOutput.failed(errors, pattern)

        statistics = summarize_grid(grid)
        logger.info(
            f"Generated {result.column_count}x{result.row_count} layout "
            f"({statistics.total_count} visible tiles, pattern {pattern.value})"
        )
        return LayoutOutput(
            result=result,
            grid=grid,
            statistics=statistics,
            pattern_id=pattern,
            masks=masking.export_masks(),
            warnings=list(validation.warnings),
        )

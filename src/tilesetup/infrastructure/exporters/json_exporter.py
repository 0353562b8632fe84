"""JSON export of a generated layout.

Lengths are written in millimetres; the raw micro-unit values are not part
of the file format.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from tilesetup.domain import units
from tilesetup.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from tilesetup.application.dtos import LayoutOutput
    from tilesetup.domain.entities import Grid, MaskShape, TileCell
    from tilesetup.domain.value_objects import PieceDimension


def _mm(micro: int) -> float:
    return units.to_display(micro, 3)


def _piece(piece: PieceDimension | None) -> dict[str, Any] | None:
    if piece is None:
        return None
    return {
        "width": _mm(piece.width),
        "height": _mm(piece.height),
        "area_ratio": piece.area_ratio,
    }


def _tile(grid: Grid, cell: TileCell) -> dict[str, Any]:
    size = grid.cell_size(cell)
    return {
        "id": cell.id,
        "row": cell.row,
        "col": cell.col,
        "x": _mm(cell.position.x),
        "y": _mm(cell.position.y),
        "width": _mm(size.width),
        "height": _mm(size.height),
        "kind": cell.kind.value,
        "rotation": int(cell.rotation),
        "visible": cell.visible,
        "locked": cell.locked,
        "masked_by": list(cell.masked_by),
    }


def _mask(mask: MaskShape) -> dict[str, Any]:
    bounds = mask.geometry.bounds
    return {
        "id": mask.id,
        "type": mask.shape_type.value,
        "label": mask.label,
        "active": mask.active,
        "bounds": {
            "x": _mm(bounds.x),
            "y": _mm(bounds.y),
            "width": _mm(bounds.width),
            "height": _mm(bounds.height),
        },
        "covered_tiles": sorted(mask.covered_tiles),
    }


def layout_to_dict(output: LayoutOutput, include_tiles: bool = True) -> dict[str, Any]:
    """Plain-data view of a layout output, shared by the JSON exporter and the API."""
    if not output.is_valid:
        return {"errors": list(output.errors)}

    result = output.result
    stats = output.statistics
    grid = output.grid
    assert result is not None and stats is not None and grid is not None

    data: dict[str, Any] = {
        "pattern": output.pattern_id.value,
        "area": {"width": _mm(result.input.area_width), "height": _mm(result.input.area_height)},
        "tile": {"width": _mm(result.tile_size.width), "height": _mm(result.tile_size.height)},
        "gap": _mm(result.gap),
        "grid": {"columns": result.column_count, "rows": result.row_count},
        "remainders": {
            "left": _mm(result.left_remainder),
            "right": _mm(result.right_remainder),
            "top": _mm(result.top_remainder),
            "bottom": _mm(result.bottom_remainder),
        },
        "statistics": {
            "total_count": stats.total_count,
            "full_count": stats.full_count,
            "large_count": stats.large_count,
            "small_count": stats.small_count,
            "large_piece": _piece(stats.large_piece),
            "small_piece": _piece(stats.small_piece),
            "covered_area_m2": round(stats.covered_area_m2, 6),
            "total_area_m2": round(result.total_area_m2, 6),
        },
        "masks": [_mask(mask) for mask in output.masks],
        "warnings": list(output.warnings),
    }
    if include_tiles:
        data["tiles"] = [_tile(grid, cell) for cell in grid]
    return data


@ExporterRegistry.register("json")
class JsonLayoutExporter:
    """Exports the layout, statistics, tiles and masks as JSON."""

    format_name: ClassVar[str] = "json"
    file_extension: ClassVar[str] = "json"

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    def export(self, output: LayoutOutput, path: Path) -> None:
        path.write_text(self.export_string(output), encoding="utf-8")

    def export_string(self, output: LayoutOutput) -> str:
        return json.dumps(layout_to_dict(output), indent=self.indent, ensure_ascii=False)

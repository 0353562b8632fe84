"""CSV piece list: one row per tile cell, lengths in millimetres."""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from tilesetup.domain import units
from tilesetup.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from tilesetup.application.dtos import LayoutOutput

CSV_COLUMNS = [
    "id",
    "row",
    "col",
    "kind",
    "x_mm",
    "y_mm",
    "width_mm",
    "height_mm",
    "rotation",
    "visible",
    "masked_by",
]


@ExporterRegistry.register("csv")
class CsvPieceListExporter:
    """Exports every cell of the grid as a CSV row.

    Hidden cells are included with ``visible`` set to false unless
    ``visible_only`` is set.
    """

    format_name: ClassVar[str] = "csv"
    file_extension: ClassVar[str] = "csv"

    def __init__(self, visible_only: bool = False) -> None:
        self.visible_only = visible_only

    def export(self, output: LayoutOutput, path: Path) -> None:
        path.write_text(self.export_string(output), encoding="utf-8")

    def export_string(self, output: LayoutOutput) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_COLUMNS)

        grid = output.grid
        if grid is None:
            return buffer.getvalue()

        for cell in grid:
            if self.visible_only and not cell.visible:
                continue
            size = grid.cell_size(cell)
            writer.writerow(
                [
                    cell.id,
                    cell.row,
                    cell.col,
                    cell.kind.value,
                    units.to_display(cell.position.x, 3),
                    units.to_display(cell.position.y, 3),
                    units.to_display(size.width, 3),
                    units.to_display(size.height, 3),
                    int(cell.rotation),
                    "true" if cell.visible else "false",
                    ";".join(cell.masked_by),
                ]
            )
        return buffer.getvalue()

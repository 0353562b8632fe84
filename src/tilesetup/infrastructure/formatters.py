"""Text formatters for tile layouts and the pattern catalogue."""

from __future__ import annotations

from tilesetup.application.dtos import LayoutOutput
from tilesetup.domain import units
from tilesetup.domain.entities import Grid
from tilesetup.domain.services import PatternDefinition
from tilesetup.domain.value_objects import PieceDimension, TileKind

# One character per cell in grid diagrams
KIND_SYMBOLS: dict[TileKind, str] = {
    TileKind.FULL: "#",
    TileKind.LARGE: "L",
    TileKind.SMALL: "s",
    TileKind.SPLIT: "/",
}
HIDDEN_SYMBOL = "."


def _mm(micro: int) -> str:
    return units.format_length(micro, "mm", 1)


class LayoutSummaryFormatter:
    """Formats tile counts, piece sizes and edge remainders as a report."""

    def format(self, output: LayoutOutput) -> str:
        """Format a generated layout as a summary report."""
        if not output.is_valid:
            lines = ["LAYOUT ERRORS", "=" * 60]
            lines.extend(f"  - {error}" for error in output.errors)
            return "\n".join(lines)

        result = output.result
        stats = output.statistics
        assert result is not None and stats is not None

        area = result.input.area
        tile = result.tile_size
        lines = [
            "TILE LAYOUT SUMMARY",
            "=" * 60,
            f"Area:     {_mm(area.width)} x {_mm(area.height)} ({units.format_area(area.area)})",
            f"Tile:     {_mm(tile.width)} x {_mm(tile.height)}",
            f"Gap:      {_mm(result.gap)}",
            f"Pattern:  {output.pattern_id.value}",
            f"Grid:     {result.column_count} columns x {result.row_count} rows",
            "",
            f"{'Piece':<14} {'Count':>6}   {'Size':<22} {'Ratio':>6}",
            "-" * 60,
            f"{'Full tiles':<14} {stats.full_count:>6}   {_mm(tile.width) + ' x ' + _mm(tile.height):<22} {'100%':>6}",
            self._piece_row("Large pieces", stats.large_count, stats.large_piece),
            self._piece_row("Small pieces", stats.small_count, stats.small_piece),
            "-" * 60,
            f"{'TOTAL':<14} {stats.total_count:>6}",
            "",
            "Edge remainders:",
            f"  left {_mm(result.left_remainder)}, right {_mm(result.right_remainder)}, "
            f"top {_mm(result.top_remainder)}, bottom {_mm(result.bottom_remainder)}",
            f"Covered area: {units.format_area(stats.covered_area)}",
        ]

        if output.masks:
            lines.append(f"Masks: {len(output.masks)} ({self._hidden_count(output)} tiles hidden)")

        if output.warnings:
            lines.append("")
            lines.append("Warnings:")
            lines.extend(f"  - {warning}" for warning in output.warnings)

        return "\n".join(lines)

    def _piece_row(self, label: str, count: int, piece: PieceDimension | None) -> str:
        if piece is None:
            return f"{label:<14} {count:>6}   {'-':<22} {'-':>6}"
        size = f"{_mm(piece.width)} x {_mm(piece.height)}"
        return f"{label:<14} {count:>6}   {size:<22} {piece.area_ratio:>5}%"

    def _hidden_count(self, output: LayoutOutput) -> int:
        assert output.grid is not None
        return sum(1 for cell in output.grid if cell.masked_by)


class GridDiagramFormatter:
    """Draws a grid as a character map, one character per cell.

    ``#`` full tile, ``L`` large piece, ``s`` small piece, ``/`` split piece,
    ``.`` hidden cell.
    """

    def format(self, grid: Grid, max_columns: int = 120) -> str:
        """Generate the character map.

        Grids wider than ``max_columns`` are truncated with a trailing ``>``.
        """
        if len(grid) == 0:
            return "No tiles to display."

        lines = [
            "GRID DIAGRAM",
            "=" * min(max(grid.column_count, 12), max_columns),
        ]
        for row in grid.rows:
            symbols = [
                KIND_SYMBOLS[cell.kind] if cell.visible else HIDDEN_SYMBOL
                for cell in row[:max_columns]
            ]
            suffix = ">" if len(row) > max_columns else ""
            lines.append("".join(symbols) + suffix)

        lines.append("")
        lines.append("# full  L large  s small  / split  . hidden")
        return "\n".join(lines)


class PatternListFormatter:
    """Formats the pattern catalogue as a table."""

    def format(self, patterns: list[PatternDefinition]) -> str:
        if not patterns:
            return "No patterns available."

        lines = [
            "PATTERNS",
            "=" * 80,
            f"{'Id':<28} {'Name':<28} {'Offset':<8} {'Tiles'}",
            "-" * 80,
        ]
        for pattern in patterns:
            shape = "rect" if pattern.requires_rectangular else "any"
            lines.append(
                f"{pattern.id.value:<28} {pattern.name_en:<28} "
                f"{pattern.offset_type.value:<8} {shape}"
            )
        return "\n".join(lines)

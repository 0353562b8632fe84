"""Unit tests for the exporter framework and layout exporters.

These tests verify:
- ExporterRegistry lookup and error reporting
- layout_to_dict structure for valid and invalid outputs
- JSON export writes millimetre values and mask coverage
- CSV export writes one row per cell, optionally visible cells only
- ExportManager writes every requested format into one directory
"""

import csv
import io
import json
from pathlib import Path

import pytest

from tilesetup.application.commands import GenerateLayoutCommand
from tilesetup.application.dtos import LayoutOutput, LayoutRequest, MaskSpec
from tilesetup.domain import units
from tilesetup.domain.value_objects import RectangleGeometry
from tilesetup.infrastructure.exporters import (
    CSV_COLUMNS,
    CsvPieceListExporter,
    ExporterRegistry,
    ExportManager,
    JsonLayoutExporter,
    layout_to_dict,
)

MM = units.MICRO_PER_MM


@pytest.fixture
def output(generate_command: GenerateLayoutCommand) -> LayoutOutput:
    """1000 mm square area, 300 mm tiles, top-left tile masked."""
    return generate_command.execute(
        LayoutRequest(area_width=1000, area_height=1000, tile_width=300, tile_height=300),
        masks=[MaskSpec("corner", RectangleGeometry(0, 0, 300 * MM, 300 * MM), label="Vanity")],
    )


class TestExporterRegistry:
    """Tests for exporter registration and lookup."""

    def test_builtin_formats(self) -> None:
        assert ExporterRegistry.available_formats() == ["csv", "json"]
        assert ExporterRegistry.get("json") is JsonLayoutExporter
        assert ExporterRegistry.get("csv") is CsvPieceListExporter

    def test_unknown_format(self) -> None:
        with pytest.raises(KeyError) as exc_info:
            ExporterRegistry.get("pdf")
        assert "Available formats: csv, json" in str(exc_info.value)

    def test_is_registered(self) -> None:
        assert ExporterRegistry.is_registered("csv")
        assert not ExporterRegistry.is_registered("dxf")


class TestLayoutToDict:
    """Tests for the plain-data layout view."""

    def test_top_level_keys(self, output: LayoutOutput) -> None:
        data = layout_to_dict(output)

        assert list(data) == [
            "pattern",
            "area",
            "tile",
            "gap",
            "grid",
            "remainders",
            "statistics",
            "masks",
            "warnings",
            "tiles",
        ]

    def test_values_are_millimetres(self, output: LayoutOutput) -> None:
        data = layout_to_dict(output)

        assert data["area"] == {"width": 1000.0, "height": 1000.0}
        assert data["grid"] == {"columns": 4, "rows": 4}
        assert data["remainders"]["right"] == 100.0
        assert data["statistics"]["total_count"] == 15
        assert data["statistics"]["covered_area_m2"] == pytest.approx(0.91)
        assert data["statistics"]["large_piece"] is None

    def test_tiles(self, output: LayoutOutput) -> None:
        tiles = {tile["id"]: tile for tile in layout_to_dict(output)["tiles"]}

        assert len(tiles) == 16
        assert tiles["tile_0_0"]["visible"] is False
        assert tiles["tile_0_0"]["masked_by"] == ["corner"]
        assert tiles["tile_0_3"]["x"] == 900.0
        assert tiles["tile_0_3"]["width"] == 100.0
        assert tiles["tile_0_3"]["kind"] == "small"

    def test_masks(self, output: LayoutOutput) -> None:
        mask = layout_to_dict(output)["masks"][0]

        assert mask["id"] == "corner"
        assert mask["type"] == "rectangle"
        assert mask["label"] == "Vanity"
        assert mask["bounds"] == {"x": 0.0, "y": 0.0, "width": 300.0, "height": 300.0}
        assert mask["covered_tiles"] == ["tile_0_0"]

    def test_without_tiles(self, output: LayoutOutput) -> None:
        assert "tiles" not in layout_to_dict(output, include_tiles=False)

    def test_invalid_output(self) -> None:
        failed = LayoutOutput.failed(["gap: Gap must be smaller than the tile"])
        assert layout_to_dict(failed) == {"errors": ["gap: Gap must be smaller than the tile"]}


# =============================================================================
# Exporters
# =============================================================================


class TestJsonLayoutExporter:
    """Tests for JsonLayoutExporter."""

    def test_export_string_is_json(self, output: LayoutOutput) -> None:
        data = json.loads(JsonLayoutExporter().export_string(output))

        assert data["pattern"] == "LINEAR_SQUARE"
        assert len(data["tiles"]) == 16

    def test_indent(self, output: LayoutOutput) -> None:
        text = JsonLayoutExporter(indent=4).export_string(output)
        assert text.splitlines()[1].startswith('    "pattern"')

    def test_export_writes_file(self, output: LayoutOutput, tmp_path: Path) -> None:
        path = tmp_path / "layout.json"

        JsonLayoutExporter().export(output, path)

        assert json.loads(path.read_text(encoding="utf-8"))["gap"] == 0.0


class TestCsvPieceListExporter:
    """Tests for CsvPieceListExporter."""

    def _rows(self, text: str) -> list[dict[str, str]]:
        return list(csv.DictReader(io.StringIO(text)))

    def test_header(self, output: LayoutOutput) -> None:
        header = CsvPieceListExporter().export_string(output).splitlines()[0]
        assert header.split(",") == CSV_COLUMNS

    def test_one_row_per_cell(self, output: LayoutOutput) -> None:
        rows = self._rows(CsvPieceListExporter().export_string(output))

        assert len(rows) == 16
        first = rows[0]
        assert first["id"] == "tile_0_0"
        assert first["visible"] == "false"
        assert first["masked_by"] == "corner"
        assert rows[1]["visible"] == "true"
        assert rows[1]["x_mm"] == "300.0"

    def test_visible_only(self, output: LayoutOutput) -> None:
        rows = self._rows(CsvPieceListExporter(visible_only=True).export_string(output))

        assert len(rows) == 15
        assert all(row["visible"] == "true" for row in rows)

    def test_invalid_output_has_header_only(self) -> None:
        text = CsvPieceListExporter().export_string(LayoutOutput.failed(["bad"]))
        assert text.splitlines() == [",".join(CSV_COLUMNS)]


class TestExportManager:
    """Tests for writing several formats at once."""

    def test_export_all(self, output: LayoutOutput, tmp_path: Path) -> None:
        out_dir = tmp_path / "exports"

        paths = ExportManager(out_dir).export_all(["json", "csv"], output, project_name="hall")

        assert paths == {"json": out_dir / "hall.json", "csv": out_dir / "hall.csv"}
        assert all(path.exists() for path in paths.values())

    def test_unknown_format(self, output: LayoutOutput, tmp_path: Path) -> None:
        with pytest.raises(KeyError):
            ExportManager(tmp_path).export_all(["svg"], output)

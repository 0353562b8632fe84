"""Exporter framework for tile layout outputs.

Registered exporters:
- csv: Piece list with one row per tile cell
- json: Layout, statistics, tiles and masks

Usage:
    from tilesetup.infrastructure.exporters import ExporterRegistry

    exporter = ExporterRegistry.get("csv")(visible_only=True)
    print(exporter.export_string(output))
"""

from .base import ExporterRegistry, ExportManager
from .csv_exporter import CSV_COLUMNS, CsvPieceListExporter
from .json_exporter import JsonLayoutExporter, layout_to_dict

__all__ = [
    "CSV_COLUMNS",
    "CsvPieceListExporter",
    "ExportManager",
    "ExporterRegistry",
    "JsonLayoutExporter",
    "layout_to_dict",
]

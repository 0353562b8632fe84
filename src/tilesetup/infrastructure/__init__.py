"""Infrastructure layer - formatters and file exporters."""

from .exporters import (
    CsvPieceListExporter,
    ExporterRegistry,
    ExportManager,
    JsonLayoutExporter,
    layout_to_dict,
)
from .formatters import GridDiagramFormatter, LayoutSummaryFormatter, PatternListFormatter

__all__ = [
    # Exporters
    "CsvPieceListExporter",
    "ExportManager",
    "ExporterRegistry",
    "JsonLayoutExporter",
    "layout_to_dict",
    # Formatters
    "GridDiagramFormatter",
    "LayoutSummaryFormatter",
    "PatternListFormatter",
]

"""Contracts module - protocols shared across layers.

By depending on protocols rather than concrete implementations, the
application, infrastructure and outer layers stay loosely coupled.

Example:
    ```python
    from tilesetup.contracts import GridEngineProtocol

    def count_tiles(engine: GridEngineProtocol, layout_input: LayoutInput) -> int:
        return engine.generate(layout_input).total_tile_count
    ```
"""

from .exporters import LayoutExporterProtocol as LayoutExporterProtocol
from .formatters import (
    GridDiagramFormatterProtocol as GridDiagramFormatterProtocol,
    LayoutSummaryFormatterProtocol as LayoutSummaryFormatterProtocol,
    PatternListFormatterProtocol as PatternListFormatterProtocol,
)
from .protocols import (
    GridEngineProtocol as GridEngineProtocol,
    HistoryProtocol as HistoryProtocol,
    MaskRepository as MaskRepository,
    PatternApplierProtocol as PatternApplierProtocol,
    PatternTarget as PatternTarget,
    StatisticsProtocol as StatisticsProtocol,
)

__all__ = [
    "GridDiagramFormatterProtocol",
    "GridEngineProtocol",
    "HistoryProtocol",
    "LayoutExporterProtocol",
    "LayoutSummaryFormatterProtocol",
    "MaskRepository",
    "PatternApplierProtocol",
    "PatternTarget",
    "PatternListFormatterProtocol",
    "StatisticsProtocol",
]

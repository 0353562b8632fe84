"""Formatter protocols for human-readable output."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from tilesetup.application.dtos import LayoutOutput
    from tilesetup.domain.entities import Grid
    from tilesetup.domain.services.pattern_engine import PatternDefinition


class LayoutSummaryFormatterProtocol(Protocol):
    """Formats counts, piece sizes and remainders of a layout as a table."""

    def format(self, output: LayoutOutput) -> str: ...


class GridDiagramFormatterProtocol(Protocol):
    """Draws a grid as a character map, one character per cell."""

    def format(self, grid: Grid) -> str: ...


class PatternListFormatterProtocol(Protocol):
    """Formats the pattern catalogue."""

    def format(self, patterns: list[PatternDefinition]) -> str: ...

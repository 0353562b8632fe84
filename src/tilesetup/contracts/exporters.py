"""Exporter protocols for file output generation."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable

if TYPE_CHECKING:
    from tilesetup.application.dtos import LayoutOutput


@runtime_checkable
class LayoutExporterProtocol(Protocol):
    """Base protocol for layout exporters.

    Attributes:
        format_name: Name used on the command line (e.g. "json", "csv").
        file_extension: File extension without leading dot.

    Example:
        ```python
        class CsvExporter:
            format_name: ClassVar[str] = "csv"
            file_extension: ClassVar[str] = "csv"

            def export(self, output: LayoutOutput, path: Path) -> None:
                path.write_text(self.export_string(output))

            def export_string(self, output: LayoutOutput) -> str:
                ...
        ```
    """

    format_name: ClassVar[str]
    file_extension: ClassVar[str]

    def export(self, output: LayoutOutput, path: Path) -> None:
        """Write the layout to ``path``."""
        ...

    def export_string(self, output: LayoutOutput) -> str:
        """Render the layout as a string."""
        ...

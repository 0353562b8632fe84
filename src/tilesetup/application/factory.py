"""Service factory for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, cast

if TYPE_CHECKING:
    from tilesetup.application.commands import GenerateLayoutCommand
    from tilesetup.application.services import EditingSession
    from tilesetup.contracts.exporters import LayoutExporterProtocol
    from tilesetup.contracts.formatters import (
        GridDiagramFormatterProtocol,
        LayoutSummaryFormatterProtocol,
        PatternListFormatterProtocol,
    )
    from tilesetup.contracts.protocols import GridEngineProtocol
    from tilesetup.domain.services import (
        HistoryConfig,
        LayoutResult,
        MaskingConfig,
        PatternId,
    )


@dataclass
class ServiceFactory:
    """Factory for creating service instances.

    Centralizes service instantiation so the CLI, the web app and tests
    share one place to swap implementations. The grid engine is stateless
    and cached; commands, sessions and formatters are created per call.

    Example:
        ```python
        factory = ServiceFactory()
        output = factory.create_generate_command().execute(request)
        session = factory.create_editing_session(output.result, output.pattern_id)
        ```
    """

    masking_config: "MaskingConfig | None" = None
    history_config: "HistoryConfig | None" = None

    # Cached instances (use field with init=False for dataclass)
    _grid_engine: "GridEngineProtocol | None" = field(
        default=None, init=False, repr=False
    )

    def get_grid_engine(self) -> "GridEngineProtocol":
        """Get or create grid engine instance."""
        if self._grid_engine is None:
            from tilesetup.domain.services import GridEngine

            self._grid_engine = cast("GridEngineProtocol", GridEngine())
        assert self._grid_engine is not None
        return self._grid_engine

    def create_generate_command(self) -> "GenerateLayoutCommand":
        """Create a GenerateLayoutCommand wired to this factory's services."""
        from tilesetup.application.commands import GenerateLayoutCommand

        return GenerateLayoutCommand(
            grid_engine=self.get_grid_engine(),
            masking_config=self.masking_config,
        )

    def create_editing_session(
        self, result: "LayoutResult", pattern_id: "PatternId | None" = None
    ) -> "EditingSession":
        """Create an editing session over a generated layout."""
        from tilesetup.application.services import EditingSession
        from tilesetup.domain.services import PatternId

        return EditingSession(
            result,
            pattern_id or PatternId.LINEAR_SQUARE,
            masking_config=self.masking_config,
            history_config=self.history_config,
        )

    def get_summary_formatter(self) -> "LayoutSummaryFormatterProtocol":
        """Create layout summary formatter instance."""
        from tilesetup.infrastructure.formatters import LayoutSummaryFormatter

        return LayoutSummaryFormatter()

    def get_grid_diagram_formatter(self) -> "GridDiagramFormatterProtocol":
        """Create grid diagram formatter instance."""
        from tilesetup.infrastructure.formatters import GridDiagramFormatter

        return GridDiagramFormatter()

    def get_pattern_list_formatter(self) -> "PatternListFormatterProtocol":
        """Create pattern catalogue formatter instance."""
        from tilesetup.infrastructure.formatters import PatternListFormatter

        return PatternListFormatter()

    def get_exporter(self, format_name: str) -> "LayoutExporterProtocol":
        """Create the registered exporter for ``format_name``.

        Raises:
            KeyError: If no exporter is registered under that name.
        """
        from tilesetup.infrastructure.exporters import ExporterRegistry

        return ExporterRegistry.get(format_name)()


_default_factory: ServiceFactory | None = None


def get_factory() -> ServiceFactory:
    """Get the default service factory."""
    global _default_factory
    if _default_factory is None:
        _default_factory = ServiceFactory()
    return _default_factory


def set_factory(factory: ServiceFactory | None) -> None:
    """Set a custom factory (for testing)."""
    global _default_factory
    _default_factory = factory


def reset_factory() -> None:
    """Reset the factory to default (for testing cleanup)."""
    global _default_factory
    _default_factory = None

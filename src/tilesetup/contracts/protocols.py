"""Service protocols for dependency injection.

Application code depends on these protocols rather than on the concrete
engines, so tests can substitute simpler implementations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from tilesetup.domain.services.history.targets import MaskRepository, PatternTarget

if TYPE_CHECKING:
    from tilesetup.domain.entities import Grid
    from tilesetup.domain.services.grid_engine import GridStatistics, LayoutInput, LayoutResult
    from tilesetup.domain.services.history import Command, CommandResult
    from tilesetup.domain.services.pattern_engine import ApplyPatternOptions, PatternId


@runtime_checkable
class GridEngineProtocol(Protocol):
    """Protocol for grid generation.

    Example:
        ```python
        class GridEngine:
            def generate(self, layout_input: LayoutInput) -> LayoutResult:
                ...
        ```
    """

    def generate(self, layout_input: LayoutInput) -> LayoutResult:
        """Generate a grid for the given input.

        Raises:
            LayoutValidationError: If the input fails validation.
        """
        ...


class PatternApplierProtocol(Protocol):
    """Callable that re-lays a grid in a pattern (``apply_pattern`` satisfies it)."""

    def __call__(
        self,
        grid: Grid,
        pattern_id: PatternId | str,
        options: ApplyPatternOptions | None = None,
    ) -> Grid: ...


class StatisticsProtocol(Protocol):
    """Callable that summarizes a grid (``summarize_grid`` satisfies it)."""

    def __call__(self, grid: Grid) -> GridStatistics: ...


@runtime_checkable
class HistoryProtocol(Protocol):
    """The parts of the history engine an editing session relies on."""

    def execute(self, command: Command) -> CommandResult: ...

    def undo(self) -> CommandResult | None: ...

    def redo(self) -> CommandResult | None: ...

    def next_id(self) -> str: ...


__all__ = [
    "GridEngineProtocol",
    "HistoryProtocol",
    "MaskRepository",
    "PatternApplierProtocol",
    "PatternTarget",
    "StatisticsProtocol",
]

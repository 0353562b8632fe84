"""Exception hierarchy for the tile layout domain.

Every error raised by the domain engines derives from ``TileSetupError`` so
callers at the application boundary can catch the family in one place.
Command failures are not represented here as raised errors: commands report
them through ``CommandResult`` instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tilesetup.domain.value_objects import FieldError


class TileSetupError(Exception):
    """Base class for all tile layout errors."""

    pass


# =============================================================================
# Unit arithmetic
# =============================================================================


class UnitError(TileSetupError):
    """Raised when micro-unit arithmetic receives an unusable operand."""

    pass


class DivisionByZeroError(UnitError):
    """Raised on division or modulo by zero."""

    def __init__(self, operation: str = "div") -> None:
        self.operation = operation
        super().__init__(f"Division by zero in {operation}()")


class NegativeSqrtError(UnitError):
    """Raised when taking the square root of a negative value."""

    def __init__(self, value: float) -> None:
        self.value = value
        super().__init__(f"Cannot take square root of negative value: {value}")


class NonFiniteValueError(UnitError):
    """Raised when NaN or infinity is passed to a unit operation."""

    def __init__(self, value: float, operation: str) -> None:
        self.value = value
        self.operation = operation
        super().__init__(f"Non-finite value {value!r} passed to {operation}()")


# =============================================================================
# Layout generation
# =============================================================================


class LayoutValidationError(TileSetupError):
    """Raised when layout input fails validation.

    Attributes:
        errors: Every field-level problem found, in check order.
    """

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = list(errors)
        summary = "; ".join(f"{e.field}: {e.message}" for e in self.errors)
        super().__init__(f"Invalid layout input: {summary}")


class UnknownPatternError(TileSetupError):
    """Raised when a pattern id is not registered."""

    def __init__(self, pattern_id: str) -> None:
        self.pattern_id = pattern_id
        super().__init__(f"Unknown pattern: {pattern_id}")


# =============================================================================
# Masking
# =============================================================================


class MaskError(TileSetupError):
    """Base class for mask definition errors."""

    pass


class DuplicateMaskError(MaskError):
    """Raised when adding a mask whose id is already in use."""

    def __init__(self, mask_id: str) -> None:
        self.mask_id = mask_id
        super().__init__(f"Mask with id '{mask_id}' already exists")


class InvalidShapeError(MaskError):
    """Raised when mask geometry is degenerate."""

    pass


# =============================================================================
# History
# =============================================================================


class CommandTargetMissingError(TileSetupError):
    """A command's target tile or mask can no longer be resolved.

    Instances are carried in a failed ``CommandResult`` rather than raised.
    """

    def __init__(self, target_id: str, target_kind: str = "tile") -> None:
        self.target_id = target_id
        self.target_kind = target_kind
        super().__init__(f"{target_kind.capitalize()} not found: {target_id}")


class MaskedTileError(TileSetupError):
    """A tile covered by a mask cannot be shown by hand.

    Carried in a failed ``CommandResult`` rather than raised.
    """

    def __init__(self, tile_id: str, mask_ids: list[str]) -> None:
        self.tile_id = tile_id
        self.mask_ids = list(mask_ids)
        super().__init__(f"Tile {tile_id} is covered by mask(s): {', '.join(self.mask_ids)}")

"""Field-level validation results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ValidationCode(str, Enum):
    """Machine-readable layout validation failure codes."""

    REQUIRED = "required"
    MIN_VALUE = "min_value"
    MAX_VALUE = "max_value"
    TILE_LARGER_THAN_AREA = "tile_larger_than_area"
    GAP_LARGER_THAN_TILE = "gap_larger_than_tile"
    OVERFLOW = "overflow"


@dataclass(frozen=True)
class FieldError:
    """A validation failure tied to one input field.

    Attributes:
        field: Input field name, or "general" for cross-field checks.
        code: What kind of check failed.
        message: Human-readable explanation.
    """

    field: str
    code: ValidationCode
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"

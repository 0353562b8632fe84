"""Integer micro-unit arithmetic.

All lengths inside the layout engine are stored as integers where one
display millimetre equals 1000 micro-units. Converting in from display
values rounds half away from zero on the decimal representation, so
``to_micro(1.0005)`` is exactly 1001 rather than whatever the nearest binary
float happens to produce. Areas are micro-unit squared.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Literal

from tilesetup.domain.exceptions import (
    DivisionByZeroError,
    NegativeSqrtError,
    NonFiniteValueError,
)

Micro = int
"""Length in micro-units (1 mm == 1000)."""

MICRO_PER_MM = 1000
MICRO_PER_CM = 10_000
MICRO_PER_M = 1_000_000

LengthUnit = Literal["mm", "cm", "m"]

_UNIT_SCALE: dict[str, int] = {
    "mm": MICRO_PER_MM,
    "cm": MICRO_PER_CM,
    "m": MICRO_PER_M,
}


def _check_finite(value: float, operation: str) -> None:
    if isinstance(value, float) and not math.isfinite(value):
        raise NonFiniteValueError(value, operation)


def _round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _to_decimal(value: float) -> Decimal:
    # str() keeps the shortest repr, so 0.1 stays 0.1 instead of 0.1000000000000000055...
    return Decimal(str(value)) if isinstance(value, float) else Decimal(value)


# =============================================================================
# Conversion
# =============================================================================


def to_micro(mm: float) -> Micro:
    """Convert display millimetres to micro-units, rounding to nearest."""
    _check_finite(mm, "to_micro")
    return _round_half_up(_to_decimal(mm) * MICRO_PER_MM)


def cm_to_micro(cm: float) -> Micro:
    """Convert centimetres to micro-units."""
    _check_finite(cm, "cm_to_micro")
    return _round_half_up(_to_decimal(cm) * MICRO_PER_CM)


def m_to_micro(m: float) -> Micro:
    """Convert metres to micro-units."""
    _check_finite(m, "m_to_micro")
    return _round_half_up(_to_decimal(m) * MICRO_PER_M)


def to_display(micro: Micro, precision: int = 1) -> float:
    """Convert micro-units to display millimetres.

    Args:
        micro: Length in micro-units.
        precision: Decimal places kept in the result.

    Returns:
        The length in millimetres rounded half-up to ``precision`` places.
    """
    _check_finite(micro, "to_display")
    quantum = Decimal(1).scaleb(-precision)
    value = (Decimal(micro) / MICRO_PER_MM).quantize(quantum, rounding=ROUND_HALF_UP)
    return float(value)


def micro_to_cm(micro: Micro) -> float:
    """Convert micro-units to centimetres."""
    return micro / MICRO_PER_CM


def micro_to_m(micro: Micro) -> float:
    """Convert micro-units to metres."""
    return micro / MICRO_PER_M


def micro_area_to_m2(micro_area: int) -> float:
    """Convert an area in micro-units squared to square metres."""
    return micro_area / MICRO_PER_M / MICRO_PER_M


MIN_PIECE_SIZE: Micro = to_micro(1)
"""Smallest edge remainder that still becomes a tile cell (1 mm)."""


# =============================================================================
# Arithmetic
# =============================================================================


def add(a: Micro, b: Micro) -> Micro:
    """Add two lengths."""
    _check_finite(a, "add")
    _check_finite(b, "add")
    return int(a + b)


def sub(a: Micro, b: Micro) -> Micro:
    """Subtract ``b`` from ``a``."""
    _check_finite(a, "sub")
    _check_finite(b, "sub")
    return int(a - b)


def mul(value: Micro, scalar: float) -> Micro:
    """Scale a length by a plain number, rounding to the nearest micro-unit."""
    _check_finite(value, "mul")
    _check_finite(scalar, "mul")
    return _round_half_up(Decimal(value) * _to_decimal(scalar))


def div(value: Micro, scalar: float) -> Micro:
    """Divide a length by a plain number, rounding to the nearest micro-unit.

    Raises:
        DivisionByZeroError: If ``scalar`` is zero.
    """
    _check_finite(value, "div")
    _check_finite(scalar, "div")
    if scalar == 0:
        raise DivisionByZeroError("div")
    return _round_half_up(Decimal(value) / _to_decimal(scalar))


def floor_div(a: Micro, b: Micro) -> int:
    """Number of whole ``b`` lengths that fit in ``a``.

    Raises:
        DivisionByZeroError: If ``b`` is zero.
    """
    if b == 0:
        raise DivisionByZeroError("floor_div")
    return a // b


def mod(a: Micro, b: Micro) -> Micro:
    """Remainder of ``a`` after removing whole ``b`` lengths.

    Raises:
        DivisionByZeroError: If ``b`` is zero.
    """
    if b == 0:
        raise DivisionByZeroError("mod")
    return a % b


def sqrt(value: Micro) -> Micro:
    """Square root rounded to the nearest micro-unit.

    Raises:
        NegativeSqrtError: If ``value`` is negative.
    """
    _check_finite(value, "sqrt")
    if value < 0:
        raise NegativeSqrtError(value)
    return _round_half_up(_to_decimal(value).sqrt())


def clamp(value: Micro, lower: Micro, upper: Micro) -> Micro:
    """Restrict ``value`` to the closed range [lower, upper]."""
    return max(lower, min(upper, value))


# =============================================================================
# Formatting
# =============================================================================


def format_length(micro: Micro, unit: LengthUnit = "mm", precision: int = 1) -> str:
    """Format a length for display, e.g. ``"300.0mm"`` or ``"1.25m"``."""
    scale = _UNIT_SCALE[unit]
    value = (Decimal(micro) / scale).quantize(
        Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP
    )
    return f"{value}{unit}"


def format_area(micro_area: int, unit: LengthUnit = "m", precision: int = 2) -> str:
    """Format an area for display, e.g. ``"1.00m²"``."""
    scale = _UNIT_SCALE[unit]
    value = (Decimal(micro_area) / scale / scale).quantize(
        Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP
    )
    return f"{value}{unit}²"

"""Unit tests for integer micro-unit arithmetic.

These tests verify:
- Conversion from display units rounds half away from zero on the decimal value
- Conversion back to display units honours the requested precision
- Division, modulo and square root reject unusable operands
- Non-finite operands are rejected everywhere
- Length and area formatting
"""

import math

import pytest

from tilesetup.domain import units
from tilesetup.domain.exceptions import (
    DivisionByZeroError,
    NegativeSqrtError,
    NonFiniteValueError,
    UnitError,
)


class TestConversion:
    """Tests for converting between display units and micro-units."""

    def test_whole_millimetres(self) -> None:
        """Whole millimetres convert exactly."""
        assert units.to_micro(300) == 300_000
        assert units.to_micro(0) == 0

    def test_fractional_millimetres(self) -> None:
        """Fractions convert without binary float residue."""
        assert units.to_micro(1.5) == 1_500
        assert units.to_micro(0.1) == 100
        assert units.to_micro(1.0005) == 1_001

    def test_half_micro_rounds_away_from_zero(self) -> None:
        """Half a micro-unit rounds away from zero in both directions."""
        assert units.to_micro(0.0005) == 1
        assert units.to_micro(-0.0005) == -1

    def test_centimetres_and_metres(self) -> None:
        """cm and m scale by their own factors."""
        assert units.cm_to_micro(2.5) == 25_000
        assert units.m_to_micro(1.25) == 1_250_000

    def test_to_display_default_precision(self) -> None:
        """to_display rounds to one decimal place by default."""
        assert units.to_display(150_000) == 150.0
        assert units.to_display(1_234) == 1.2
        assert units.to_display(1_250) == 1.3

    def test_to_display_custom_precision(self) -> None:
        """Higher precision keeps sub-millimetre detail."""
        assert units.to_display(1_234, 3) == 1.234

    def test_micro_to_cm_and_m(self) -> None:
        assert units.micro_to_cm(25_000) == 2.5
        assert units.micro_to_m(1_250_000) == 1.25

    def test_area_to_square_metres(self) -> None:
        """One metre squared in micro-units is 1 m²."""
        assert units.micro_area_to_m2(units.MICRO_PER_M * units.MICRO_PER_M) == 1.0

    def test_min_piece_size_is_one_millimetre(self) -> None:
        assert units.MIN_PIECE_SIZE == 1_000

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_rejects_non_finite_input(self, value: float) -> None:
        """NaN and infinity are rejected rather than converted."""
        with pytest.raises(NonFiniteValueError) as exc_info:
            units.to_micro(value)
        assert exc_info.value.operation == "to_micro"


# =============================================================================
# Arithmetic
# =============================================================================


class TestArithmetic:
    """Tests for micro-unit arithmetic helpers."""

    def test_add_and_sub(self) -> None:
        assert units.add(1_000, 2_500) == 3_500
        assert units.sub(1_000, 2_500) == -1_500

    def test_mul_rounds_to_nearest(self) -> None:
        """Scaling rounds the product half-up."""
        assert units.mul(1_000, 1.5) == 1_500
        assert units.mul(3, 0.5) == 2

    def test_div_rounds_to_nearest(self) -> None:
        assert units.div(1_000, 3) == 333
        assert units.div(1_000, 8) == 125

    def test_div_by_zero(self) -> None:
        """Division by zero raises instead of returning a default."""
        with pytest.raises(DivisionByZeroError):
            units.div(1_000, 0)

    def test_floor_div_and_mod(self) -> None:
        """floor_div counts whole lengths; mod is what is left."""
        assert units.floor_div(1_010_000, 110_000) == 9
        assert units.mod(1_010_000, 110_000) == 20_000

    def test_floor_div_and_mod_by_zero(self) -> None:
        with pytest.raises(DivisionByZeroError):
            units.floor_div(10, 0)
        with pytest.raises(DivisionByZeroError) as exc_info:
            units.mod(10, 0)
        assert exc_info.value.operation == "mod"

    def test_sqrt(self) -> None:
        """Square roots round to the nearest micro-unit."""
        assert units.sqrt(16) == 4
        assert units.sqrt(2) == 1
        assert units.sqrt(1_000_000) == 1_000

    def test_sqrt_of_negative(self) -> None:
        with pytest.raises(NegativeSqrtError):
            units.sqrt(-1)

    def test_clamp(self) -> None:
        assert units.clamp(5, 0, 3) == 3
        assert units.clamp(-5, 0, 3) == 0
        assert units.clamp(2, 0, 3) == 2

    def test_non_finite_operand_is_a_unit_error(self) -> None:
        """Every arithmetic error belongs to the UnitError family."""
        with pytest.raises(UnitError):
            units.add(math.inf, 1)
        with pytest.raises(UnitError):
            units.mul(1_000, math.nan)


class TestFormatting:
    """Tests for display formatting."""

    def test_format_length_in_mm(self) -> None:
        assert units.format_length(300_000) == "300.0mm"

    def test_format_length_in_metres(self) -> None:
        assert units.format_length(1_250_000, "m", 2) == "1.25m"

    def test_format_area(self) -> None:
        assert units.format_area(units.MICRO_PER_M * units.MICRO_PER_M) == "1.00m²"

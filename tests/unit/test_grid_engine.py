"""Unit tests for the grid engine.

These tests verify:
- Whole-tile count per axis is the largest n with n*tile + (n-1)*gap <= area
- Start-line alignment places the remainder at the far edge, near edge or both
- Edge remainders below 1 mm produce no cells
- Cut pieces are classified LARGE at 50% of a full tile and above
- Input validation collects every problem before any grid is built
- Statistics count only visible cells
"""

import pytest

from tilesetup.domain import units
from tilesetup.domain.entities import tile_id
from tilesetup.domain.exceptions import LayoutValidationError
from tilesetup.domain.services import (
    MAX_TILES,
    GridEngine,
    LayoutInput,
    LayoutResult,
    calculate_area_ratio,
    calculate_axis,
    classify_piece,
    summarize_grid,
    validate_layout_input,
)
from tilesetup.domain.value_objects import (
    Alignment,
    CutPiece,
    Dimension,
    FullPiece,
    Point,
    TileKind,
    ValidationCode,
)

MM = units.MICRO_PER_MM


class TestCalculateAxis:
    """Tests for fitting whole tiles along one axis."""

    def test_gap_is_counted_between_tiles_only(self) -> None:
        """1000 mm with 100 mm tiles and 10 mm gaps fits 9 tiles, 20 mm left."""
        axis = calculate_axis(1000 * MM, 100 * MM, 10 * MM, Alignment.START)

        assert axis.count == 9
        assert axis.used_length == 980 * MM
        assert axis.remainder == 20 * MM

    @pytest.mark.parametrize(
        "area,tile,gap",
        [(1000, 100, 10), (600, 100, 10), (1000, 300, 0), (2437, 333, 3), (150, 10, 0)],
    )
    def test_count_is_maximal(self, area: int, tile: int, gap: int) -> None:
        """n tiles fit and n + 1 tiles do not."""
        axis = calculate_axis(area * MM, tile * MM, gap * MM, Alignment.START)
        n = axis.count
        assert n * tile + (n - 1) * gap <= area
        assert (n + 1) * tile + n * gap > area

    def test_start_puts_remainder_at_far_edge(self) -> None:
        axis = calculate_axis(1000 * MM, 300 * MM, 0, Alignment.START)
        assert (axis.near_edge, axis.far_edge) == (0, 100 * MM)

    def test_end_puts_remainder_at_near_edge(self) -> None:
        axis = calculate_axis(1000 * MM, 300 * MM, 0, Alignment.END)
        assert (axis.near_edge, axis.far_edge) == (100 * MM, 0)

    def test_center_splits_remainder(self) -> None:
        """1000 mm with 300 mm tiles centred leaves 50 mm on each side."""
        axis = calculate_axis(1000 * MM, 300 * MM, 0, Alignment.CENTER)
        assert (axis.near_edge, axis.far_edge) == (50 * MM, 50 * MM)

    def test_center_odd_remainder_goes_to_far_edge(self) -> None:
        """An odd remainder leaves the far edge one micro-unit larger."""
        axis = calculate_axis(1000 * MM + 1, 300 * MM, 0, Alignment.CENTER)
        assert axis.near_edge + axis.far_edge == axis.remainder
        assert axis.far_edge - axis.near_edge == 1


# =============================================================================
# Classification
# =============================================================================


class TestClassifyPiece:
    """Tests for the 50% large/small boundary."""

    def test_exact_nominal_size_is_full(self) -> None:
        assert classify_piece(300 * MM, 300 * MM, 300 * MM, 300 * MM) == TileKind.FULL

    def test_exactly_half_is_large(self) -> None:
        assert classify_piece(150 * MM, 300 * MM, 300 * MM, 300 * MM) == TileKind.LARGE

    def test_forty_nine_percent_is_small(self) -> None:
        assert classify_piece(147 * MM, 300 * MM, 300 * MM, 300 * MM) == TileKind.SMALL

    def test_ratio_is_truncated(self) -> None:
        """49.99% truncates to 49 and stays small."""
        assert classify_piece(149_999, 300 * MM, 300 * MM, 300 * MM) == TileKind.SMALL

    def test_area_ratio_rounds_half_up(self) -> None:
        """Reported piece ratios are rounded percentages."""
        assert calculate_area_ratio(100 * MM, 300 * MM, 300 * MM, 300 * MM) == 33
        assert calculate_area_ratio(200 * MM, 300 * MM, 300 * MM, 300 * MM) == 67
        assert calculate_area_ratio(150 * MM, 300 * MM, 300 * MM, 300 * MM) == 50

    def test_area_ratio_of_empty_tile(self) -> None:
        assert calculate_area_ratio(10, 10, 0, 0) == 0


# =============================================================================
# Validation
# =============================================================================


class TestValidateLayoutInput:
    """Tests for layout input validation."""

    def test_valid_input_has_no_errors(self) -> None:
        assert validate_layout_input(LayoutInput.from_mm(1000, 1000, 300, 300)) == []

    def test_boundary_values_are_valid(self) -> None:
        """The smallest area and tile sizes are accepted."""
        assert validate_layout_input(LayoutInput.from_mm(100, 100, 10, 10, gap=0)) == []

    def test_missing_values_are_required(self) -> None:
        """Zero sizes report 'required' once per field and nothing else."""
        errors = validate_layout_input(LayoutInput(0, 0, 0, 0))

        assert [e.field for e in errors] == [
            "area_width",
            "area_height",
            "tile_width",
            "tile_height",
        ]
        assert all(e.code == ValidationCode.REQUIRED for e in errors)

    def test_every_problem_is_collected(self) -> None:
        """A too-small area also reports the tile being larger than it."""
        errors = validate_layout_input(LayoutInput.from_mm(50, 1000, 300, 300))
        codes = {(e.field, e.code) for e in errors}

        assert ("area_width", ValidationCode.MIN_VALUE) in codes
        assert ("tile_width", ValidationCode.TILE_LARGER_THAN_AREA) in codes

    def test_gap_above_limit(self) -> None:
        errors = validate_layout_input(LayoutInput.from_mm(1000, 1000, 300, 300, gap=60))
        assert len(errors) == 1
        assert errors[0].field == "gap"
        assert errors[0].code == ValidationCode.MAX_VALUE

    def test_gap_not_smaller_than_tile(self) -> None:
        errors = validate_layout_input(LayoutInput.from_mm(1000, 1000, 15, 15, gap=20))
        assert [(e.field, e.code) for e in errors] == [
            ("gap", ValidationCode.GAP_LARGER_THAN_TILE)
        ]

    def test_tile_above_limit(self) -> None:
        errors = validate_layout_input(LayoutInput.from_mm(20_000, 1000, 10_000, 300))
        assert ("tile_width", ValidationCode.MAX_VALUE) in {(e.field, e.code) for e in errors}

    def test_too_many_tiles(self) -> None:
        """The estimated cell count is capped."""
        errors = validate_layout_input(LayoutInput.from_mm(2000, 2000, 10, 10))
        assert len(errors) == 1
        assert errors[0].field == "general"
        assert errors[0].code == ValidationCode.OVERFLOW
        assert str(MAX_TILES) in errors[0].message

    def test_tile_estimate_counts_partial_cells(self) -> None:
        """An exact 100x100 fit is allowed; one extra micro-unit adds a row."""
        exact = LayoutInput(1000 * MM, 1000 * MM, 10 * MM, 10 * MM)
        over = LayoutInput(1000 * MM, 1000 * MM + 1, 10 * MM, 10 * MM)

        assert validate_layout_input(exact) == []
        errors = validate_layout_input(over)
        assert [e.code for e in errors] == [ValidationCode.OVERFLOW]
        assert "(10100)" in errors[0].message

    def test_field_error_string(self) -> None:
        """FieldError renders as 'field: message'."""
        error = validate_layout_input(LayoutInput.from_mm(50, 1000, 30, 30))[0]
        assert str(error) == "area_width: Area width must be at least 100mm"


# =============================================================================
# Generation
# =============================================================================


class TestGridEngine:
    """Tests for GridEngine.generate."""

    def test_rejects_invalid_input(self) -> None:
        """Invalid input raises with every field error attached."""
        with pytest.raises(LayoutValidationError) as exc_info:
            GridEngine().generate(LayoutInput(0, 0, 0, 0))
        assert len(exc_info.value.errors) == 4
        assert "area_width" in str(exc_info.value)

    def test_start_alignment(self, layout_1000_by_300: LayoutResult) -> None:
        """3x3 full tiles plus a 100 mm strip on the right and bottom."""
        result = layout_1000_by_300

        assert (result.column_count, result.row_count) == (4, 4)
        assert result.full_tile_count == 9
        assert result.small_piece_count == 7
        assert result.large_piece_count == 0
        assert result.total_tile_count == 16
        assert result.right_remainder == 100 * MM
        assert result.bottom_remainder == 100 * MM
        assert result.left_remainder == 0
        assert result.top_remainder == 0

    def test_center_alignment(self) -> None:
        """Centring gives 50 mm strips on both sides of each axis."""
        result = GridEngine().generate(
            LayoutInput.from_mm(
                1000, 1000, 300, 300, align_x=Alignment.CENTER, align_y=Alignment.CENTER
            )
        )

        assert (result.left_remainder, result.right_remainder) == (50 * MM, 50 * MM)
        assert (result.top_remainder, result.bottom_remainder) == (50 * MM, 50 * MM)
        assert (result.column_count, result.row_count) == (5, 5)
        assert result.full_tile_count == 9

    def test_end_alignment_starts_with_cut_column(self) -> None:
        result = GridEngine().generate(
            LayoutInput.from_mm(1000, 1000, 300, 300, align_x=Alignment.END)
        )
        grid = result.grid

        first = grid.cell_at(0, 0)
        second = grid.cell_at(0, 1)
        assert first.kind == TileKind.SMALL
        assert grid.cell_size(first).width == 100 * MM
        assert second.position == Point(100 * MM, 0)
        assert second.kind == TileKind.FULL

    def test_sub_millimetre_remainder_has_no_cell(self) -> None:
        """A 0.5 mm remainder is recorded but produces no edge column."""
        result = GridEngine().generate(LayoutInput.from_mm(1000.5, 1000, 100, 100))

        assert result.column_count == 10
        assert result.right_remainder == 500

    def test_positions_include_gaps(self) -> None:
        """Cells are spaced by tile size plus gap."""
        result = GridEngine().generate(LayoutInput.from_mm(1000, 1000, 100, 100, gap=10))
        grid = result.grid

        assert grid.get(tile_id(0, 1)).position == Point(110 * MM, 0)
        assert grid.get(tile_id(2, 0)).position == Point(0, 220 * MM)
        assert result.column_count == 10
        assert grid.cell_size(grid.cell_at(0, 9)).width == 20 * MM

    def test_full_cells_carry_no_size(self, layout_1000_by_300: LayoutResult) -> None:
        """Full tiles resolve their size from the nominal tile."""
        grid = layout_1000_by_300.grid
        full = grid.cell_at(0, 0)
        cut = grid.cell_at(0, 3)

        assert isinstance(full.piece, FullPiece)
        assert grid.cell_size(full) == Dimension(300 * MM, 300 * MM)
        assert isinstance(cut.piece, CutPiece)
        assert cut.piece.size == Dimension(100 * MM, 300 * MM)

    def test_large_pieces(self) -> None:
        """A 200 mm strip of a 300 mm tile is a large piece."""
        result = GridEngine().generate(LayoutInput.from_mm(1100, 900, 300, 300))

        assert result.large_piece_count == 3
        assert result.large_piece_dimension is not None
        assert result.large_piece_dimension.width == 200 * MM
        assert result.large_piece_dimension.area_ratio == 67

    def test_covered_area(self, layout_1000_by_300: LayoutResult) -> None:
        """Without masks the cells cover the whole area."""
        assert layout_1000_by_300.covered_area_m2 == pytest.approx(1.0)
        assert layout_1000_by_300.total_area_m2 == pytest.approx(1.0)

    def test_ids_are_unique_and_indexed(self, layout_1000_by_300: LayoutResult) -> None:
        grid = layout_1000_by_300.grid
        assert len(grid) == 16
        assert tile_id(3, 3) in grid
        assert grid.get("tile_9_9") is None


class TestSummarizeGrid:
    """Tests for statistics over visible cells."""

    def test_hidden_cells_are_excluded(self, layout_1000_by_300: LayoutResult) -> None:
        grid = layout_1000_by_300.grid
        grid.get(tile_id(0, 0)).visible = False
        grid.get(tile_id(0, 3)).visible = False

        stats = summarize_grid(grid)

        assert stats.total_count == 14
        assert stats.full_count == 8
        assert stats.small_count == 6
        assert stats.covered_area == (1000 * 1000 - 300 * 300 - 100 * 300) * MM * MM

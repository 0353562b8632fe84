"""Unit tests for the configuration adapter and advisory validator.

These tests verify:
- Area, tile, gap and start line map onto a LayoutRequest
- Configured masks become micro-unit MaskSpecs in file order
- Masking and history settings map onto the engine configs
- validate_config reports engine errors at JSON paths
- Pattern and mask advisories are warnings, never errors
"""

from datetime import timedelta
from typing import Any

import pytest

from tilesetup.application.config import (
    TileSetupConfiguration,
    ValidationResult,
    config_to_history_config,
    config_to_masking_config,
    config_to_masks,
    config_to_request,
    mask_config_to_spec,
    validate_config,
)
from tilesetup.application.config.schema import CircleMaskConfig
from tilesetup.domain import units
from tilesetup.domain.value_objects import (
    Alignment,
    CircleGeometry,
    Point,
    PolygonGeometry,
    RectangleGeometry,
)

MM = units.MICRO_PER_MM


def _config(data: dict[str, Any], **overrides: Any) -> TileSetupConfiguration:
    return TileSetupConfiguration.model_validate({**data, **overrides})


class TestConfigToRequest:
    """Tests for converting the layout fields."""

    def test_fields_are_copied(self, valid_config_data: dict[str, Any]) -> None:
        config = _config(valid_config_data, gap=2.5, start_line={"x": "center", "y": "end"})

        request = config_to_request(config)

        assert request.area_width == 1000
        assert request.tile_height == 300
        assert request.gap == 2.5
        assert request.start_x == Alignment.CENTER
        assert request.start_y == Alignment.END

    def test_request_converts_to_micro_units(self, valid_config_data: dict[str, Any]) -> None:
        layout_input = config_to_request(_config(valid_config_data, gap=2.5)).to_layout_input()

        assert layout_input.area_width == 1000 * MM
        assert layout_input.gap == 2500


class TestConfigToMasks:
    """Tests for converting mask configurations."""

    def test_each_shape(self, valid_config_data: dict[str, Any]) -> None:
        config = _config(
            valid_config_data,
            masks=[
                {"type": "rectangle", "id": "door", "x": 0, "y": 10, "width": 300, "height": 600},
                {"type": "circle", "id": "drain", "cx": 500, "cy": 500, "radius": 50},
                {"type": "polygon", "id": "notch", "points": [[0, 0], [100, 0], [0, 100]]},
            ],
        )

        specs = config_to_masks(config)

        assert [spec.id for spec in specs] == ["door", "drain", "notch"]
        assert specs[0].geometry == RectangleGeometry(0, 10 * MM, 300 * MM, 600 * MM)
        assert specs[1].geometry == CircleGeometry(500 * MM, 500 * MM, 50 * MM)
        assert specs[2].geometry == PolygonGeometry(
            (Point(0, 0), Point(100 * MM, 0), Point(0, 100 * MM))
        )

    def test_label_and_active_flag(self) -> None:
        spec = mask_config_to_spec(
            CircleMaskConfig(id="pipe", label="Pipe", active=False, cx=1.5, cy=2, radius=3)
        )

        assert spec.label == "Pipe"
        assert not spec.active
        assert spec.geometry == CircleGeometry(1500, 2 * MM, 3 * MM)

    def test_no_masks(self, valid_config_data: dict[str, Any]) -> None:
        assert config_to_masks(_config(valid_config_data)) == []


class TestSettingsConversion:
    """Tests for masking and history settings."""

    def test_masking_settings(self, valid_config_data: dict[str, Any]) -> None:
        config = _config(
            valid_config_data,
            masking={"minimal_intersection_threshold": 0.1, "enable_partial_cutting": True},
        )

        masking = config_to_masking_config(config)

        assert masking.minimal_intersection_threshold == 0.1
        assert masking.full_coverage_threshold == 0.99
        assert masking.enable_partial_cutting

    def test_history_settings(self, valid_config_data: dict[str, Any]) -> None:
        config = _config(
            valid_config_data,
            history={"max_undo_stack_size": 10, "enable_merging": False, "merge_window_ms": 250},
        )

        history = config_to_history_config(config)

        assert history.max_undo_stack_size == 10
        assert not history.enable_merging
        assert history.merge_window == timedelta(milliseconds=250)


# =============================================================================
# Validation
# =============================================================================


class TestValidationResult:
    """Tests for result bookkeeping and exit codes."""

    def test_exit_codes(self) -> None:
        assert ValidationResult().exit_code == 0
        assert ValidationResult().add_warning("gap", "narrow").exit_code == 2
        assert ValidationResult().add_warning("gap", "narrow").add_error("gap", "bad").exit_code == 1

    def test_merge(self) -> None:
        result = ValidationResult().add_error("a", "one")
        result.merge(ValidationResult().add_warning("b", "two"))

        assert not result.is_valid
        assert result.has_warnings
        assert [e.path for e in result.errors] == ["a"]


class TestValidateConfig:
    """Tests for full configuration validation."""

    def test_valid_config(self, valid_config_data: dict[str, Any]) -> None:
        result = validate_config(_config(valid_config_data))

        assert result.is_valid
        assert not result.has_warnings
        assert result.exit_code == 0

    def test_layout_errors_use_json_paths(self, valid_config_data: dict[str, Any]) -> None:
        config = _config(valid_config_data, tile={"width": 5, "height": 300}, gap=60)

        result = validate_config(config)

        paths = {error.path for error in result.errors}
        assert "tile.width" in paths
        assert "gap" in paths
        assert result.exit_code == 1

    def test_tile_larger_than_area(self, valid_config_data: dict[str, Any]) -> None:
        config = _config(valid_config_data, area={"width": 200, "height": 1000})

        result = validate_config(config)

        assert [error.path for error in result.errors] == ["tile.width"]

    def test_errors_skip_advisories(self, valid_config_data: dict[str, Any]) -> None:
        """Advisories are not checked while the layout itself is invalid."""
        config = _config(
            valid_config_data,
            area={"width": 200, "height": 1000},
            pattern="TRADITIONAL_HERRINGBONE",
        )

        assert validate_config(config).warnings == []

    def test_rectangular_pattern_on_square_tiles_warns(
        self, valid_config_data: dict[str, Any]
    ) -> None:
        config = _config(valid_config_data, pattern="TRADITIONAL_HERRINGBONE")

        result = validate_config(config)

        assert result.is_valid
        assert result.warnings
        assert all(warning.path == "pattern" for warning in result.warnings)
        assert result.warnings[0].suggestion is not None
        assert result.exit_code == 2

    def test_suitable_pattern_has_no_warning(self, valid_config_data: dict[str, Any]) -> None:
        config = _config(
            valid_config_data,
            tile={"width": 100, "height": 200},
            pattern="TRADITIONAL_HERRINGBONE",
        )

        assert not validate_config(config).has_warnings

    @pytest.mark.parametrize(
        "mask",
        [
            {"type": "rectangle", "id": "far", "x": 2000, "y": 0, "width": 100, "height": 100},
            {"type": "rectangle", "id": "edge", "x": 1000, "y": 0, "width": 100, "height": 100},
            {"type": "circle", "id": "above", "cx": 500, "cy": -200, "radius": 100},
        ],
    )
    def test_mask_outside_area_warns(
        self, valid_config_data: dict[str, Any], mask: dict[str, Any]
    ) -> None:
        result = validate_config(_config(valid_config_data, masks=[mask]))

        assert result.is_valid
        assert [warning.path for warning in result.warnings] == ["masks[0]"]
        assert mask["id"] in result.warnings[0].message

    def test_mask_inside_area_is_fine(self, valid_config_data: dict[str, Any]) -> None:
        mask = {"type": "circle", "id": "drain", "cx": 500, "cy": 500, "radius": 50}
        assert not validate_config(_config(valid_config_data, masks=[mask])).has_warnings

"""Validation structures and layout advisory checks for project files.

Schema validation only checks the shape of a file. ``validate_config`` runs
the layout engine's own input checks against it and adds non-blocking
advisories about the pattern choice and mask placement.
"""

from dataclasses import dataclass, field
from typing import Any

from tilesetup.application.config.adapter import config_to_masks, config_to_request
from tilesetup.application.config.schema import TileSetupConfiguration
from tilesetup.domain.exceptions import UnitError
from tilesetup.domain.services import validate_layout_input, validate_pattern_application
from tilesetup.domain.value_objects import Bounds

# Map engine field names onto the JSON paths of the project file
_FIELD_PATHS: dict[str, str] = {
    "area_width": "area.width",
    "area_height": "area.height",
    "tile_width": "tile.width",
    "tile_height": "tile.height",
    "gap": "gap",
    "general": "",
}


@dataclass
class ValidationError:
    """A blocking validation error.

    Attributes:
        path: JSON path to the invalid field (e.g., "tile.width")
        message: Human-readable description of the error
        value: The invalid value that caused the error
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """A non-blocking validation warning.

    Attributes:
        path: JSON path to the concerning field
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Container for validation errors and warnings."""

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """Get the CLI exit code based on validation status.

        Returns:
            0 if valid with no warnings
            1 if there are errors
            2 if valid but has warnings
        """
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(self, path: str, message: str, value: Any = None) -> "ValidationResult":
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        self.warnings.append(ValidationWarning(path=path, message=message, suggestion=suggestion))
        return self

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self


def check_layout_input(config: TileSetupConfiguration) -> ValidationResult:
    """Run the layout engine's input validation against the configuration."""
    result = ValidationResult()
    request = config_to_request(config)
    try:
        layout_input = request.to_layout_input()
    except UnitError as e:
        return result.add_error("", str(e))

    for error in validate_layout_input(layout_input):
        result.add_error(_FIELD_PATHS.get(error.field, error.field), error.message)
    return result


def check_pattern_advisories(config: TileSetupConfiguration) -> ValidationResult:
    """Warn when the pattern does not suit the tile proportions."""
    result = ValidationResult()
    request = config_to_request(config)
    validation = validate_pattern_application(config.pattern, request.to_layout_input().tile_size)
    for message in validation.errors:
        result.add_error("pattern", message)
    for message in validation.warnings:
        result.add_warning(
            "pattern",
            message,
            suggestion="Choose a pattern listed by 'tilesetup patterns' for this tile size",
        )
    return result


def check_mask_advisories(config: TileSetupConfiguration) -> ValidationResult:
    """Warn about masks that lie entirely outside the area."""
    result = ValidationResult()
    layout_input = config_to_request(config).to_layout_input()
    area = Bounds(0, 0, layout_input.area_width, layout_input.area_height)

    for index, spec in enumerate(config_to_masks(config)):
        if area.intersection(spec.geometry.bounds) is None:
            result.add_warning(
                f"masks[{index}]",
                f"Mask '{spec.id}' lies outside the area and hides nothing",
                suggestion="Check the mask position against the area size",
            )
    return result


def validate_config(config: TileSetupConfiguration) -> ValidationResult:
    """Perform full validation of a loaded configuration.

    Advisories are only checked once the layout input itself is valid.
    """
    result = check_layout_input(config)
    if not result.is_valid:
        return result
    result.merge(check_pattern_advisories(config))
    result.merge(check_mask_advisories(config))
    return result

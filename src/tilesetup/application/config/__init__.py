"""Configuration schema and loading system for tile layout projects.

This package provides JSON-based project files: Pydantic models for schema
validation, a loader with comprehensive error handling, layout advisory
checks, and adapters to the application DTOs and domain configuration.

Public API:
    - TileSetupConfiguration: Root configuration model
    - load_config: Load configuration from a JSON file
    - load_config_from_dict: Load configuration from a dictionary
    - ConfigError: Raised for unusable project files, with ConfigIssue entries
    - ValidationResult: Container for validation results
    - validate_config: Perform full configuration validation
    - config_to_request: Convert config to a LayoutRequest
    - config_to_masks: Convert config masks to MaskSpecs

Example:
    >>> from pathlib import Path
    >>> from tilesetup.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("bathroom-wall.json"))
    ...     print(f"Area: {config.area.width}x{config.area.height}")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from tilesetup.application.config.adapter import (
    config_to_history_config,
    config_to_masking_config,
    config_to_masks,
    config_to_request,
    mask_config_to_spec,
)
from tilesetup.application.config.loader import (
    ConfigError,
    ConfigErrorKind,
    ConfigIssue,
    load_config,
    load_config_from_dict,
)
from tilesetup.application.config.schema import (
    SUPPORTED_VERSIONS,
    AreaConfig,
    CircleMaskConfig,
    HistorySettingsConfig,
    MaskConfig,
    MaskingSettingsConfig,
    OutputConfig,
    PolygonMaskConfig,
    RectangleMaskConfig,
    StartLineConfig,
    TileConfig,
    TileSetupConfiguration,
)
from tilesetup.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate_config,
)

__all__ = [
    # Schema
    "SUPPORTED_VERSIONS",
    "AreaConfig",
    "CircleMaskConfig",
    "HistorySettingsConfig",
    "MaskConfig",
    "MaskingSettingsConfig",
    "OutputConfig",
    "PolygonMaskConfig",
    "RectangleMaskConfig",
    "StartLineConfig",
    "TileConfig",
    "TileSetupConfiguration",
    # Loading
    "ConfigError",
    "ConfigErrorKind",
    "ConfigIssue",
    "load_config",
    "load_config_from_dict",
    # Validation
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "validate_config",
    # Adapters
    "config_to_history_config",
    "config_to_masking_config",
    "config_to_masks",
    "config_to_request",
    "mask_config_to_spec",
]

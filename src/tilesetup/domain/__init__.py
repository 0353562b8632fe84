"""Domain layer for tile layout: units, value objects, entities and engines."""

from .entities import Grid, GridHandle, MaskShape, TileCell, tile_id
from .exceptions import (
    CommandTargetMissingError,
    DivisionByZeroError,
    DuplicateMaskError,
    InvalidShapeError,
    LayoutValidationError,
    MaskError,
    MaskedTileError,
    NegativeSqrtError,
    NonFiniteValueError,
    TileSetupError,
    UnitError,
    UnknownPatternError,
)
from .services import (
    GridEngine,
    GridStatistics,
    HistoryConfig,
    HistoryEngine,
    LayoutInput,
    LayoutResult,
    MaskingConfig,
    MaskingEngine,
    PatternId,
    apply_pattern,
)
from .value_objects import (
    Alignment,
    CircleGeometry,
    Dimension,
    FieldError,
    IntersectionType,
    Point,
    PolygonGeometry,
    RectangleGeometry,
    Rotation,
    TileKind,
    ValidationCode,
)

__all__ = [
    # Entities
    "Grid",
    "GridHandle",
    "MaskShape",
    "TileCell",
    "tile_id",
    # Exceptions
    "CommandTargetMissingError",
    "DivisionByZeroError",
    "DuplicateMaskError",
    "InvalidShapeError",
    "LayoutValidationError",
    "MaskError",
    "MaskedTileError",
    "NegativeSqrtError",
    "NonFiniteValueError",
    "TileSetupError",
    "UnitError",
    "UnknownPatternError",
    # Services
    "GridEngine",
    "GridStatistics",
    "HistoryConfig",
    "HistoryEngine",
    "LayoutInput",
    "LayoutResult",
    "MaskingConfig",
    "MaskingEngine",
    "PatternId",
    "apply_pattern",
    # Value objects
    "Alignment",
    "CircleGeometry",
    "Dimension",
    "FieldError",
    "IntersectionType",
    "Point",
    "PolygonGeometry",
    "RectangleGeometry",
    "Rotation",
    "TileKind",
    "ValidationCode",
]

"""Value objects for the tile layout domain.

This module provides immutable data types used throughout the layout
engine. All classes are re-exported from sub-modules for convenience.
"""

from __future__ import annotations

# Core geometry
from ._geometry import (
    Alignment,
    Bounds,
    Dimension,
    Point,
    Rotation,
)

# Tile pieces and layout summaries
from ._tiles import (
    AxisLayout,
    CutPiece,
    FullPiece,
    Piece,
    PieceDimension,
    SplitPiece,
    TileKind,
)

# Mask geometry and intersection
from ._masks import (
    CircleGeometry,
    IntersectionResult,
    IntersectionType,
    MaskGeometry,
    PolygonGeometry,
    RectangleGeometry,
    ShapeType,
)

# Validation
from ._validation import (
    FieldError,
    ValidationCode,
)

__all__ = [
    # Core geometry
    "Alignment",
    "Bounds",
    "Dimension",
    "Point",
    "Rotation",
    # Tile pieces
    "AxisLayout",
    "CutPiece",
    "FullPiece",
    "Piece",
    "PieceDimension",
    "SplitPiece",
    "TileKind",
    # Masks
    "CircleGeometry",
    "IntersectionResult",
    "IntersectionType",
    "MaskGeometry",
    "PolygonGeometry",
    "RectangleGeometry",
    "ShapeType",
    # Validation
    "FieldError",
    "ValidationCode",
]

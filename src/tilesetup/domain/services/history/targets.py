"""Narrow interfaces that history commands operate through."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from tilesetup.domain.entities import MaskShape
    from tilesetup.domain.services.pattern_engine import PatternId
    from tilesetup.domain.value_objects import MaskGeometry, Point


@runtime_checkable
class MaskRepository(Protocol):
    """Mask storage used by mask commands.

    ``MaskingEngine`` satisfies this protocol. Unknown ids on removal or
    geometry changes are no-ops returning an empty list.
    """

    def get_mask(self, mask_id: str) -> MaskShape | None: ...

    def add_mask(
        self, mask_id: str, geometry: MaskGeometry, label: str = "", active: bool = True
    ) -> MaskShape: ...

    def remove_mask(self, mask_id: str) -> list[str]: ...

    def move_shape(self, mask_id: str, new_position: Point) -> list[str]: ...

    def set_geometry(self, mask_id: str, geometry: MaskGeometry) -> list[str]: ...


@runtime_checkable
class PatternTarget(Protocol):
    """Something whose layout pattern can be switched, such as an editing session."""

    def set_pattern(self, pattern_id: PatternId) -> list[str]:
        """Switch to ``pattern_id`` and return the ids of the affected cells."""
        ...

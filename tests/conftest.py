"""Pytest configuration and shared fixtures for tile layout tests."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from tilesetup.application.commands import GenerateLayoutCommand
    from tilesetup.domain.services import LayoutResult


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Shared fixtures for command creation
# =============================================================================


@pytest.fixture
def generate_command() -> "GenerateLayoutCommand":
    """Create a GenerateLayoutCommand instance using the factory."""
    from tilesetup.application.factory import get_factory

    return get_factory().create_generate_command()


@pytest.fixture(autouse=True)
def _reset_default_factory() -> Iterator[None]:
    """Keep tests from sharing a customized default factory."""
    yield
    from tilesetup.application.factory import reset_factory

    reset_factory()


# =============================================================================
# Layout fixtures
# =============================================================================


@pytest.fixture
def layout_1000_by_300() -> "LayoutResult":
    """1000x1000 mm area, 300 mm square tiles, no gap.

    3x3 full tiles with 100 mm cut strips on the right and bottom, so a
    4x4 grid.
    """
    from tilesetup.domain.services import GridEngine, LayoutInput

    return GridEngine().generate(LayoutInput.from_mm(1000, 1000, 300, 300))


@pytest.fixture
def layout_800_by_200() -> "LayoutResult":
    """800x800 mm area, 200 mm square tiles, no gap: an exact 4x4 grid."""
    from tilesetup.domain.services import GridEngine, LayoutInput

    return GridEngine().generate(LayoutInput.from_mm(800, 800, 200, 200))


@pytest.fixture
def valid_config_data() -> dict:
    """Minimal valid project configuration as a dictionary."""
    return {
        "schema_version": "1.0",
        "area": {"width": 1000, "height": 1000},
        "tile": {"width": 300, "height": 300},
    }

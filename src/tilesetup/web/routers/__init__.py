"""API routers for the REST API."""

from tilesetup.web.routers.layouts import router as layouts_router
from tilesetup.web.routers.patterns import router as patterns_router
from tilesetup.web.routers.validate import router as validate_router

__all__ = [
    "layouts_router",
    "patterns_router",
    "validate_router",
]

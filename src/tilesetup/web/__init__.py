"""FastAPI REST API for tile layout generation.

Usage:
    uvicorn tilesetup.web:app --reload
"""

from tilesetup.web.app import app, create_app

__all__ = ["app", "create_app"]

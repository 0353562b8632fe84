"""Application services for interactive layout editing."""

from .editing_session import EditingSession

__all__ = [
    "EditingSession",
]

"""Custom exceptions and error handlers for the REST API."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tilesetup.application.config import ConfigError
from tilesetup.domain.exceptions import UnknownPatternError


class LayoutGenerationError(Exception):
    """Raised when layout input is rejected.

    Attributes:
        errors: ``"<field>: <message>"`` entries from layout validation.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(f"Layout generation failed: {errors}")


class UnsupportedFormatError(Exception):
    """Raised when requested export format is not supported."""

    def __init__(self, format_name: str, available: list[str]) -> None:
        self.format_name = format_name
        self.available = available
        super().__init__(f"Unsupported format: {format_name}. Available: {', '.join(available)}")


def _split_error(error: str) -> dict[str, str]:
    field, sep, message = error.partition(": ")
    if not sep:
        return {"field": "general", "message": error}
    return {"field": field, "message": message}


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(LayoutGenerationError)
    async def layout_generation_error_handler(
        request: Request, exc: LayoutGenerationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": "Layout validation failed",
                "error_type": "layout_validation",
                "details": [_split_error(e) for e in exc.errors],
            },
        )

    @app.exception_handler(UnknownPatternError)
    async def unknown_pattern_handler(request: Request, exc: UnknownPatternError) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={
                "error": str(exc),
                "error_type": "not_found",
                "details": {"pattern_id": exc.pattern_id},
            },
        )

    @app.exception_handler(ConfigError)
    async def config_error_handler(request: Request, exc: ConfigError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": "Configuration validation failed",
                "error_type": "config_validation",
                "details": [
                    {"path": issue.path, "message": issue.message, "mask_id": issue.mask_id}
                    for issue in exc.issues
                ],
            },
        )

    @app.exception_handler(UnsupportedFormatError)
    async def unsupported_format_handler(
        request: Request, exc: UnsupportedFormatError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={
                "error": str(exc),
                "error_type": "unsupported_format",
                "details": {"format": exc.format_name, "available": exc.available},
            },
        )

"""Configuration validation endpoints."""

from fastapi import APIRouter

from tilesetup.application.config import load_config_from_dict, validate_config
from tilesetup.web.schemas.requests import ConfigValidateRequest
from tilesetup.web.schemas.responses import ValidationResultSchema

router = APIRouter(prefix="/validate", tags=["validate"])


@router.post("", response_model=ValidationResultSchema)
async def validate_configuration(
    request: ConfigValidateRequest,
) -> ValidationResultSchema:
    """Validate a project configuration without generating.

    Raises:
        ConfigError: If the configuration fails schema validation (422).
    """
    config = load_config_from_dict(request.config)
    result = validate_config(config)
    return ValidationResultSchema(
        is_valid=result.is_valid,
        errors=[{"message": e.message, "path": e.path} for e in result.errors],
        warnings=[
            {"message": w.message, "path": w.path, "suggestion": w.suggestion}
            for w in result.warnings
        ],
    )

"""The ``validate`` command: check a project file without generating a layout."""

from pathlib import Path
from typing import Annotated

import typer

from tilesetup.application.config import (
    ConfigError,
    ConfigErrorKind,
    ValidationResult,
    load_config,
    validate_config,
)


def _section(title: str, lines: list[str], err: bool = False) -> None:
    typer.echo(f"{title}:", err=err)
    for line in lines:
        typer.echo(f"  {line}", err=err)
    typer.echo()


def _load_error_lines(error: ConfigError) -> list[str]:
    if error.kind is ConfigErrorKind.FILE_NOT_FOUND:
        return [f"File not found: {error.path}"]
    if error.kind is ConfigErrorKind.JSON_PARSE:
        return ["Invalid JSON syntax"] + [
            f"  Line {issue.line}, Column {issue.column}: {issue.message}"
            for issue in error.issues
        ]
    if error.issues:
        return [str(issue) for issue in error.issues]
    return [error.message]


def _report(result: ValidationResult) -> None:
    if result.errors:
        _section(
            "Errors",
            [f"{e.path or 'general'}: {e.message}" for e in result.errors],
            err=True,
        )
    if result.warnings:
        lines = []
        for warning in result.warnings:
            lines.append(f"{warning.path}: {warning.message}")
            if warning.suggestion:
                lines.append(f"  Suggestion: {warning.suggestion}")
        _section("Warnings", lines)

    errors, warnings = len(result.errors), len(result.warnings)
    if errors:
        typer.echo(f"Validation failed: {errors} error(s), {warnings} warning(s)", err=True)
    elif warnings:
        typer.echo(f"Validation passed with {warnings} warning(s)")
    else:
        typer.echo("Validation passed. Configuration is valid.")


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON project file to validate"),
    ],
) -> None:
    """Validate a tile layout project file.

    Schema errors are reported by JSON path, naming the mask for errors
    inside ``masks``. A schema-valid file is then checked against the
    layout limits (sizes, tile larger than area, tile count) and for
    advisories such as a rectangular-only pattern on square tiles or a
    mask outside the area.

    Exits 0 when clean, 1 on errors and 2 when only warnings were found.
    """
    typer.echo(f"Validating {config_file}...")
    typer.echo()

    try:
        config = load_config(config_file)
    except ConfigError as e:
        _section("Errors", _load_error_lines(e), err=True)
        typer.echo("Validation failed.", err=True)
        raise typer.Exit(code=1)

    result = validate_config(config)
    _report(result)
    raise typer.Exit(code=result.exit_code)

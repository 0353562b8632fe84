"""Typer CLI for tile layout generation."""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Annotated

import typer

from tilesetup.application import LayoutOutput, LayoutRequest, MaskSpec, ServiceFactory
from tilesetup.application.config import (
    ConfigError,
    config_to_masking_config,
    config_to_masks,
    config_to_request,
    load_config,
)
from tilesetup.cli.commands import validate_command
from tilesetup.domain.services import PatternId, compatible_patterns, get_all_patterns
from tilesetup.domain.value_objects import Alignment
from tilesetup.infrastructure.exporters import ExportManager

OUTPUT_FORMATS = ("summary", "diagram", "json", "csv", "all")

app = typer.Typer(
    name="tilesetup",
    help="Plan tile layouts: full tiles, cut pieces, patterns and masked regions.",
)

# Register validate command
app.command(name="validate")(validate_command)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Plan tile layouts from area and tile dimensions."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


def _request_from_options(
    area_width: float | None,
    area_height: float | None,
    tile_width: float | None,
    tile_height: float | None,
    gap: float | None,
) -> LayoutRequest:
    """Build a request from command line dimensions alone."""
    missing = [
        name
        for name, value in (
            ("--area-width", area_width),
            ("--area-height", area_height),
            ("--tile-width", tile_width),
        )
        if value is None
    ]
    if missing:
        typer.echo(f"Error: Missing required options: {', '.join(missing)}", err=True)
        typer.echo("Provide them or use --config with a project file.", err=True)
        raise typer.Exit(code=1)

    assert area_width is not None and area_height is not None and tile_width is not None
    return LayoutRequest(
        area_width=area_width,
        area_height=area_height,
        tile_width=tile_width,
        # Square tiles unless a height is given
        tile_height=tile_height if tile_height is not None else tile_width,
        gap=gap if gap is not None else 0.0,
    )


def _write_or_echo(content: str, output_file: Path | None) -> None:
    if output_file is None:
        typer.echo(content)
        return
    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(content, encoding="utf-8")
    typer.echo(f"Wrote {output_file}")


def _render(output: LayoutOutput, output_format: str, factory: ServiceFactory, output_file: Path | None) -> None:
    assert output.grid is not None
    match output_format:
        case "summary":
            _write_or_echo(factory.get_summary_formatter().format(output), output_file)
        case "diagram":
            _write_or_echo(factory.get_grid_diagram_formatter().format(output.grid), output_file)
        case "json" | "csv":
            _write_or_echo(factory.get_exporter(output_format).export_string(output), output_file)
        case "all":
            typer.echo(factory.get_summary_formatter().format(output))
            typer.echo()
            typer.echo(factory.get_grid_diagram_formatter().format(output.grid))
            if output_file is not None:
                files = ExportManager(output_file).export_all(["json", "csv"], output)
                typer.echo("\nExported files:")
                for fmt, path in files.items():
                    typer.echo(f"  {fmt.upper()}: {path}")


@app.command()
def generate(
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to JSON project file"),
    ] = None,
    area_width: Annotated[
        float | None,
        typer.Option("--area-width", help="Area width in mm"),
    ] = None,
    area_height: Annotated[
        float | None,
        typer.Option("--area-height", help="Area height in mm"),
    ] = None,
    tile_width: Annotated[
        float | None,
        typer.Option("--tile-width", help="Tile width in mm"),
    ] = None,
    tile_height: Annotated[
        float | None,
        typer.Option("--tile-height", help="Tile height in mm (defaults to the tile width)"),
    ] = None,
    gap: Annotated[
        float | None,
        typer.Option("--gap", "-g", help="Grout gap in mm"),
    ] = None,
    start_x: Annotated[
        Alignment | None,
        typer.Option("--start-x", help="Horizontal start line: start, center, end"),
    ] = None,
    start_y: Annotated[
        Alignment | None,
        typer.Option("--start-y", help="Vertical start line: start, center, end"),
    ] = None,
    pattern: Annotated[
        PatternId | None,
        typer.Option("--pattern", "-p", help="Layout pattern id (see 'tilesetup patterns')"),
    ] = None,
    output_format: Annotated[
        str | None,
        typer.Option("--format", "-f", help="Output format: summary, diagram, json, csv, all"),
    ] = None,
    output_file: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output file path (a directory for --format all)",
        ),
    ] = None,
) -> None:
    """Generate a tile layout.

    Dimensions come from --config or from the dimension options; options
    given alongside --config override the file's values.
    """
    factory = ServiceFactory()
    masks: list[MaskSpec] = []
    chosen_pattern = PatternId.LINEAR_SQUARE
    chosen_format = "summary"

    if config_file is not None:
        try:
            config = load_config(config_file)
        except ConfigError as e:
            typer.echo(f"Configuration error: {e}", err=True)
            raise typer.Exit(code=1)

        request = config_to_request(config)
        overrides = {
            name: value
            for name, value in (
                ("area_width", area_width),
                ("area_height", area_height),
                ("tile_width", tile_width),
                ("tile_height", tile_height),
                ("gap", gap),
            )
            if value is not None
        }
        request = replace(request, **overrides)
        masks = config_to_masks(config)
        chosen_pattern = config.pattern
        chosen_format = config.output.format
        factory = ServiceFactory(masking_config=config_to_masking_config(config))
    else:
        request = _request_from_options(area_width, area_height, tile_width, tile_height, gap)

    if start_x is not None:
        request.start_x = start_x
    if start_y is not None:
        request.start_y = start_y
    if pattern is not None:
        chosen_pattern = pattern
    if output_format is not None:
        chosen_format = output_format.lower()

    if chosen_format not in OUTPUT_FORMATS:
        typer.echo(f"Unknown format: {chosen_format}", err=True)
        typer.echo(f"Available formats: {', '.join(OUTPUT_FORMATS)}", err=True)
        raise typer.Exit(code=1)

    output = factory.create_generate_command().execute(request, chosen_pattern, masks)
    if not output.is_valid:
        for error in output.errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1)

    for warning in output.warnings:
        typer.echo(f"Warning: {warning}", err=True)

    _render(output, chosen_format, factory, output_file)


@app.command()
def patterns(
    square: Annotated[
        bool,
        typer.Option("--square", help="Only list patterns suitable for square tiles"),
    ] = False,
) -> None:
    """List the available layout patterns."""
    definitions = compatible_patterns(is_square=True) if square else get_all_patterns()
    typer.echo(ServiceFactory().get_pattern_list_formatter().format(definitions))


if __name__ == "__main__":
    app()

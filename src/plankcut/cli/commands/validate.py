"""Validate command for checking configuration files."""

from pathlib import Path
from typing import Annotated

import typer

from plankcut.application.config import (
    ConfigError,
    ValidationResult,
    load_config,
    validate_config,
)


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON configuration file to validate"),
    ],
) -> None:
    """Validate a cutting plan configuration file.

    Exit codes:
        0 - Configuration is valid with no warnings
        1 - Configuration has errors (cannot be used)
        2 - Configuration is valid but has warnings

    Example:
        plankcut validate shelves.json
    """
    typer.echo(f"Validating {config_file}...")

    try:
        config = load_config(config_file)
    except ConfigError as e:
        _display_load_error(e)
        raise typer.Exit(code=1)

    result = validate_config(config)
    _display_validation_result(result)
    raise typer.Exit(code=result.exit_code)


def _display_load_error(error: ConfigError) -> None:
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            typer.echo(
                f"    Line {detail.get('line', '?')}, column {detail.get('column', '?')}: "
                f"{detail.get('message', '')}",
                err=True,
            )
    elif error.error_type == "validation":
        for detail in error.details:
            typer.echo(f"  - {detail['path']}: {detail['message']}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)
    typer.echo("Validation failed.", err=True)


def _display_validation_result(result: ValidationResult) -> None:
    if result.errors:
        typer.echo("Errors:", err=True)
        for error in result.errors:
            typer.echo(f"  - {error.path}: {error.message}", err=True)
    if result.warnings:
        typer.echo("Warnings:")
        for warning in result.warnings:
            line = f"  - {warning.path}: {warning.message}"
            if warning.suggestion:
                line += f" ({warning.suggestion})"
            typer.echo(line)

    if result.is_valid:
        typer.echo("Validation passed.")
    else:
        typer.echo("Validation failed.", err=True)

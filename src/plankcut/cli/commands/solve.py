"""Solve command for the plankcut CLI.

This module contains the command that reads a piece list from flags, a
text file, a configuration file or interactive prompts, plans the cuts and
prints the result.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer

from plankcut.application import CutPlanInput, SolveCutPlanCommand
from plankcut.application.config import (
    ConfigError,
    OutputFormat,
    config_to_input,
    load_config,
)
from plankcut.domain import lengths_equal
from plankcut.infrastructure import (
    CutPlanFormatter,
    JsonExporter,
    PieceFileError,
    parse_lengths,
    read_piece_file,
)

__all__ = ["solve"]


def _fail(message: str) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(code=1)


def _input_from_config(
    config_file: Path, capacity: float | None
) -> tuple[CutPlanInput, OutputFormat, bool]:
    """Build the request from a configuration file; CLI capacity wins."""
    try:
        config = load_config(config_file)
    except ConfigError as e:
        raise _fail(str(e))

    plan_input = config_to_input(config)
    if capacity is not None:
        plan_input.capacity = capacity
    return plan_input, config.output.format, config.output.include_summary


def _input_from_sources(
    capacity: float | None,
    piece_file: Path | None,
    pieces: str | None,
    capacity_from_file: bool,
) -> CutPlanInput:
    """Build the request from flags, a piece file or prompts."""
    lengths: list[float] = []
    leading: float | None = None
    if pieces is not None:
        lengths.extend(parse_lengths(pieces))

    if piece_file is None and pieces is None:
        piece_file = Path(typer.prompt("Piece file"))

    if piece_file is not None:
        try:
            piece_list = read_piece_file(piece_file, capacity_from_file=capacity_from_file)
        except PieceFileError as e:
            raise _fail(e.message)
        lengths.extend(piece_list.lengths)
        if capacity_from_file:
            if capacity is None:
                capacity = piece_list.capacity
        else:
            leading = piece_list.leading

    if capacity is None:
        capacity = typer.prompt("Stock length", type=float)

    if leading is not None and lengths_equal(leading, capacity):
        typer.echo(
            f"Warning: the piece file starts with {leading:g}, the stock length. "
            "It is planned as a piece; pass --capacity-from-file if it names the stock.",
            err=True,
        )

    return CutPlanInput(capacity=capacity, lengths=sorted(lengths))


def solve(
    capacity: Annotated[
        float | None,
        typer.Option("--capacity", "-c", help="Stock length of one plank"),
    ] = None,
    piece_file: Annotated[
        Path | None,
        typer.Option("--file", "-f", help="Text file of whitespace-separated piece lengths"),
    ] = None,
    pieces: Annotated[
        str | None,
        typer.Option("--pieces", "-p", help='Piece lengths, e.g. "0.45 0.7 1.1"'),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to JSON configuration file"),
    ] = None,
    capacity_from_file: Annotated[
        bool,
        typer.Option(
            "--capacity-from-file",
            help=(
                "Read the stock length from the first number in the piece file. "
                "Without this flag every number in the file is a piece."
            ),
        ),
    ] = False,
    output_format: Annotated[
        OutputFormat | None,
        typer.Option("--format", help="Output format: text or json"),
    ] = None,
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the plan to this file"),
    ] = None,
    summary: Annotated[
        bool,
        typer.Option("--summary/--no-summary", help="Include header and totals in text output"),
    ] = True,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log search progress"),
    ] = False,
) -> None:
    """Plan how to cut pieces from stock using as few planks as possible.

    Pieces come from --pieces, --file or --config; anything missing is
    prompted for.

    Example:
        plankcut solve --capacity 2.0 --pieces "0.2 0.3 0.45 0.45 1.5"
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    include_summary = summary
    if config_file is not None:
        plan_input, config_format, config_summary = _input_from_config(config_file, capacity)
        if output_format is None:
            output_format = config_format
        include_summary = summary and config_summary
    else:
        plan_input = _input_from_sources(capacity, piece_file, pieces, capacity_from_file)

    command = SolveCutPlanCommand()
    result = command.execute(plan_input)

    if not result.is_valid:
        for error in result.errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1)

    if output_format == OutputFormat.JSON:
        output = JsonExporter().export(result.plan)
    else:
        output = CutPlanFormatter(include_summary=include_summary).format(result.plan)

    if output_file is not None:
        output_file.write_text(output + "\n", encoding="utf-8")
        typer.echo(f"Plan written to {output_file}")
    else:
        typer.echo(output)

"""Typer CLI for cutting plans."""

import typer

from plankcut.cli.commands import solve, validate_command

app = typer.Typer(
    name="plankcut",
    help="Plan cutting pieces from fixed-length stock with as little waste as possible.",
)

app.command(name="solve")(solve)
app.command(name="validate")(validate_command)


if __name__ == "__main__":
    app()

"""Main CLI application."""

import typer

from herald.cli.commands import database, events, serve

app = typer.Typer(
    name="herald",
    help="Herald - schedule events and execute them when due",
    no_args_is_help=True,
)

serve.register(app)
database.register(app)
events.register(app)


def main() -> None:
    app()

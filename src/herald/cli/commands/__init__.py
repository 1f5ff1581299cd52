"""CLI command modules."""

from herald.cli.commands import database, events, serve

__all__ = [
    "database",
    "events",
    "serve",
]

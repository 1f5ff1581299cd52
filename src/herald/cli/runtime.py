"""Helpers shared by CLI commands that touch the database."""

from __future__ import annotations

from herald.config import HeraldConfig
from herald.db import Database


def database_from_config(config: HeraldConfig) -> Database:
    """Build (but do not connect) the database described by ``config``."""
    return Database(
        database_url=config.database.url,
        database_path=config.database.path,
    )

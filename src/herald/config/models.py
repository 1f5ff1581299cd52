"""Configuration models using Pydantic."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from herald.config.paths import get_database_path


class ConfigError(Exception):
    """Configuration error."""

    pass


class ServerConfig(BaseModel):
    """Configuration for the HTTP server."""

    host: str = "127.0.0.1"
    port: int = Field(default=8080, ge=1, le=65535)


class DatabaseConfig(BaseModel):
    """Configuration for the relational store.

    ``url`` takes precedence; otherwise a SQLite file at ``path`` is used.
    """

    url: str | None = None
    path: Path = Field(default_factory=get_database_path)


class SchedulerConfig(BaseModel):
    """Configuration for the execution scheduler."""

    enabled: bool = True
    # Seconds between ticks; also the retry interval after a failed tick
    poll_interval: float = Field(default=1.0, gt=0)
    # Log a heartbeat every N ticks (300 = every 5 min at 1s interval)
    heartbeat_every: int = Field(default=300, ge=1)


class LoggingConfig(BaseModel):
    """Configuration for logging output."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_to_file: bool = False


class HeraldConfig(BaseModel):
    """Root configuration model."""

    server: ServerConfig = Field(default_factory=ServerConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    scheduler: SchedulerConfig = Field(default_factory=SchedulerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

"""
Configuration - Environment-driven settings.

Variables:
    DROPLINE_ENV              deployment environment (development)
    DROPLINE_LOG_LEVEL        root log level (INFO)
    ALLOWED_ORIGINS           comma separated CORS origins (*)
    DROPLINE_DEFAULT_WIDTH    columns for a new game (7)
    DROPLINE_DEFAULT_HEIGHT   rows for a new game (6)
    DROPLINE_RUN_LENGTH       pieces in a row needed to win (4)
    DROPLINE_SESSION_MAX_AGE  seconds before an idle game may be dropped (3600)
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
import os


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    env: str = "development"
    log_level: str = "INFO"
    allowed_origins: tuple[str, ...] = ("*",)
    default_width: int = 7
    default_height: int = 6
    run_length: int = 4
    session_max_age: int = 3600


def load_settings() -> Settings:
    """Read settings from the environment."""
    return Settings(
        env=os.getenv("DROPLINE_ENV", "development"),
        log_level=os.getenv("DROPLINE_LOG_LEVEL", "INFO").upper(),
        allowed_origins=tuple(os.getenv("ALLOWED_ORIGINS", "*").split(",")),
        default_width=int(os.getenv("DROPLINE_DEFAULT_WIDTH", "7")),
        default_height=int(os.getenv("DROPLINE_DEFAULT_HEIGHT", "6")),
        run_length=int(os.getenv("DROPLINE_RUN_LENGTH", "4")),
        session_max_age=int(os.getenv("DROPLINE_SESSION_MAX_AGE", "3600")),
    )


def configure_logging(level: str | None = None) -> None:
    """Install a root handler. Called by entry points, never by the engine."""
    logging.basicConfig(
        level=level or load_settings().log_level,
        format=LOG_FORMAT,
    )

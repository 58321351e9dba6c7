"""Settings and logging setup.

Settings are read from the environment (prefix ``LPBRIDGE_``) or from a
``.env`` file in the working directory::

    LPBRIDGE_GUROBI_COMMAND=/opt/gurobi/bin/gurobi_cl
    LPBRIDGE_WORK_DIR=/tmp/lp
    LPBRIDGE_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

import logging
import sys
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Solvers
    gurobi_command: str = "gurobi_cl"
    # Directory receiving the model, solution and failure files
    work_dir: Path = Path()

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="LPBRIDGE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the settings, read once per process."""
    return Settings()


def setup_logging(level: int | str | None = None) -> None:
    """Send the `lpbridge` logs to stderr.

    Parameters
    ----------
    level : int | str | None, default None
        Logging level, the ``log_level`` setting is used when None.

    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))

    logger = logging.getLogger("lpbridge")
    logger.setLevel(get_settings().log_level.upper() if level is None else level)

    # Remove existing handlers to avoid duplicates
    logger.handlers = []
    logger.addHandler(handler)
    logger.propagate = False

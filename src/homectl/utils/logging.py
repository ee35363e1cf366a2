from __future__ import annotations

import logging
import os
from typing import Literal

import coloredlogs  # type: ignore[import]

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]

TIME_FORMAT = "%H:%M:%S"


class LogFormat:
    """Predefined log formats."""

    SIMPLE = "%(asctime)s %(levelname)s %(message)s"
    DETAILED = "%(asctime)s [%(name)s] %(levelname)s %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Install coloredlogs on the root logger.

    The level comes from ``level`` or the ``LOGLEVEL`` environment variable.
    DEBUG switches to the detailed format that names the emitting module.
    """
    resolved = (level or os.environ.get("LOGLEVEL", "INFO")).upper()
    fmt = LogFormat.DETAILED if resolved == "DEBUG" else LogFormat.SIMPLE

    coloredlogs.install(level=resolved, fmt=fmt, datefmt=TIME_FORMAT)

    # selector/loop chatter is noise at our INFO level
    logging.getLogger("asyncio").setLevel(logging.WARNING)

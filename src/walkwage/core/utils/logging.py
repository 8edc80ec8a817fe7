"""
Loguru handlers for the walkwage entry points.

Library modules only do ``from loguru import logger``; the CLI installs
handlers once via setup_logging().  The optional file sink lives under
``paths.log_dir`` (see ``Config.log_file``).
"""

import sys
from pathlib import Path

from loguru import logger

from walkwage.core.exceptions import ConfigurationError

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")

CONSOLE_FORMAT = "<level>{level: <7}</level> {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {name}:{function}:{line} | {message}"


def normalize_level(level: str) -> str:
    """Upper-case ``level`` and reject names loguru does not know."""
    name = str(level).strip().upper()
    if name not in LOG_LEVELS:
        raise ConfigurationError(f"Unknown log level {level!r}; expected one of {', '.join(LOG_LEVELS)}")
    return name


def setup_logging(level: str = "WARNING", log_file: str | Path | None = None) -> None:
    """
    Replace loguru's handlers with a stderr sink and, optionally, a weekly-rotated file.

    Args:
        level: Minimum level for both sinks.
        log_file: Where to append the file log; parent dirs are created. None = stderr only.
    """
    level = normalize_level(level)
    logger.remove()
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)

    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        # One file per calendar week, matching the ledger's own boundary
        logger.add(path, level=level, format=FILE_FORMAT, rotation="monday at 00:00", retention=8, encoding="utf-8")

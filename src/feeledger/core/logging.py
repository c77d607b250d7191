"""
Logging for the fee ledger.

Every module logs through a child of the ``feeledger`` logger. Nothing is
printed until the host application (or ``configure_from_config``) installs a
handler.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import IO, TYPE_CHECKING

if TYPE_CHECKING:
    from feeledger.core.config import Config

LOGGER_NAME = "feeledger"

TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Environments whose log lines go to a collector rather than a terminal
STRUCTURED_ENVS = frozenset({"production", "staging"})


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record: time, level, logger and message."""

    def format(self, record: logging.LogRecord) -> str:
        line = {
            "time": self.formatTime(record, DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            line["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(line)


def configure_logging(
    level: int | str = logging.INFO,
    json_format: bool = False,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """
    Attach a single handler to the ``feeledger`` logger.

    Calling it again replaces the previous handler, so reconfiguring never
    duplicates lines. The logger stops propagating to the root logger.

    Args:
        level: Level number or name ("DEBUG", "info", ...)
        json_format: Emit JSON lines instead of plain text
        stream: Where to write (stdout by default)
    """
    if isinstance(level, str):
        level = level.upper()

    handler = logging.StreamHandler(stream or sys.stdout)
    if json_format:
        handler.setFormatter(JsonLineFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT))

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for old in list(logger.handlers):
        logger.removeHandler(old)
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def configure_from_config(config: Config, stream: IO[str] | None = None) -> logging.Logger:
    """Apply ``config.log_level``; JSON lines in production and staging."""
    return configure_logging(
        config.log_level,
        json_format=config.env in STRUCTURED_ENVS,
        stream=stream,
    )


def get_logger(name: str | None = None) -> logging.Logger:
    if name:
        return logging.getLogger(f"{LOGGER_NAME}.{name}")
    return logging.getLogger(LOGGER_NAME)

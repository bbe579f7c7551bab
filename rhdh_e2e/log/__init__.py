"""
Topic logging for the e2e utilities.

Extends Python's standard logging with:
- Structured extra fields rendered as [key:value]
- "/"-separated topic names (e.g. /plugin-metadata, /shell)
- A custom TRACE level
- Colored console output
- Complete disable via level=False

Library code asks for a topic logger with get_lg(); the root logger is
created on first use with the level from RHDH_E2E_LOG_LEVEL (default info;
empty or unknown values fall back to info)
and can be reconfigured once with configure().
"""

import logging
import os
from typing import TextIO

from .config import LogConfig, resolve_level
from .constants import LogConstants
from .exceptions import InvalidLogLevelError, LogError
from .factory import ROOT_NAME, LoggerFactory
from .formatters import LogFormatter, stream_supports_color
from .logger import Logger

logging.addLevelName(LogConstants.CUSTOM_LEVELS["TRACE"], "TRACE")

LOG_LEVEL_ENV = "RHDH_E2E_LOG_LEVEL"


def _drop_registered(prefix: str = ROOT_NAME) -> None:
    for name in list(logging.root.manager.loggerDict):
        if name.startswith(prefix):
            del logging.root.manager.loggerDict[name]


def configure(
    level: str | int | bool = "info",
    colors: bool | None = None,
    micros: bool = False,
    stream: TextIO | None = None,
) -> Logger:
    """
    (Re)create the root logger with the given settings.

    Existing topic loggers are discarded so they are derived again from the
    new root on next use.

    Args:
        level: Log level name, number, or False to disable logging
        colors: Force colors on/off; default detects a terminal on stdout
        micros: Show microsecond timestamps
        stream: Handler stream (default: stdout)
    """
    if colors is None:
        colors = stream_supports_color(stream)
    config = LogConfig.from_params(level, micros=micros, colors=colors)
    _drop_registered()
    return LoggerFactory.create_root(config, stream)


def get_root_lg() -> Logger:
    """
    Return the root logger, creating it from the environment if needed.

    An empty RHDH_E2E_LOG_LEVEL counts as unset. An unknown level falls back
    to info with a warning, so library calls never fail on log settings.
    """
    existing = LoggerFactory._check_existing_logger(ROOT_NAME)
    if existing is not None:
        return existing
    level = os.environ.get(LOG_LEVEL_ENV) or "info"
    try:
        return configure(level)
    except InvalidLogLevelError as e:
        root = configure("info")
        root.warning("ignoring log level from environment", extra={"error": e})
        return root


def get_lg(tags: str | list[str]) -> Logger:
    """
    Get a topic logger derived from the root logger.

    Example:
        lg = get_lg("plugin-metadata")
        lg.info("loaded metadata", extra={"package": "./dist/tech-radar"})
    """
    return LoggerFactory.derive(get_root_lg(), tags)


__all__ = [
    "Logger",
    "LogConfig",
    "LogConstants",
    "LogFormatter",
    "LoggerFactory",
    "LogError",
    "InvalidLogLevelError",
    "resolve_level",
    "configure",
    "get_root_lg",
    "get_lg",
    "LOG_LEVEL_ENV",
]

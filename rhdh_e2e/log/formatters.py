"""
Log formatters for the logging system.

Renders records as:

    [12:34:56,789] [I] message                       [key:value] [1234] [/topic]

with optional ANSI colors per level.
"""

import logging
import re
import sys
import traceback
from typing import Any

from .config import LogConfig
from .constants import LogConstants

_ANSI_PATTERN = re.compile(r"\x1b\[[0-9;]*m")

EXTRA_ATTR = "__e2e__extra"


def _visual_len(text: str) -> int:
    """Calculate visual width of text, excluding ANSI escape codes."""
    if "\x1b" not in text:
        return len(text)
    return len(_ANSI_PATTERN.sub("", text))


class ColorManager:
    """ANSI color codes per log level."""

    RED = "\x1b[31"
    GREEN = "\x1b[32"
    YELLOW = "\x1b[33"
    MAGENTA = "\x1b[35"
    CYAN = "\x1b[36"
    DEFAULT = "\x1b[38"
    RESET = LogConstants.RESET

    COLORS: dict[int, str] = {
        LogConstants.CUSTOM_LEVELS["TRACE"]: "\x1b[38;5;24",
        logging.DEBUG: "\x1b[38;5;32",
        logging.INFO: CYAN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: MAGENTA,
    }

    @staticmethod
    def get_color_for_level(level: int) -> str:
        return ColorManager.COLORS.get(level, ColorManager.DEFAULT)

    @staticmethod
    def create_gray_level(level: int) -> str:
        return f"\x1b[38;5;{LogConstants.GRAY_BASE + max(0, min(level, 23))}"


def _render_exception(e: BaseException) -> str:
    """Render an exception with its traceback, if one is attached."""
    out = f"{e.__class__.__name__}: {e}"
    for frame in traceback.extract_tb(e.__traceback__):
        out += f'\n  File "{frame.filename}", line {frame.lineno}, in {frame.name}'
        if frame.line:
            out += f"\n    {frame.line.strip()}"
    return out


class LogFormatter(logging.Formatter):
    """
    Formatter with structured extra fields and optional colors.

    Extra fields come from the Logger's merged `extra` mapping, rendered as
    `[key:value]` after the message. An `exception` field is rendered as a
    short class tag inline and its traceback on the following lines.
    """

    def __init__(self, config: LogConfig):
        self._config = config
        super().__init__(LogConstants.DEFAULT_FORMAT)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        s = super().formatTime(record, datefmt)
        if self._config.micros:
            micros = int((record.created % 1) * 1000000) % 1000
            s += f".{micros:03d}"
        return s

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        record.asctime = self.formatTime(record)
        head = "[%s] [%s] %s" % (record.asctime, record.levelname[:1], record.message)

        rule = (
            LogConstants.MICRO_RULE_WIDTH
            if self._config.micros
            else LogConstants.DEFAULT_RULE_WIDTH
        )
        pad = " " * max(1, rule - _visual_len(head))

        extra = getattr(record, EXTRA_ATTR, None) or {}
        fields = [self._format_field(k, v) for k, v in extra.items()]
        meta = f"[{record.process}] [{record.name}]"
        line = head + pad + " ".join(fields + [meta])

        tail = ""
        exc = extra.get("exception")
        if isinstance(exc, BaseException) and exc.__traceback__ is not None:
            tail = "\n" + _render_exception(exc)
        elif record.exc_info:
            tail = "\n" + self.formatException(record.exc_info)

        if self._config.colors:
            col = ColorManager.get_color_for_level(record.levelno) + "m"
            return col + line + ColorManager.RESET + tail
        return line + tail

    @staticmethod
    def _format_field(key: str, value: Any) -> str:
        if key == "exception" and isinstance(value, BaseException):
            return f"[{key}:{value.__class__.__name__}]"
        if isinstance(value, (list, tuple)):
            return f"[{key}:{','.join(str(v) for v in value)}]"
        return f"[{key}:{value}]"


def stream_supports_color(stream: Any = None) -> bool:
    """Check whether a stream is an interactive terminal."""
    stream = stream if stream is not None else sys.stdout
    return bool(getattr(stream, "isatty", lambda: False)())

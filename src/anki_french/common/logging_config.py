"""
Logging configuration for the deck-to-Anki run.

Human-readable console output; context passed via ``extra={...}`` is appended
to each line as ``key=value`` pairs.
"""
import logging
import sys
from typing import Optional, TextIO

ROOT_LOGGER = "anki_french"

# Attributes every LogRecord has; anything else came from ``extra``
_RECORD_ATTRS = frozenset(logging.LogRecord("", 0, "", 0, "", None, None).__dict__) | {"message", "asctime"}


class ContextFormatter(logging.Formatter):
    """Formatter that appends structured context fields to log messages.

    Format: timestamp [LEVEL] logger_name: message | key1=value1 key2=value2
    """

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
        'RESET': '\033[0m',
        'GRAY': '\033[90m',
    }

    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None, use_color: bool = True) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def _paint(self, color: str, text: str) -> str:
        if not self.use_color:
            return text
        return f"{self.COLORS[color]}{text}{self.COLORS['RESET']}"

    def format(self, record: logging.LogRecord) -> str:
        base_msg = super().format(record)

        levelname = record.levelname
        if levelname in self.COLORS:
            base_msg = base_msg.replace(f"[{levelname}]", self._paint(levelname, f"[{levelname}]"), 1)

        extra_fields = [
            f"{key}={value}"
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS and value is not None
        ]
        if extra_fields:
            return base_msg + self._paint('GRAY', f" | {' '.join(extra_fields)}")
        return base_msg


def setup_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> None:
    """Configure logging for the ``anki_french`` namespace.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               DEBUG also shows every Larousse URL and download.
        stream: Output stream, stdout by default. Colors are used only on a TTY.

    Example:
        >>> from anki_french.common.logging_config import setup_logging
        >>> setup_logging("DEBUG")
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    stream = stream or sys.stdout

    formatter = ContextFormatter(
        fmt='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        use_color=hasattr(stream, "isatty") and stream.isatty(),
    )

    console_handler = logging.StreamHandler(stream)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(numeric_level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)
    root_logger.propagate = False

"""
Data Alchemist: Logging Infrastructure
=====================================
Multi-level logging with file rotation and function tracing.

Levels:
    TRACE (5): Function entry/exit with arguments
    DEBUG (10): Parsed values, per-entity checks
    INFO (20): Loads, exports, validation summaries
    WARNING (30): Data-quality warnings
    ERROR (40): Load failures, exceptions
"""
import functools
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Callable, Optional

from alchemist.utils.structured_logging import configure_structlog

ROOT_LOGGER = "alchemist"

# Custom TRACE level (below DEBUG)
TRACE = 5
logging.addLevelName(TRACE, "TRACE")


CONSOLE_FORMAT = "[%(asctime)s] %(levelname)-7s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"


class ColoredFormatter(logging.Formatter):
    """Formatter with ANSI colors for terminal output."""

    COLORS = {
        TRACE: "\033[90m",             # Gray
        logging.DEBUG: "\033[36m",     # Cyan
        logging.INFO: "\033[32m",      # Green
        logging.WARNING: "\033[33m",   # Yellow
        logging.ERROR: "\033[31m",     # Red
        logging.CRITICAL: "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, stream=None, **kwargs):
        super().__init__(**kwargs)
        self.use_color = bool(stream is not None and getattr(stream, "isatty", lambda: False)())

    def format(self, record):
        message = super().format(record)
        color = self.COLORS.get(record.levelno, "")
        if color and self.use_color:
            return f"{color}{message}{self.RESET}"
        return message


def _console_handler(level: int) -> logging.Handler:
    # stdout is reserved for CLI output
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(ColoredFormatter(stream=sys.stderr, fmt=CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    return handler


def _file_handler(path: Path, level: int, max_bytes: int, backup_count: int) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = "logs/alchemist.log",
    console_level: Optional[str] = None,
    max_bytes: int = 5 * 1024 * 1024,  # 5 MB
    backup_count: int = 3,
    json_events: bool = False,
) -> logging.Logger:
    """
    Configure the ``alchemist`` logger tree and structlog.

    Args:
        level: Minimum log level for file output
        log_file: Path to log file (None = console only)
        console_level: Console log level (defaults to level)
        max_bytes: Max size before rotation
        backup_count: Number of backup files to keep
        json_events: Render structured load/export events as JSON

    Returns:
        The ``alchemist`` logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(TRACE)  # handlers filter
    logger.handlers.clear()

    file_level = _parse_level(level)
    cons_level = _parse_level(console_level or level)

    logger.addHandler(_console_handler(cons_level))
    if log_file:
        logger.addHandler(_file_handler(Path(log_file), file_level, max_bytes, backup_count))

    configure_structlog(json_output=json_events)

    logger.info(
        "Logging initialized: console=%s, file=%s",
        logging.getLevelName(cons_level),
        logging.getLevelName(file_level) if log_file else "disabled",
    )
    return logger


def _parse_level(name: str) -> int:
    if name.upper() == "TRACE":
        return TRACE
    return getattr(logging, name.upper(), logging.INFO)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    Args:
        name: Module name (e.g., "alchemist.validation")
    """
    return logging.getLogger(name)


def log_function_call(func: Callable) -> Callable:
    """
    Decorator to log function entry and exit with arguments.

    Usage:
        @log_function_call
        def my_function(x, y):
            return x + y
    """
    logger = logging.getLogger(func.__module__)

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        func_name = func.__name__

        args_str = ", ".join(repr(a)[:50] for a in args[:3])
        kwargs_str = ", ".join(f"{k}={repr(v)[:30]}" for k, v in list(kwargs.items())[:3])
        call_str = f"{args_str}, {kwargs_str}" if kwargs_str else args_str
        logger.log(TRACE, "→ %s(%s)", func_name, call_str)

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error("✖ %s raised: %s: %s", func_name, type(e).__name__, e)
            raise
        result_str = repr(result)[:100] if result is not None else "None"
        logger.log(TRACE, "← %s returned: %s", func_name, result_str)
        return result

    return wrapper


def init_logging(level: str = "INFO", log_file: Optional[str] = "logs/alchemist.log") -> logging.Logger:
    """Initialize logging for the application."""
    return setup_logging(level=level, log_file=log_file)

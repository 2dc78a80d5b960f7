"""
Structured Logging Adapter
==========================
structlog integration for load and export events. Events are rendered
by structlog and handed to the stdlib ``alchemist`` loggers, so they go
through the same console/file handlers as the rest of the application.

Usage:
    from alchemist.utils.structured_logging import get_structured_logger

    log = get_structured_logger("alchemist.io")
    log.info("file_loaded", name="data.json", clients=12)
"""
import logging
from typing import Any

import structlog
import structlog.contextvars


def configure_structlog(json_output: bool = False) -> None:
    """
    Configure structlog for the application.

    Args:
        json_output: If True, render events as JSON (for production).
                    If False, render key=value pairs (for development).
    """
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Loggers are created at import; reconfiguring must reach them
        cache_logger_on_first_use=False,
    )


def get_structured_logger(name: str) -> Any:
    """
    Get a structured logger bound to a component name.

    The logger is resolved lazily, so module-level loggers pick up the
    configuration made later by ``configure_structlog``. Until then the
    default stdlib routing is installed, so library use without
    ``setup_logging`` never prints events to stdout.

    Args:
        name: Logger name (e.g., "alchemist.io.loader")
    """
    if not structlog.is_configured():
        configure_structlog()
    return structlog.get_logger(name, component=name)


def bind_context(**kwargs) -> None:
    """
    Bind context variables for all subsequent log calls.

    Args:
        **kwargs: Context values (e.g., session_id="abc123")
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all context variables."""
    structlog.contextvars.clear_contextvars()

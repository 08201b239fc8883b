"""Structured logging for the signage display using structlog.

Console output while developing, JSON lines when the display runs as a
service. Every event carries the ``display`` id once setup_logging() has
been given one, so logs from several screens can share one collector.
"""

import logging
import sys

import structlog

# Chatty HTTP libraries used by the snapshot store
_QUIET_LOGGERS = ("urllib3", "requests")


def setup_logging(
    json_output: bool = False, log_level: str = "INFO", display_id: str = ""
) -> None:
    """Configure structlog for the display process.

    Args:
        json_output: If True, output JSON (production). If False, console format (dev).
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        display_id: Name of this screen, bound to every log event when set.
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        # Wall-clock time of the facility, matching the times shown on screen
        structlog.processors.TimeStamper(fmt="iso", utc=False),
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    # stderr keeps stdout free for the scripts' JSON output
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    root = logging.getLogger()
    root.handlers = [logging.StreamHandler(sys.stderr)]
    root.setLevel(numeric_level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    structlog.contextvars.unbind_contextvars("display")
    if display_id:
        structlog.contextvars.bind_contextvars(display=display_id)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a logger instance bound with the module name.

    Args:
        name: Logger name (typically __name__ from calling module).

    Returns:
        Configured structlog logger with module name context.
    """
    return structlog.get_logger(name)

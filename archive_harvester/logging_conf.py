"""Logging configuration built around structlog JSON logging.

Standard output is reserved for harvested URLs, so every handler writes to
standard error.
"""

from __future__ import annotations

import logging
import logging.config

import structlog

_LOGGING_INITIALISED = False


def configure_logging(verbose: bool = False) -> structlog.BoundLogger:
    """Configure structlog + stdlib handlers and return application logger."""

    global _LOGGING_INITIALISED
    if not _LOGGING_INITIALISED:
        level = "DEBUG" if verbose else "INFO"
        logging.config.dictConfig(
            {
                "version": 1,
                "disable_existing_loggers": False,
                "formatters": {
                    "plain": {
                        "()": "pythonjsonlogger.json.JsonFormatter",
                        "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s",
                    }
                },
                "handlers": {
                    "console": {
                        "class": "logging.StreamHandler",
                        "level": level,
                        "formatter": "plain",
                        "stream": "ext://sys.stderr",
                    },
                },
                "loggers": {
                    "archive_harvester": {
                        "handlers": ["console"],
                        "level": level,
                        "propagate": False,
                    },
                },
            }
        )

        # Forward structlog events to stdlib logging; JSON rendering happens at handler level
        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.stdlib.add_log_level,
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )
        _LOGGING_INITIALISED = True
    elif verbose:
        set_verbose()
    return structlog.get_logger("archive_harvester")


def set_verbose() -> None:
    """Lower the application logger and its handlers to DEBUG."""

    py_logger = logging.getLogger("archive_harvester")
    py_logger.setLevel(logging.DEBUG)
    for handler in py_logger.handlers:
        handler.setLevel(logging.DEBUG)


def source_logger(source_name: str, verbose: bool = False) -> structlog.BoundLogger:
    """Return a logger bound to a specific archive source."""

    configure_logging(verbose)
    logger_name = f"archive_harvester.source.{source_name}"
    return structlog.get_logger(logger_name).bind(source=source_name)


__all__ = ["configure_logging", "set_verbose", "source_logger"]

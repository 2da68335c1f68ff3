"""Structured logging configuration for releasenfo."""

import logging
import sys
from pathlib import Path
from typing import Any, Optional

import structlog

from releasenfo.config import LoggingConfig

# Libraries that log every request at INFO
QUIET_LOGGERS = ("httpx", "httpcore")


def build_processors(config: LoggingConfig) -> list[Any]:
    """Build the structlog processor chain for a run.

    A single run is short, so console text is kept to level, event and
    context. Timestamps and logger names are only added when records are
    kept, i.e. JSON output or a log file.

    Args:
        config: Logging configuration

    Returns:
        Processor list ending in a renderer
    """
    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
    ]
    if config.format == "json" or config.output:
        processors += [
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
        ]
    processors += [
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if config.format == "json":
        processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty(), pad_event=0)
        )
    return processors


def _file_handler(output: str, level: int) -> Optional[logging.Handler]:
    log_path = Path(output)
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    except OSError as e:
        print(f"Warning: Could not create log file {log_path}: {e}", file=sys.stderr)
        return None
    handler.setLevel(level)
    return handler


def setup_logging(config: LoggingConfig) -> None:
    """Configure structured logging.

    Logs go to stderr so stdout only carries command output. A log file is
    added when ``config.output`` is set.

    Args:
        config: Logging configuration
    """
    structlog.configure(
        processors=build_processors(config),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    level = getattr(logging, config.level.upper())

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    handlers: list[logging.Handler] = [console_handler]

    if config.output and (file_handler := _file_handler(config.output, level)):
        handlers.append(file_handler)

    logging.basicConfig(format="%(message)s", level=level, handlers=handlers, force=True)

    # Lookup clients stay silent unless something goes wrong
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Get a logger instance.

    Args:
        name: Logger name (defaults to caller's module name)

    Returns:
        Structured logger instance
    """
    return structlog.get_logger(name)

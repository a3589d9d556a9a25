"""
Logging utilities for bet history ingestion.
Provides structured logging with different levels and output formats.
"""
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import structlog


def setup_logger(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    service_name: str = "bethistory",
    json_output: bool = True,
) -> Any:
    """
    Set up structured logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for log output
        service_name: Name of the service, bound to every event
        json_output: JSON lines when True, human-readable console output otherwise

    Returns:
        Configured structlog logger
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level.upper())
    )

    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="ISO"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(getattr(logging, log_level.upper()))
        logging.getLogger().addHandler(file_handler)

    return structlog.get_logger(service_name).bind(service=service_name)


def get_module_logger(module_name: str) -> Any:
    """Get a logger instance for a specific module"""
    return structlog.get_logger(module_name)


def _drop_event(logger: Any, method_name: str, event_dict: dict) -> dict:
    raise structlog.DropEvent


def null_logger() -> Any:
    """Logger that accepts every call and emits nothing.

    Used as the default for injected loggers so extraction has no output
    unless a caller asks for it.
    """
    return structlog.wrap_logger(structlog.ReturnLogger(), processors=[_drop_event])

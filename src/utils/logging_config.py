import logging
import sys
from pathlib import Path
from typing import Optional

import structlog

from src.config.config import Config, config


def get_log_file_path(settings: Config) -> Optional[Path]:
    """Get the log file path based on environment, or None when file logging is off."""
    if not settings.log_dir:
        return None

    logs_dir = Path(settings.log_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)
    return logs_dir / f"forecast_announcer_{settings.environment}.log"


def setup_logging(settings: Config = config):
    """
    Configure logging for the application.

    structlog events are routed through the stdlib root logger so that
    uvicorn and library records share the same handlers and rendering.
    Records are rendered as JSON when ``log_format`` is ``json`` and as
    aligned key/value console lines otherwise.
    """
    level = getattr(logging, settings.log_level.upper())

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
        structlog.processors.StackInfoRenderer(),
    ]

    if settings.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
        shared_processors.append(structlog.processors.format_exc_info)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear any existing handlers
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    log_file_path = get_log_file_path(settings)
    if log_file_path is not None:
        file_handler = logging.FileHandler(log_file_path, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    structlog.get_logger(__name__).info(
        "Logging configured",
        level=settings.log_level,
        format=settings.log_format,
        log_file=str(log_file_path) if log_file_path else None,
    )

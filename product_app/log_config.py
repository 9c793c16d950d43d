"""Loguru setup: console/file sinks plus forwarding of stdlib logging records."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from loguru import logger

from product_app.config import Settings

_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """Redirect standard 'logging' records (SQLAlchemy, uvicorn) to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(depth=2, exception=record.exc_info).bind(logger_name=record.name).log(
            level, record.getMessage()
        )


def configure_logging(settings: Settings) -> None:
    logger.remove()

    debug_traces = settings.environment != "production"

    logger.add(
        sys.stderr,
        level=settings.log_level.upper(),
        format=_FORMAT,
        colorize=True,
        backtrace=debug_traces,
        diagnose=debug_traces,
    )

    if settings.log_file:
        path = Path(settings.log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(path),
            level=settings.log_level.upper(),
            format=_FORMAT,
            rotation="10 MB",
            retention=5,
            enqueue=True,
            backtrace=debug_traces,
            diagnose=debug_traces,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    # Tune noise
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logger.info("Logging configured (level={}, environment={})", settings.log_level, settings.environment)

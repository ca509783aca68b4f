"""Logging configuration for the event router."""

import logging
import sys

from loguru import logger


class InterceptHandler(logging.Handler):
    """Intercept standard logging messages toward loguru."""

    def emit(self, record):
        # Get corresponding loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where the logged message originated
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(log_level: str | None = None) -> int:
    """Configure loguru logging for the router and the host's stdlib loggers.

    Args:
        log_level: Log level to use. Defaults to the ``log_level`` setting.

    Returns:
        The id of the added loguru sink
    """
    if log_level is None:
        from .settings import get_settings

        log_level = get_settings().log_level
    log_level = log_level.upper()

    logger.remove()  # Remove default handler
    sink_id = logger.add(
        sys.stderr,
        level=log_level,
        colorize=True,
    )

    logger.info(f"Log level set to: {log_level}")

    # Redirect all standard logging to loguru
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    logging.getLogger("event_router").setLevel(log_level)

    return sink_id

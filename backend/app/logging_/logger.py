import inspect
import logging
import os
import sys
from typing import Any

from loguru import logger

from app.core.config import settings


def dynamic_formatter(record: Any) -> str:
    base = "[{time:YYYY-MM-DD HH:mm:ss}] [{level}] {name}:{function}:{line} - {message}"

    extras = record.get("extra", {})
    if extras:
        base += " ("
        base += ", ".join(f"{key}={value}" for key, value in extras.items())
        base += ")"
    base += "\n"

    if record["exception"]:
        base += "{exception}"

    return base


def dynamic_console_formatter(record: Any) -> str:
    base = "[<green>{time:HH:mm:ss}</green>] <level>[{level}]</level> {name}:{function}:<blue>{line}</blue> - {message}\n"

    if record["exception"]:
        base += "{exception}"

    return base


class InterceptHandler(logging.Handler):
    """Forward records from the standard logging module to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find the caller from where the logged message originated
        frame, depth = inspect.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logger(log_dir: str | None = None, debug: bool | None = None):
    """
    Configure loguru sinks and route standard library logging through them.

    Parameters:
        log_dir (str | None): Directory for the rotating log files. No file
            sinks are added when unset.
        debug (bool | None): Log at DEBUG instead of INFO. Defaults to settings.DEBUG.
    """
    if log_dir is None:
        log_dir = settings.LOG_DIR
    if debug is None:
        debug = settings.DEBUG
    level = "DEBUG" if debug else "INFO"

    logger.remove()  # Remove default handler

    logger.add(
        sys.stderr,
        format=dynamic_console_formatter,
        level=level,
        backtrace=True,
        diagnose=debug,
        colorize=True,
    )

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        logger.add(
            os.path.join(log_dir, "app.log"),
            format=dynamic_formatter,
            level=level,
            rotation="00:00",  # Rotate daily at midnight
            compression="zip",  # Compress rotated logs
            enqueue=True,
            backtrace=True,
            diagnose=debug,
            retention="7 days",
        )
        logger.add(
            os.path.join(log_dir, "error.log"),
            format=dynamic_formatter,
            level="ERROR",
            rotation="00:00",
            compression="zip",
            enqueue=True,
            backtrace=True,
            diagnose=debug,
            retention="30 days",
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).handlers = [InterceptHandler()]
        logging.getLogger(name).propagate = False

    return logger

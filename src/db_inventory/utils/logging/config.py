# ABOUTME: Logging configuration using loguru
# ABOUTME: Dual-mode operation: interactive CLI vs production JSON logging

import logging
import os
import sys
import time
from pathlib import Path
from typing import Any

import structlog
from loguru import logger

# Libraries whose own loggers are held at WARNING so they don't drown out the scan diagnostics
QUIET_LOGGERS = ["httpx", "httpcore", "hpack", "asyncio", "anyio"]


class LoggingMode:
    """Logging mode constants."""

    INTERACTIVE = "interactive"
    PRODUCTION = "production"


def detect_logging_mode() -> str:
    """Detect whether we're running in interactive or production mode."""
    mode = os.getenv("DB_INVENTORY_LOG_MODE")
    if mode and mode.lower() in [LoggingMode.INTERACTIVE, LoggingMode.PRODUCTION]:
        return mode.lower()

    return LoggingMode.INTERACTIVE if sys.stdout.isatty() else LoggingMode.PRODUCTION


def setup_third_party_logging() -> None:
    """Configure third-party library logging to avoid CLI interference."""
    for logger_name in QUIET_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    logging.captureWarnings(True)
    logging.getLogger("py.warnings").setLevel(logging.ERROR)


def _loguru_logger_factory(*args):
    """Hand structlog events to loguru so they reach the configured sinks."""
    return logger.bind(module=args[0] if args else "db_inventory")


def setup_structlog() -> None:
    """Render structlog events as key=value text and emit them through loguru."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(key_order=["event"], sort_keys=True),
        ],
        logger_factory=_loguru_logger_factory,
        cache_logger_on_first_use=False,
    )


def _console_sink(message) -> None:
    sys.stderr.write(message)


def _ensure_log_dir(log_dir: Path, max_retries: int = 3) -> bool:
    """Create the log directory, returning False if it cannot be created."""
    for attempt in range(max_retries):
        try:
            log_dir.mkdir(exist_ok=True)
            return True
        except OSError:
            if attempt == max_retries - 1:
                return False
            time.sleep(0.01 * (attempt + 1))
    return False


def configure_logging(mode: str | None = None, log_level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging using loguru.

    Args:
        mode: Logging mode (interactive/production), auto-detected if None
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Custom log file path, uses default if None
    """
    if mode is None:
        mode = detect_logging_mode()

    setup_third_party_logging()
    setup_structlog()

    # Set standard library logging level for compatibility with tests
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    logging.getLogger().setLevel(numeric_level)

    # Remove default loguru handler
    logger.remove()

    log_dir = Path("logs")
    if mode == LoggingMode.INTERACTIVE and not _ensure_log_dir(log_dir):
        # Final fallback: switch to production mode (no file logging)
        mode = LoggingMode.PRODUCTION

    if mode == LoggingMode.PRODUCTION:
        # Production mode: JSON to stdout
        logger.add(sys.stdout, level=log_level, format="{time} | {level} | {name} | {message}", serialize=True)
        return

    # Interactive mode: logs to files, only warnings and errors on the console
    log_file_path = log_file or str(log_dir / "db-inventory.log")

    # Human-readable logs
    logger.add(
        log_file_path,
        level=log_level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        rotation="10 MB",
        retention="7 days",
    )

    # JSON logs for machine processing
    logger.add(
        log_dir / "db-inventory.json",
        level=log_level,
        format="{time} | {level} | {name} | {message}",
        serialize=True,
        rotation="10 MB",
        retention="7 days",
    )

    # Recovered errors on the console; resolved per message so the rich spinner can redirect it
    logger.add(
        _console_sink,
        level="WARNING",
        format="{level: <8} | {message}",
        colorize=False,
    )

    # Errors only
    logger.add(
        log_dir / "errors.log",
        level="ERROR",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        backtrace=True,
        diagnose=True,
    )


def get_logging_status() -> dict[str, Any]:
    """Get current logging configuration status."""
    mode = detect_logging_mode()
    log_dir = Path("logs")
    interactive = mode == LoggingMode.INTERACTIVE

    return {
        "mode": mode,
        "log_directory": str(log_dir.absolute()) if log_dir.exists() else None,
        "log_files": {
            "main": str(log_dir / "db-inventory.log") if interactive else None,
            "json": str(log_dir / "db-inventory.json") if interactive else None,
            "errors": str(log_dir / "errors.log") if interactive else None,
        },
        "third_party_suppressed": [*QUIET_LOGGERS, "py.warnings"],
    }

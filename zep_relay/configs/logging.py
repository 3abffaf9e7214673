"""
Zep Relay Logging Configuration

Configures logging based on environment variables:
- ZEP_RELAY_DEBUG: Enable debug logging (default: false)
- ZEP_RELAY_LOG_FILE: Log file path (default: $ZEP_RELAY_DATA_PATH/relay.log)
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

from zep_relay.configs.paths import get_data_path


def setup_logging(
    debug: Optional[bool] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Configure logging for the relay.

    Args:
        debug: Enable debug level. Defaults to ZEP_RELAY_DEBUG env var.
        log_file: Log file path. Defaults to ZEP_RELAY_LOG_FILE env var,
                  or $ZEP_RELAY_DATA_PATH/relay.log if not set.
                  Pass an empty string to log to stderr only.

    Returns:
        Root logger for zep_relay
    """
    if debug is None:
        debug = os.environ.get("ZEP_RELAY_DEBUG", "").lower() in ("true", "1", "yes")
    if log_file is None:
        log_file = os.environ.get("ZEP_RELAY_LOG_FILE")
        if log_file is None:
            log_file = str(get_data_path() / "relay.log")

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    level = logging.DEBUG if debug else logging.INFO

    # Component tags come from the logger name
    formatter = logging.Formatter(
        "%(asctime)s %(levelname)-5s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    logger = logging.getLogger("zep_relay")
    logger.setLevel(level)
    logger.handlers.clear()

    # stdout belongs to the stdio transport, so the console handler is stderr
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(formatter)
    if log_file:
        stderr_handler.setLevel(logging.WARNING)
    else:
        stderr_handler.setLevel(level)
    logger.addHandler(stderr_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        logger.addHandler(file_handler)
        logger.info(f"Logging to file: {log_file}")

    return logger


def get_logger(component: str) -> logging.Logger:
    """
    Get a logger for a specific component.

    Args:
        component: Component name (e.g., "relay", "tools", "http")

    Returns:
        Logger instance for the component
    """
    return logging.getLogger(f"zep_relay.{component}")

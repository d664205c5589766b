"""
Shared logging configuration for the Instagram SDK.

This module centralizes logging setup so that all components
(serialization, transport, client) log in a consistent way.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from .config import LoggingConfig


SDK_LOGGER_NAME = "instagram_sdk"


def configure_logging(config: Optional[LoggingConfig] = None) -> None:
    """
    Configure application-wide logging.

    This function is idempotent: calling it multiple times will not
    re-add handlers if they already exist. The level of the
    ``instagram_sdk`` logger tree is (re)applied on every call.
    """

    if config is None:
        config = LoggingConfig()

    sdk_logger = logging.getLogger(SDK_LOGGER_NAME)
    if config.package_log_level:
        sdk_logger.setLevel(config.package_log_level.upper())
    else:
        sdk_logger.setLevel(logging.NOTSET)

    log_dir = config.log_dir
    os.makedirs(log_dir, exist_ok=True)

    root_logger = logging.getLogger()

    # Avoid configuring logging twice.
    if getattr(root_logger, "_instagram_sdk_logging_configured", False):
        return

    root_logger.setLevel(config.log_level.upper())

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s [%(message)s]",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Error log
    error_handler = logging.FileHandler(os.path.join(log_dir, "error.log"))
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(formatter)

    # Warning log
    warning_handler = logging.FileHandler(os.path.join(log_dir, "warning.log"))
    warning_handler.setLevel(logging.WARNING)
    warning_handler.setFormatter(formatter)

    # Debug log
    debug_handler = logging.FileHandler(os.path.join(log_dir, "debug.log"))
    debug_handler.setLevel(logging.DEBUG)
    debug_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(config.log_level.upper())
    console_handler.setFormatter(formatter)

    root_logger.addHandler(error_handler)
    root_logger.addHandler(warning_handler)
    root_logger.addHandler(debug_handler)
    root_logger.addHandler(console_handler)

    root_logger._instagram_sdk_logging_configured = True  # type: ignore[attr-defined]


def get_logger(name: str) -> logging.Logger:
    """
    Convenience helper to get a logger for a given module or subsystem.
    """

    return logging.getLogger(name)

"""Logging configuration for the spanreplay application.

This module provides centralized logging setup and configuration
for consistent log output across the application with colored output.
"""

import logging

from colorama import Fore, Style, init

from spanreplay.config import Config

# Initialize colorama for cross-platform colored output
init(autoreset=True)

logger = logging.getLogger("spanreplay")


class ColoredFormatter(logging.Formatter):
    """Custom formatter that adds colors to log levels."""

    COLORS = {
        logging.DEBUG: Fore.CYAN,
        logging.INFO: Fore.BLUE,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.RED + Style.BRIGHT,
    }

    def format(self, record):
        original_format = super().format(record)

        color = self.COLORS.get(record.levelno, "")

        # Only the level name is colored
        if color:
            parts = original_format.split(" - ", 3)  # time, name, level, message
            if len(parts) >= 3:
                parts[2] = f"{color}{parts[2]}{Style.RESET_ALL}"
                return " - ".join(parts)

        return original_format


def init_logger(config: Config):
    """Initialize the logger with colored output."""
    log_level = config.log_level
    logger.setLevel(log_level)

    # Clear any existing handlers to avoid duplicates
    logger.handlers.clear()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(log_level)

    formatter = ColoredFormatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    # Prevent duplicate logs from propagating to root logger
    logger.propagate = False

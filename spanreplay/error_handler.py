"""Error handling utilities for the spanreplay application.

This module provides centralized error handling functions to ensure
consistent, user-friendly error messages throughout the application.
"""

import sys

from spanreplay.exceptions import SpanReplayError
from spanreplay.log import logger


def handle_error(error: Exception, exit_on_error: bool = False) -> None:
    """Handle an error by logging it and optionally exiting.

    Args:
        error: The exception that was raised
        exit_on_error: If True, exit the program after logging the error
    """

    if isinstance(error, SpanReplayError):
        logger.error(f"{error}")
    else:
        logger.error(f"Unexpected error: {error}")
        logger.debug("Stack trace:", exc_info=True)

    if exit_on_error:
        sys.exit(1)

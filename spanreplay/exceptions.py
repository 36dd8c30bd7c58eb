"""Custom exception classes for the spanreplay application.

This module defines the exception hierarchy used to report fatal failures
of a replay run: configuration problems, source database failures, row
decoding failures and exporter failures.
"""


class SpanReplayError(Exception):
    """Base exception class for all spanreplay errors.

    All custom exceptions in the application should inherit from this class.
    This allows for catching all spanreplay-specific errors with a single except clause.
    """

    def __init__(self, message: str, suggestion: str = ""):
        """Initialize the exception.

        Args:
            message: The error message describing what went wrong
            suggestion: Optional suggestion for how to fix the problem
        """
        self.message = message
        self.suggestion = suggestion
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return a formatted error message with suggestion if available."""
        if self.suggestion:
            return f"{self.message}{'.' if not self.message.endswith('.') else ''} {self.suggestion}"
        return self.message


class ConfigurationError(SpanReplayError):
    """Raised when there's an error in the configuration.

    This includes invalid configuration values, missing required settings,
    or improperly formatted configuration files.
    """

    pass


class SourceConnectionError(SpanReplayError):
    """Raised when the connection to the span source database fails."""

    pass


class SourceQueryError(SpanReplayError):
    """Raised when the span query against the source fails."""

    pass


class RecordDecodeError(SpanReplayError):
    """Raised when a fetched row cannot be mapped into a span record."""

    pass


class ExporterSetupError(SpanReplayError):
    """Raised when the OTLP exporter or tracer provider cannot be set up."""

    pass


class ExporterFlushError(SpanReplayError):
    """Raised when buffered spans could not be flushed before exit."""

    pass

"""Utility functions for the spanreplay application.

This module provides helpers for time conversion, URL and endpoint
validation and the parsing of captured query parameters.
"""

import datetime
import re

_EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)

# $1 = 'value', $2 = 'it''s'
_PARAMETER_PATTERN = re.compile(r"(\$\d+)\s*=\s*'((?:[^']|'')*)'")

_ENDPOINT_PATTERN = re.compile(r"^(?:https?://)?[A-Za-z0-9.\-_]+:\d{1,5}/?$")


def datetime_to_ns(dt: datetime.datetime) -> int:
    """Convert a datetime to integer nanoseconds since the Unix epoch.

    Naive datetimes are taken as UTC. The conversion is done on integers
    so no precision is lost.

    Args:
        dt: The datetime to convert

    Returns:
        Nanoseconds since 1970-01-01T00:00:00Z
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    delta = dt - _EPOCH
    seconds = delta.days * 86400 + delta.seconds
    return seconds * 1_000_000_000 + delta.microseconds * 1000


def parse_parameters(parameters: str) -> dict[str, str]:
    """Parse a captured parameter string into a mapping.

    Args:
        parameters: Parameter string like ``$1 = '1', $2 = 'abc'``

    Returns:
        Mapping of placeholder to value, e.g. ``{"$1": "1", "$2": "abc"}``

    Example:
        >>> parse_parameters("$1 = '1', $2 = 'it''s'")
        {'$1': '1', '$2': "it's"}
    """
    return {
        match.group(1): match.group(2).replace("''", "'")
        for match in _PARAMETER_PATTERN.finditer(parameters)
    }


def normalize_database_url(url: str) -> str:
    """Rewrite the libpq ``postgres://`` scheme to one SQLAlchemy accepts."""
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


def validate_endpoint(endpoint: str) -> bool:
    """Check that an OTLP endpoint looks like ``host:port``.

    Args:
        endpoint: Endpoint such as ``localhost:4317`` or ``http://otel:4317``

    Returns:
        True if the endpoint is well formed
    """
    match = _ENDPOINT_PATTERN.match(endpoint)
    if not match:
        return False
    port = int(endpoint.rstrip("/").rsplit(":", 1)[1])
    return 0 < port < 65536

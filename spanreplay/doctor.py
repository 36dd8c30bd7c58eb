"""Config validation and diagnostic reporting for spanreplay."""

from __future__ import annotations

from typing import Any

from spanreplay.config import Config
from spanreplay.exceptions import ConfigurationError
from spanreplay.source.database import build_query
from spanreplay.utils import validate_endpoint


def check_config(config: Config) -> dict[str, Any]:
    """Validate config and return a diagnostic report.

    Nothing is connected to; only the configured values are inspected.

    Returns a dict with:
        service_name: The service name spans are reported under
        endpoint: The configured collector endpoint
        relation: The relation spans are read from
        errors: List of critical errors (the run cannot succeed)
        warnings: List of warnings (the run may behave unexpectedly)
    """
    errors: list[dict[str, str]] = []
    warnings: list[dict[str, str]] = []

    if not config.source.database_url:
        errors.append(
            {
                "field": "source.database_url",
                "message": "No database URL configured and DATABASE_URL is unset",
            }
        )

    try:
        build_query(config.source.relation)
    except ConfigurationError as e:
        errors.append({"field": "source.relation", "message": str(e)})

    if not validate_endpoint(config.exporter.endpoint):
        errors.append(
            {
                "field": "exporter.endpoint",
                "message": (
                    f"Endpoint '{config.exporter.endpoint}'"
                    " is not in host:port form"
                ),
            }
        )

    if not config.exporter.insecure:
        warnings.append(
            {
                "field": "exporter.insecure",
                "message": (
                    "secure channel requested; the collector must"
                    " present a certificate trusted by this host"
                ),
            }
        )
    if not config.exporter.wait_for_collector:
        warnings.append(
            {
                "field": "exporter.wait_for_collector",
                "message": (
                    "an unreachable collector will only be noticed"
                    " when spans fail to export"
                ),
            }
        )

    return {
        "service_name": config.service_name,
        "endpoint": config.exporter.endpoint,
        "relation": config.source.relation,
        "errors": errors,
        "warnings": warnings,
    }

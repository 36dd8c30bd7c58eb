import logging
import os
from dataclasses import dataclass, field
from typing import Literal

import yaml

from spanreplay.exceptions import ConfigurationError

logger = logging.getLogger("spanreplay")

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_RELATION = "pg_tracing_consume_spans"
DEFAULT_ENDPOINT = "localhost:4317"
DEFAULT_SERVICE_NAME = "PostgreSQL-server"


@dataclass
class SourceConfig:
    database_url: str = ""
    relation: str = DEFAULT_RELATION
    connect_timeout: int = 1

    def __post_init__(self):
        if self.database_url is None:
            self.database_url = ""
        if not self.database_url:
            self.database_url = os.getenv("DATABASE_URL", "")
        if not self.relation:
            raise ValueError("relation must be provided")
        if self.connect_timeout <= 0:
            raise ValueError(
                f"connect_timeout must be positive, got {self.connect_timeout}"
            )


@dataclass
class ExporterConfig:
    endpoint: str = DEFAULT_ENDPOINT
    insecure: bool = True
    connect_timeout: int = 1
    export_timeout: int = 10
    wait_for_collector: bool = True
    flush_timeout_millis: int = 30000

    def __post_init__(self):
        if not self.endpoint:
            raise ValueError("endpoint must be provided")
        if self.connect_timeout <= 0:
            raise ValueError(
                f"connect_timeout must be positive, got {self.connect_timeout}"
            )
        if self.export_timeout <= 0:
            raise ValueError(
                f"export_timeout must be positive, got {self.export_timeout}"
            )
        if self.flush_timeout_millis <= 0:
            raise ValueError(
                "flush_timeout_millis must be positive, "
                f"got {self.flush_timeout_millis}"
            )


@dataclass
class Config:
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    service_name: str = DEFAULT_SERVICE_NAME
    source: SourceConfig = field(default_factory=SourceConfig)
    exporter: ExporterConfig = field(default_factory=ExporterConfig)

    def __post_init__(self):
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {self.log_level}")
        if not self.service_name:
            raise ValueError("service_name must be provided")
        if isinstance(self.source, dict):
            self.source = SourceConfig(**self.source)
        if isinstance(self.exporter, dict):
            self.exporter = ExporterConfig(**self.exporter)


def load_config(config_path: str | None = None) -> Config:
    """Load the configuration from a YAML file.

    The path is taken from the argument, then from ``SPANREPLAY_CONFIG``.
    Without either, the defaults are used (with ``DATABASE_URL`` from the
    environment).

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    config_path = config_path or os.getenv("SPANREPLAY_CONFIG")
    if not config_path:
        logger.debug("No config file given, using defaults")
        config_data = {}
    else:
        if not os.path.exists(config_path):
            raise ConfigurationError(
                f"Config file not found: {config_path}",
                "Pass an existing file with -c or unset SPANREPLAY_CONFIG",
            )
        try:
            with open(config_path) as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in {config_path}: {e}",
                "Check the file syntax",
            ) from e
        if not isinstance(config_data, dict):
            raise ConfigurationError(
                f"Config file {config_path} must contain a mapping",
            )
    try:
        return Config(**config_data)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Error loading config: {e}") from e

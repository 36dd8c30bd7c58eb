"""Tests for configuration loading and validation."""

import pytest

from spanreplay.config import (
    Config,
    ExporterConfig,
    SourceConfig,
    load_config,
)
from spanreplay.exceptions import ConfigurationError


class TestDefaults:
    """Defaults match a local pg_tracing + collector setup."""

    def test_default_config(self):
        config = Config()
        assert config.log_level == "INFO"
        assert config.service_name == "PostgreSQL-server"
        assert config.source.relation == "pg_tracing_consume_spans"
        assert config.exporter.endpoint == "localhost:4317"
        assert config.exporter.insecure is True
        assert config.exporter.export_timeout == 10

    def test_load_without_path_uses_defaults(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql://localhost/postgres")
        config = load_config()
        assert config.source.database_url == "postgresql://localhost/postgres"


class TestValidation:
    def test_invalid_log_level_raises(self):
        with pytest.raises(ValueError, match="log level"):
            Config(log_level="VERBOSE")

    def test_non_positive_timeout_raises(self):
        with pytest.raises(ValueError, match="connect_timeout"):
            SourceConfig(connect_timeout=0)

    def test_non_positive_export_timeout_raises(self):
        with pytest.raises(ValueError, match="export_timeout"):
            ExporterConfig(export_timeout=0)

    def test_empty_endpoint_raises(self):
        with pytest.raises(ValueError, match="endpoint"):
            ExporterConfig(endpoint="")

    def test_nested_dicts_converted(self):
        config = Config(
            source={"relation": "public.spans"},
            exporter={"endpoint": "otel:4317", "wait_for_collector": False},
        )
        assert isinstance(config.source, SourceConfig)
        assert config.source.relation == "public.spans"
        assert isinstance(config.exporter, ExporterConfig)
        assert config.exporter.wait_for_collector is False


class TestLoadConfig:
    """Tests for YAML loading."""

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "log_level: DEBUG\n"
            "service_name: pg-prod\n"
            "source:\n"
            "  database_url: postgresql://db/postgres\n"
            "exporter:\n"
            "  endpoint: collector:4317\n"
        )
        config = load_config(str(path))
        assert config.log_level == "DEBUG"
        assert config.service_name == "pg-prod"
        assert config.source.database_url == "postgresql://db/postgres"
        assert config.exporter.endpoint == "collector:4317"

    def test_path_from_environment(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text("service_name: from-env\n")
        monkeypatch.setenv("SPANREPLAY_CONFIG", str(path))
        assert load_config().service_name == "from-env"

    def test_environment_database_url_fills_empty_value(
        self, tmp_path, monkeypatch
    ):
        path = tmp_path / "config.yaml"
        path.write_text("source:\n  database_url: ''\n")
        monkeypatch.setenv("DATABASE_URL", "postgresql://env/postgres")
        assert load_config(str(path)).source.database_url == (
            "postgresql://env/postgres"
        )

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(str(path)) == Config()

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(str(tmp_path / "missing.yaml"))

    def test_invalid_yaml_raises(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("source: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_config(str(path))

    def test_unknown_key_raises(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("method: ssh\n")
        with pytest.raises(ConfigurationError, match="Error loading config"):
            load_config(str(path))

    def test_invalid_value_raises(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("log_level: LOUD\n")
        with pytest.raises(ConfigurationError, match="LOUD"):
            load_config(str(path))

    def test_non_mapping_raises(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(str(path))

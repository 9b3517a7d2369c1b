"""
Tests for LoggingConfig.
"""

import pytest

from rest_client.core.logging.config import LoggingConfig, LogLevel, LogFormat


class TestLoggingConfig:
    """Tests for LoggingConfig dataclass."""

    def test_defaults(self):
        config = LoggingConfig()

        assert config.level == LogLevel.INFO
        assert config.format == LogFormat.TEXT
        assert config.enable_console is True
        assert config.enable_file is False
        assert config.file_path is None
        assert config.max_bytes == 10 * 1024 * 1024
        assert config.backup_count == 5
        assert config.enable_correlation_id is True
        assert config.extra_fields == {}

    def test_string_values_coerced(self):
        config = LoggingConfig(level="debug", format="JSON")

        assert config.level == LogLevel.DEBUG
        assert config.format == LogFormat.JSON

    def test_invalid_level(self):
        with pytest.raises(ValueError):
            LoggingConfig(level="verbose")

    def test_file_requires_path(self):
        with pytest.raises(ValueError, match="file_path is required"):
            LoggingConfig(enable_file=True)

    def test_invalid_rotation(self):
        with pytest.raises(ValueError, match="max_bytes"):
            LoggingConfig(max_bytes=0)
        with pytest.raises(ValueError, match="backup_count"):
            LoggingConfig(backup_count=-1)

    def test_immutable(self):
        config = LoggingConfig()
        with pytest.raises(Exception):  # frozen dataclass
            config.level = LogLevel.DEBUG

    def test_create(self):
        config = LoggingConfig.create(
            level="warning",
            format="colored",
            enable_console=False,
            enable_file=True,
            file_path="/tmp/rest_client.log",
            extra_fields={"service": "billing"},
            backup_count=2,
        )

        assert config.level == LogLevel.WARNING
        assert config.format == LogFormat.COLORED
        assert config.enable_console is False
        assert config.file_path == "/tmp/rest_client.log"
        assert config.extra_fields == {"service": "billing"}
        assert config.backup_count == 2

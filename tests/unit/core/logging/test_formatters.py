"""
Tests for log formatters.
"""

import json
import logging
import sys

import pytest

from rest_client.core.logging.formatters import (
    ColoredFormatter,
    JSONFormatter,
    TextFormatter,
    get_formatter,
)


def _record(msg="Executing request", level=logging.INFO, exc_info=None, **extra):
    record = logging.LogRecord(
        name="rest_client.api.example.com",
        level=level,
        pathname=__file__,
        lineno=10,
        msg=msg,
        args=None,
        exc_info=exc_info,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_basic_fields(self):
        data = json.loads(JSONFormatter().format(_record()))

        assert data["message"] == "Executing request"
        assert data["level"] == "INFO"
        assert data["logger"] == "rest_client.api.example.com"
        assert data["timestamp"].endswith("+00:00")

    def test_extra_fields_included(self):
        data = json.loads(JSONFormatter().format(_record(method="POST", status_code=201)))

        assert data["method"] == "POST"
        assert data["status_code"] == 201

    def test_non_serializable_values_stringified(self):
        data = json.loads(JSONFormatter().format(_record(payload=object())))
        assert data["payload"].startswith("<object object")

    def test_private_attributes_skipped(self):
        data = json.loads(JSONFormatter().format(_record(_internal="x")))
        assert "_internal" not in data

    def test_exception_included(self):
        try:
            raise ValueError("bad body")
        except ValueError:
            record = _record(level=logging.ERROR, exc_info=sys.exc_info())

        data = json.loads(JSONFormatter().format(record))
        assert "ValueError: bad body" in data["exception"]


class TestTextFormatter:
    """Tests for TextFormatter."""

    def test_format(self):
        output = TextFormatter().format(_record(method="GET"))

        assert "[INFO]" in output
        assert "[rest_client.api.example.com]" in output
        assert "Executing request" in output
        assert output.endswith("method=GET")

    def test_without_extra(self):
        assert TextFormatter().format(_record()).endswith("Executing request")


class TestColoredFormatter:
    """Tests for ColoredFormatter."""

    def test_level_colored(self):
        output = ColoredFormatter().format(_record(level=logging.ERROR))
        assert "\033[31mERROR\033[0m" in output

    def test_record_not_modified(self):
        record = _record(level=logging.WARNING)
        ColoredFormatter().format(record)
        assert record.levelname == "WARNING"


class TestGetFormatter:
    """Tests for get_formatter."""

    @pytest.mark.parametrize("name,expected", [
        ("json", JSONFormatter),
        ("text", TextFormatter),
        ("COLORED", ColoredFormatter),
    ])
    def test_known_formats(self, name, expected):
        assert type(get_formatter(name)) is expected

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unknown format type"):
            get_formatter("xml")

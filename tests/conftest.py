"""
Pytest configuration and fixtures for http-rest-client tests.
"""

from typing import Any

import pytest
import responses as responses_lib

from rest_client.core.config import Configuration
from rest_client.core.context import RequestMethod
from rest_client.core.logging.config import LoggingConfig
from rest_client.core.request import Request
from rest_client.core.rest_client import RestClient


class SimpleRequest(Request[str]):
    """Request with fixed endpoint, method and body; parse_response returns the body."""

    def __init__(self, endpoint: str, method: Any = RequestMethod.GET, body: Any = None):
        self._endpoint = endpoint
        self._method = method
        self._body = body

    @property
    def api_endpoint(self) -> str:
        return self._endpoint

    @property
    def request_method(self):
        return self._method

    @property
    def request_body(self) -> Any:
        return self._body

    def parse_response(self, response_str: str) -> str:
        return response_str


@pytest.fixture
def api_host():
    """API host for testing."""
    return "https://api.example.com"


@pytest.fixture
def mock_responses():
    """Mock HTTP responses using responses library."""
    with responses_lib.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def make_request():
    """Factory for SimpleRequest instances."""
    return SimpleRequest


@pytest.fixture
def configuration(api_host):
    """Configuration with defaults."""
    return Configuration(api_host=api_host, request_timeout_in_seconds=10)


@pytest.fixture
def client(configuration):
    """RestClient instance for testing."""
    client = RestClient(configuration)
    yield client
    client.close()


@pytest.fixture
def logging_config_with_file(tmp_path):
    """
    LoggingConfig with file logging into a temporary directory.
    """
    return LoggingConfig.create(
        level="DEBUG",
        format="json",
        enable_console=False,
        enable_file=True,
        file_path=str(tmp_path / "rest_client.log")
    )

"""
Tests for AuthInterceptor and NoopRequestInterceptor.
"""

import pytest
import responses

from rest_client.core.config import Configuration, RequestHeader
from rest_client.core.context import RequestContext, RequestMethod
from rest_client.core.rest_client import RestClient
from rest_client.interceptors import AuthInterceptor, NoopRequestInterceptor, RequestInterceptor

CONTEXT = RequestContext("https://api.example.com/v1/items", RequestMethod.GET)


class TestNoopRequestInterceptor:
    """Default interceptor changes nothing."""

    def test_headers_untouched(self):
        headers = [RequestHeader("Accept", "text/plain")]
        NoopRequestInterceptor().modify_headers(headers, CONTEXT)
        assert headers == [RequestHeader("Accept", "text/plain")]

    def test_parameters_untouched(self):
        parameters = {"name": "widget"}
        NoopRequestInterceptor().modify_request_parameters(parameters, CONTEXT)
        assert parameters == {"name": "widget"}

    def test_base_class_is_abstract(self):
        with pytest.raises(TypeError):
            RequestInterceptor()


class TestAuthInterceptor:
    """Test AuthInterceptor."""

    def test_bearer_token(self):
        headers = []
        AuthInterceptor("bearer", "abc123").modify_headers(headers, CONTEXT)
        assert headers == [RequestHeader("Authorization", "Bearer abc123")]

    def test_api_key(self):
        headers = []
        AuthInterceptor("api_key", "key-1").modify_headers(headers, CONTEXT)
        assert headers == [RequestHeader("X-API-Key", "key-1")]

    def test_auth_type_case_insensitive(self):
        assert AuthInterceptor("BEARER", "t").auth_type == "bearer"

    def test_unknown_auth_type(self):
        with pytest.raises(ValueError, match="Unknown auth type"):
            AuthInterceptor("digest", "t")

    def test_replaces_existing_header(self):
        headers = [
            RequestHeader("authorization", "Basic old"),
            RequestHeader("Accept", "text/plain"),
        ]
        AuthInterceptor("bearer", "new").modify_headers(headers, CONTEXT)

        assert headers == [
            RequestHeader("Accept", "text/plain"),
            RequestHeader("Authorization", "Bearer new"),
        ]

    def test_no_token_no_header(self):
        headers = [RequestHeader("Accept", "text/plain")]
        AuthInterceptor("bearer").modify_headers(headers, CONTEXT)
        assert headers == [RequestHeader("Accept", "text/plain")]

    def test_update_token(self):
        interceptor = AuthInterceptor("bearer", "old")
        interceptor.update_token("fresh")

        headers = []
        interceptor.modify_headers(headers, CONTEXT)
        assert interceptor.token == "fresh"
        assert headers == [RequestHeader("Authorization", "Bearer fresh")]

    def test_parameters_untouched(self):
        parameters = {"name": "widget"}
        AuthInterceptor("bearer", "t").modify_request_parameters(parameters, CONTEXT)
        assert parameters == {"name": "widget"}

    @responses.activate
    def test_header_sent_by_client(self, api_host, make_request):
        responses.add(responses.POST, f"{api_host}/v1/items", body="ok")
        config = Configuration.create(api_host, interceptor=AuthInterceptor("bearer", "abc123"))

        with RestClient(config) as client:
            client.submit_request(make_request("/v1/items", RequestMethod.POST, {"name": "widget"}))

        request = responses.calls[0].request
        assert request.headers["Authorization"] == "Bearer abc123"
        assert request.body == b"name=widget"

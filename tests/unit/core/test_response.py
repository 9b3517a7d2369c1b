"""
Tests for RestResponse and RestResponseHandler.
"""

import pytest
import requests

from rest_client.core.response import RestResponse, RestResponseHandler, _declared_charset


def _make_response(content: bytes, status: int = 200, content_type: str = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response._content = content
    if content_type:
        response.headers["Content-Type"] = content_type
    return response


class TestRestResponse:
    """Test RestResponse model."""

    @pytest.mark.parametrize("status,expected", [
        (200, True),
        (204, True),
        (299, True),
        (301, False),
        (404, False),
        (500, False),
    ])
    def test_is_success(self, status, expected):
        assert RestResponse(status, "").is_success is expected

    def test_headers_read_only(self):
        response = RestResponse(200, "", {"X-Id": "1"})
        with pytest.raises(TypeError):
            response.headers["X-Id"] = "2"

    def test_headers_copied(self):
        headers = {"X-Id": "1"}
        response = RestResponse(200, "", headers)
        headers["X-Id"] = "2"
        assert response.headers["X-Id"] == "1"


class TestRestResponseHandler:
    """Test default response handler."""

    def test_utf8_by_default(self):
        result = RestResponseHandler()(_make_response("привет".encode("utf-8")))

        assert result.status_code == 200
        assert result.body == "привет"

    def test_declared_charset(self):
        raw = "привет".encode("cp1251")
        result = RestResponseHandler()(_make_response(raw, content_type="text/plain; charset=windows-1251"))
        assert result.body == "привет"

    def test_empty_body(self):
        result = RestResponseHandler()(_make_response(b"", status=204))
        assert result.body == ""
        assert result.status_code == 204

    def test_invalid_bytes_raise(self):
        with pytest.raises(UnicodeDecodeError):
            RestResponseHandler()(_make_response(b"\xff\xfe\xfa", content_type="text/plain"))

    def test_response_headers_kept(self):
        result = RestResponseHandler()(_make_response(b"ok", content_type="text/plain"))
        assert result.headers["Content-Type"] == "text/plain"


@pytest.mark.parametrize("content_type,expected", [
    ("text/plain; charset=UTF-8", "UTF-8"),
    ('application/json; charset="iso-8859-1"', "iso-8859-1"),
    ("text/html; Charset=cp1251; q=1", "cp1251"),
    ("application/json", ""),
    ("", ""),
])
def test_declared_charset_parsing(content_type, expected):
    assert _declared_charset(content_type) == expected

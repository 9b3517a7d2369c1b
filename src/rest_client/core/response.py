# src/rest_client/core/response.py
"""
Response model and default response handler.

A response handler is any callable taking a ``requests.Response`` and
returning the caller's result type. RestClient uses RestResponseHandler
unless another handler is passed to submit_request().
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Mapping, TypeVar

import requests

T = TypeVar("T")

ResponseHandler = Callable[[requests.Response], T]


@dataclass(frozen=True)
class RestResponse:
    """
    Status code and raw body of a server response.

    Attributes:
        status_code: HTTP status code
        body: Response body decoded as text
        headers: Response headers (read-only)

    Example:
        >>> response = RestResponse(200, '{"ok": true}')
        >>> response.is_success
        True
    """

    status_code: int
    body: str
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self):
        """Freeze headers."""
        if not isinstance(self.headers, MappingProxyType):
            object.__setattr__(self, 'headers', MappingProxyType(dict(self.headers)))

    @property
    def is_success(self) -> bool:
        """True for 2xx status codes."""
        return 200 <= self.status_code < 300


class RestResponseHandler:
    """
    Converts ``requests.Response`` into RestResponse.

    The body is decoded as UTF-8 unless the server declared another charset.
    Non-2xx responses are returned as-is; status handling is up to the caller.
    """

    default_encoding = "utf-8"

    def __call__(self, response: requests.Response) -> RestResponse:
        content = response.content
        encoding = _declared_charset(response.headers.get('Content-Type', '')) or self.default_encoding
        # strict decoding: a body in the wrong charset is a parsing failure
        body = content.decode(encoding) if content else ""

        return RestResponse(
            status_code=response.status_code,
            body=body,
            headers=dict(response.headers),
        )


def _declared_charset(content_type: str) -> str:
    """Return charset parameter of a Content-Type header, or empty string."""
    for param in content_type.split(';')[1:]:
        key, _, value = param.strip().partition('=')
        if key.strip().lower() == 'charset':
            return value.strip().strip('"\'')
    return ""

"""Request method and per-call context passed to interceptors."""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class RequestMethod(str, Enum):
    """HTTP methods supported by RestClient."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @classmethod
    def coerce(cls, value: Union['RequestMethod', str]) -> 'RequestMethod':
        """
        Convert a method name to RequestMethod.

        Args:
            value: RequestMethod member or method name (case-insensitive)

        Returns:
            RequestMethod member

        Raises:
            ValueError: If value is not one of GET, POST, PUT, DELETE

        Example:
            >>> RequestMethod.coerce("post")
            <RequestMethod.POST: 'POST'>
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls(value.upper())
        raise ValueError(f"Unknown Request Method: {value!r}")


@dataclass(frozen=True)
class RequestContext:
    """Context passed to interceptor hooks for a single dispatch call.

    Attributes:
        url: Fully resolved request URL
        method: HTTP method of the request

    Example:
        >>> ctx = RequestContext('https://api.example.com/v1/ping', RequestMethod.GET)
        >>> ctx.method is RequestMethod.GET
        True
    """

    url: str
    method: RequestMethod

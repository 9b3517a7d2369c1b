"""Core REST Client модули."""

from .config import (
    Configuration,
    ProxyConfiguration,
    RequestHeader,
)
from .context import RequestContext, RequestMethod
from .exceptions import (
    RestException,
    ConnectionException,
    ResultParsingException,
    ConfigurationError,
    ClientClosedError,
    classify_transport_exception,
)
from .request import Request
from .response import RestResponse, RestResponseHandler
from .transport import AuthContext, ScopedBasicAuth, Transport
from .rest_client import RestClient

__all__ = [
    # Config
    "Configuration",
    "ProxyConfiguration",
    "RequestHeader",
    # Request model
    "Request",
    "RequestContext",
    "RequestMethod",
    "RestResponse",
    "RestResponseHandler",
    # Transport
    "AuthContext",
    "ScopedBasicAuth",
    "Transport",
    # Core
    "RestClient",
    # Exceptions
    "RestException",
    "ConnectionException",
    "ResultParsingException",
    "ConfigurationError",
    "ClientClosedError",
    "classify_transport_exception",
]

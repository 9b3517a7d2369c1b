"""REST Client - request dispatch over requests with interceptors and a narrow error taxonomy."""

import logging
from importlib.metadata import version, PackageNotFoundError

from .core.rest_client import RestClient
from .core.config import (
    Configuration,
    ProxyConfiguration,
    RequestHeader,
)
from .core.context import RequestContext, RequestMethod
from .core.request import Request
from .core.response import RestResponse, RestResponseHandler
from .core.transport import AuthContext, Transport
from .core.exceptions import (
    RestException,
    ConnectionException,
    ResultParsingException,
    ConfigurationError,
    ClientClosedError,
)
from .interceptors.interceptor import RequestInterceptor, NoopRequestInterceptor
from .interceptors.auth_interceptor import AuthInterceptor

# Users can configure logging themselves using logging.getLogger('rest_client')
logging.getLogger('rest_client').addHandler(logging.NullHandler())

try:
    __version__ = version("http-rest-client")
except PackageNotFoundError:
    # Package is not installed (development mode)
    __version__ = "0.0.0-dev"

__all__ = [
    # Core
    "RestClient",
    "Transport",
    "AuthContext",

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

    # Interceptors
    "RequestInterceptor",
    "NoopRequestInterceptor",
    "AuthInterceptor",

    # Exceptions
    "RestException",
    "ConnectionException",
    "ResultParsingException",
    "ConfigurationError",
    "ClientClosedError",

    # Version
    "__version__",
]

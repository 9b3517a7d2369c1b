"""Request interceptors."""

from .interceptor import RequestInterceptor, NoopRequestInterceptor
from .auth_interceptor import AuthInterceptor

__all__ = [
    "RequestInterceptor",
    "NoopRequestInterceptor",
    "AuthInterceptor",
]

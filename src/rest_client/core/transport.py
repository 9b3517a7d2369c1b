# src/rest_client/core/transport.py
"""
HTTP transport for RestClient.

AuthContext is resolved once from Configuration and never changes afterwards.
Transport hands every thread its own requests.Session built from that
context, so concurrent dispatch calls never share a session.
"""
import threading
import weakref
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Set, TypeVar, Union
from urllib.parse import urlparse

import requests
from requests.adapters import HTTPAdapter
from requests.auth import HTTPBasicAuth

from .config import Configuration
from .exceptions import ClientClosedError

T = TypeVar("T")

_DEFAULT_PORTS = {'http': 80, 'https': 443}


def _host_and_port(url: str) -> tuple:
    """Return (hostname, port) of a URL, using the scheme's default port."""
    parsed = urlparse(url)
    port = parsed.port or _DEFAULT_PORTS.get(parsed.scheme)
    return (parsed.hostname or '').lower(), port


class ScopedBasicAuth(HTTPBasicAuth):
    """
    Preemptive Basic authentication bound to a single host and port.

    The Authorization header is attached up front, without waiting for a 401
    challenge, but only to requests aimed at the configured API host. Other
    hosts (e.g. after a cross-host redirect) never see the credentials.

    Example:
        >>> auth = ScopedBasicAuth("user", "secret", "https://api.example.com")
        >>> session.auth = auth
    """

    def __init__(self, username: str, password: str, scope_url: str):
        super().__init__(username, password)
        self.scope = _host_and_port(scope_url)

    def __call__(self, r: requests.PreparedRequest) -> requests.PreparedRequest:
        if _host_and_port(r.url) == self.scope:
            return super().__call__(r)
        return r

    def __eq__(self, other):
        return super().__eq__(other) and self.scope == getattr(other, 'scope', None)

    def __ne__(self, other):
        return not self == other


@dataclass(frozen=True)
class AuthContext:
    """
    Immutable authentication and proxy settings shared by all sessions.

    Attributes:
        auth: Preemptive Basic auth for the API host (None if not configured)
        proxies: requests-style proxies mapping, credentials embedded in the URL
        verify: CA bundle path, True (system store) or False (no verification)
    """

    auth: Optional[ScopedBasicAuth] = None
    proxies: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    verify: Union[bool, str] = True

    @classmethod
    def from_configuration(cls, configuration: Configuration) -> 'AuthContext':
        """
        Resolve auth context from configuration.

        Args:
            configuration: Client configuration

        Returns:
            AuthContext instance

        Example:
            >>> ctx = AuthContext.from_configuration(Configuration("https://api.example.com"))
            >>> ctx.auth is None
            True
        """
        auth = None
        if configuration.is_basic_auth_enabled:
            auth = ScopedBasicAuth(
                configuration.basic_auth_username,
                configuration.basic_auth_password or "",
                configuration.api_host,
            )

        proxies = {}
        if configuration.proxy is not None:
            proxy_url = configuration.proxy.proxy_url
            proxies = {'http': proxy_url, 'https': proxy_url}

        if configuration.ignore_invalid_ssl_certificates:
            verify = False
        elif configuration.trust_store_file:
            verify = configuration.trust_store_file
        else:
            verify = True

        return cls(auth=auth, proxies=MappingProxyType(proxies), verify=verify)


class Transport:
    """
    Thread-safe executor of HTTP calls.

    Each thread lazily gets its own requests.Session configured from the
    AuthContext. close() closes sessions created by every thread and is
    safe to call multiple times.

    Example:
        >>> transport = Transport.from_configuration(config)
        >>> status = transport.execute("GET", url, {}, response_handler=lambda r: r.status_code)
        >>> transport.close()
    """

    def __init__(self, auth_context: AuthContext, timeout: Optional[float] = None):
        """
        Args:
            auth_context: Resolved authentication/proxy settings
            timeout: Timeout (seconds) applied to every call
        """
        self.auth_context = auth_context
        self.timeout = timeout
        self._local = threading.local()

        # Track sessions from all threads (weak references, so finished threads don't leak)
        self._sessions: Set[weakref.ref] = set()
        self._sessions_lock = threading.Lock()
        self._closed = False

    @classmethod
    def from_configuration(cls, configuration: Configuration) -> 'Transport':
        return cls(
            AuthContext.from_configuration(configuration),
            timeout=configuration.request_timeout_in_seconds,
        )

    def _create_session(self) -> requests.Session:
        """Create session bound to the auth context."""
        session = requests.Session()

        # No transport-level retries: a call either succeeds or fails once
        adapter = HTTPAdapter(max_retries=0)
        session.mount('http://', adapter)
        session.mount('https://', adapter)

        session.auth = self.auth_context.auth
        session.verify = self.auth_context.verify

        # Proxies come only from configuration, not from HTTP(S)_PROXY env vars
        session.trust_env = False
        session.proxies.update(self.auth_context.proxies)

        return session

    @property
    def session(self) -> requests.Session:
        """Session of the current thread, created on first access."""
        session = getattr(self._local, 'session', None)
        if session is None:
            session = self._create_session()
            self._local.session = session
            with self._sessions_lock:
                self._sessions.add(weakref.ref(session, self._forget))
        return session

    def _forget(self, ref: weakref.ref):
        with self._sessions_lock:
            self._sessions.discard(ref)

    @property
    def closed(self) -> bool:
        return self._closed

    def execute(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes] = None,
        params: Optional[Mapping[str, str]] = None,
        response_handler: Optional[Callable[[requests.Response], T]] = None,
    ) -> Any:
        """
        Execute one HTTP call.

        Args:
            method: HTTP method
            url: Absolute URL
            headers: Headers to send
            body: Encoded request body (None = no body)
            params: Query string parameters
            response_handler: Converts requests.Response into the result

        Returns:
            Result of response_handler, or the raw requests.Response

        Raises:
            Whatever requests or the response handler raise; callers classify.
        """
        if self._closed:
            raise ClientClosedError("Transport has been closed")

        response = self.session.request(
            method=method,
            url=url,
            headers=dict(headers),
            data=body,
            params=dict(params) if params else None,
            timeout=self.timeout,
        )
        try:
            if response_handler is None:
                return response
            return response_handler(response)
        finally:
            if response_handler is not None:
                response.close()

    def get_active_sessions_count(self) -> int:
        with self._sessions_lock:
            return sum(1 for ref in self._sessions if ref() is not None)

    def close(self):
        """
        Close sessions from all threads.

        Safe to call multiple times.
        """
        self._closed = True

        with self._sessions_lock:
            sessions = [ref() for ref in self._sessions]
            self._sessions.clear()

        errors = []
        for session in sessions:
            if session is None:
                continue
            try:
                session.close()
            except Exception as exc:
                errors.append(exc)

        self._local = threading.local()

        if errors:
            raise errors[0]

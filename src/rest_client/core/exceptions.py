"""
Иерархия исключений REST Client.

Классификация:
- ConnectionException - не удалось достучаться до сервера или завершить handshake
- ResultParsingException - сервер ответил, но тело ответа не удалось разобрать
- RestException - всё остальное (в том числе ошибки программиста)
"""

import http.client
import ssl
from typing import Optional

import requests
from urllib3.exceptions import IncompleteRead, InvalidChunkLength, ProtocolError

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class RestException(Exception):
    """
    Базовое исключение REST Client.

    Args:
        message: Сообщение об ошибке
        url: URL запроса (если известен)
        cause: Исходное исключение транспорта
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        cause: Optional[BaseException] = None
    ):
        self.message = message
        self.url = url
        self.cause = cause

        full_message = message
        if url:
            full_message += f" (url: {url})"
        super().__init__(full_message)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ОШИБКИ ВЫПОЛНЕНИЯ ЗАПРОСА
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ConnectionException(RestException):
    """
    Не удалось подключиться к серверу или завершить handshake.

    Примеры:
    - Connection refused / reset
    - Ошибка TLS handshake
    - Нарушение протокола HTTP
    """
    pass

class ResultParsingException(RestException):
    """
    Сервер ответил, но тело ответа не удалось интерпретировать.

    Примеры:
    - Битое сжатие
    - Обрезанное тело или битая chunked-разметка
    - Невалидная кодировка
    - Ответ не соответствует ожидаемому формату
    """
    pass

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ОШИБКИ ИСПОЛЬЗОВАНИЯ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ConfigurationError(RestException):
    """Ошибка конфигурации."""
    pass

class ClientClosedError(RestException):
    """Запрос к клиенту, который не инициализирован или уже закрыт."""

    def __init__(self, message: str = "RestClient is not initialized or has been closed"):
        super().__init__(message)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# УТИЛИТЫ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

# Ошибки requests, означающие обрыв соединения, нарушение протокола
# или ошибку handshake (SSLError, ProxyError, ConnectTimeout входят в ConnectionError)
_REQUESTS_CONNECTION_ERRORS = (
    requests.exceptions.ConnectionError,
    requests.exceptions.TooManyRedirects,
    requests.exceptions.InvalidURL,
    requests.exceptions.InvalidSchema,
    requests.exceptions.MissingSchema,
    requests.exceptions.InvalidHeader,
    requests.exceptions.URLRequired,
)

# Низкоуровневые ошибки сокета и протокола
_SOCKET_ERRORS = (
    ProtocolError,
    http.client.HTTPException,
    ssl.SSLError,
    OSError,
)

# Тело ответа оборвано или нарушена chunked-разметка: сервер ответил, но ответ не дочитан
_INCOMPLETE_BODY_ERRORS = (
    http.client.IncompleteRead,
    IncompleteRead,
    InvalidChunkLength,
)

def _nested_exceptions(exc: BaseException):
    """Обход вложенных исключений: args (так urllib3 и requests оборачивают причину) и __cause__."""
    pending = [exc]
    seen = set()
    while pending:
        current = pending.pop(0)
        if id(current) in seen:
            continue
        seen.add(id(current))
        yield current
        pending.extend(arg for arg in current.args if isinstance(arg, BaseException))
        if current.__cause__ is not None:
            pending.append(current.__cause__)

def _is_socket_failure_while_reading(exc: requests.exceptions.ChunkedEncodingError) -> bool:
    """
    Ошибка чтения тела вызвана сокетом (reset, broken pipe, SSL), а не самим ответом.

    Обрезанное тело и битая chunked-разметка считаются ошибкой разбора ответа.
    """
    nested = list(_nested_exceptions(exc))[1:]
    if any(isinstance(e, _INCOMPLETE_BODY_ERRORS) for e in nested):
        return False
    return any(
        isinstance(e, OSError) and not isinstance(e, requests.exceptions.RequestException)
        for e in nested
    )

def classify_transport_exception(
    exc: BaseException,
    url: Optional[str] = None
) -> RestException:
    """
    Конвертировать исключение транспорта в наше исключение.

    Args:
        exc: Исключение, возникшее при выполнении запроса
        url: URL запроса

    Returns:
        ConnectionException или ResultParsingException с сохранённой причиной.
        Наши собственные исключения возвращаются как есть.

    Examples:
        >>> exc = requests.exceptions.ConnectionError("reset by peer")
        >>> our_exc = classify_transport_exception(exc, "https://example.com")
        >>> assert isinstance(our_exc, ConnectionException)
        >>> assert our_exc.cause is exc
    """

    if isinstance(exc, RestException):
        return exc

    message = str(exc) or exc.__class__.__name__

    # RequestException наследует OSError, поэтому проверяется первым
    if isinstance(exc, requests.exceptions.RequestException):
        # ReadTimeout: соединение установлено, но тело не удалось дочитать
        if isinstance(exc, requests.exceptions.ReadTimeout):
            return ResultParsingException(message, url=url, cause=exc)
        elif isinstance(exc, requests.exceptions.ChunkedEncodingError):
            if _is_socket_failure_while_reading(exc):
                return ConnectionException(message, url=url, cause=exc)
            return ResultParsingException(message, url=url, cause=exc)
        elif isinstance(exc, _REQUESTS_CONNECTION_ERRORS):
            return ConnectionException(message, url=url, cause=exc)
        else:
            # ContentDecodingError и прочие ошибки чтения ответа
            return ResultParsingException(message, url=url, cause=exc)

    elif isinstance(exc, _INCOMPLETE_BODY_ERRORS):
        return ResultParsingException(message, url=url, cause=exc)

    elif isinstance(exc, _SOCKET_ERRORS):
        return ConnectionException(message, url=url, cause=exc)

    else:
        return ResultParsingException(message, url=url, cause=exc)

# src/rest_client/core/rest_client.py
import threading
import time
import uuid
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, TYPE_CHECKING
from urllib.parse import urlencode, urlparse

import requests

from .config import Configuration, RequestHeader
from .context import RequestContext, RequestMethod
from .exceptions import (
    ClientClosedError,
    ConfigurationError,
    RestException,
    ResultParsingException,
    classify_transport_exception,
)
from .request import Request, T
from .response import RestResponse, RestResponseHandler
from .transport import Transport
from ..utils.sanitizer import mask_headers, mask_url

# Delayed import to avoid circular dependency
if TYPE_CHECKING:
    from .logging import RestClientLogger

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded; charset=UTF-8"
TEXT_CONTENT_TYPE = "text/plain; charset=UTF-8"


class RestClient:
    """
    REST клиент: превращает Request в HTTP вызов и классифицированный результат.

    Features:
        - Дефолтные заголовки и перехватчик из Configuration
        - Preemptive Basic Auth и аутентификация на прокси, настраиваемые один раз в init()
        - Ошибки транспорта приводятся к ConnectionException / ResultParsingException
        - Thread-safe: каждый вызов строит свои копии заголовков и параметров,
          каждый поток получает собственную сессию

    Example:
        >>> with RestClient(Configuration("https://api.example.com")) as client:
        ...     response = client.submit_request(PingRequest())
        ...     print(response.status_code, response.body)
    """

    def __init__(self, configuration: Optional[Configuration] = None, transport: Optional[Transport] = None):
        """
        Args:
            configuration: Если передана, клиент сразу инициализируется
            transport: Готовый транспорт (по умолчанию строится из configuration)
        """
        self._configuration: Optional[Configuration] = None
        self._transport: Optional[Transport] = None
        self._logger: Optional['RestClientLogger'] = None
        self._lifecycle_lock = threading.Lock()

        if configuration is not None:
            self.init(configuration, transport)

    # ==================== Жизненный цикл ====================

    def init(self, configuration: Configuration, transport: Optional[Transport] = None):
        """
        Привязывает конфигурацию и создаёт транспорт.

        Args:
            configuration: Конфигурация клиента
            transport: Готовый транспорт (по умолчанию Transport.from_configuration)

        Raises:
            ConfigurationError: Если клиент уже инициализирован (сначала close())
        """
        with self._lifecycle_lock:
            if self._transport is not None:
                raise ConfigurationError(
                    "RestClient is already initialized. "
                    "Call close() before init() with another configuration."
                )

            logger_instance = None
            if configuration.logging:
                from .logging import RestClientLogger
                netloc = urlparse(configuration.api_host).netloc or "unknown"
                logger_instance = RestClientLogger(
                    config=configuration.logging,
                    name=f"rest_client.{netloc}"
                )

            self._configuration = configuration
            self._transport = transport or Transport.from_configuration(configuration)
            self._logger = logger_instance

        if self._logger:
            self._logger.info(
                "RestClient initialized",
                api_host=configuration.api_host,
                timeout=configuration.request_timeout_in_seconds,
                proxy=configuration.proxy.proxy_url if configuration.proxy else None,
                basic_auth=configuration.is_basic_auth_enabled,
                default_headers=len(configuration.request_headers),
                interceptor=configuration.request_interceptor.__class__.__name__,
            )

    def close(self):
        """
        Закрывает транспорт и освобождает ресурсы.

        Идемпотентен. Вызывающий код отвечает за то, чтобы закрывать
        клиент после завершения всех запросов.
        """
        with self._lifecycle_lock:
            transport, self._transport = self._transport, None
            logger, self._logger = self._logger, None

        if transport is not None:
            try:
                transport.close()
            except Exception as e:
                # close() не должен бросать: ошибка освобождения только логируется
                if logger:
                    logger.error("Error closing transport", error=str(e))

        if logger:
            logger.info("RestClient closed")
            logger.close()

    @property
    def is_initialized(self) -> bool:
        return self._transport is not None

    @property
    def configuration(self) -> Optional[Configuration]:
        return self._configuration

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    # ==================== Отправка запросов ====================

    def submit_request(
        self,
        request: Request,
        response_handler: Optional[Callable[[requests.Response], Any]] = None
    ) -> Any:
        """
        Выполняет запрос.

        Args:
            request: Описание запроса
            response_handler: Преобразует requests.Response в результат
                              (по умолчанию RestResponseHandler)

        Returns:
            RestResponse, либо результат response_handler

        Raises:
            ConnectionException: Не удалось подключиться / handshake / нарушение протокола
            ResultParsingException: Ответ получен, но не удалось его прочитать
            RestException: Неизвестный метод, закрытый клиент, ошибка перехватчика
        """
        # Снимок состояния: close() из другого потока не меняет текущий вызов
        transport = self._transport
        configuration = self._configuration
        if transport is None or configuration is None:
            raise ClientClosedError()

        try:
            method = RequestMethod.coerce(request.request_method)
        except ValueError as e:
            raise RestException(
                f"Unknown Request Method: {request.request_method!r}", cause=e
            ) from e

        url = self._construct_api_url(configuration, request.api_endpoint)
        handler = response_handler or RestResponseHandler()

        try:
            if method is RequestMethod.GET:
                return self._submit_get_request(transport, configuration, url, {}, handler)
            elif method is RequestMethod.POST:
                return self._submit_body_request(transport, configuration, RequestMethod.POST, url, request.request_body, handler)
            elif method is RequestMethod.PUT:
                return self._submit_body_request(transport, configuration, RequestMethod.PUT, url, request.request_body, handler)
            elif method is RequestMethod.DELETE:
                return self._submit_delete_request(transport, configuration, url, handler)
            else:
                raise RestException(f"Unknown Request Method: {method!r}")
        except RestException:
            raise
        except Exception as e:
            # Ошибки вне выполнения запроса (например, в перехватчике)
            raise RestException(str(e) or e.__class__.__name__, url=url, cause=e) from e

    def execute(self, request: Request[T]) -> T:
        """
        Выполняет запрос и разбирает ответ через request.parse_response().

        Raises:
            ResultParsingException: Если parse_response() не смог разобрать ответ
            (а также всё, что бросает submit_request)
        """
        response: RestResponse = self.submit_request(request)
        try:
            return request.parse_response(response.body)
        except RestException:
            raise
        except Exception as e:
            raise ResultParsingException(
                f"Failed to parse response: {e}",
                url=self._construct_api_url(self._configuration, request.api_endpoint),
                cause=e,
            ) from e

    # ==================== Внутренние методы ====================

    def _submit_get_request(
        self,
        transport: Transport,
        configuration: Configuration,
        url: str,
        get_params: Mapping[str, str],
        response_handler: Callable[[requests.Response], Any]
    ) -> Any:
        """GET: только заголовки, параметры уходят в query string."""
        context = RequestContext(url, RequestMethod.GET)
        headers = self._build_headers(configuration, context)
        return self._execute(transport, context, headers, None, get_params, response_handler)

    def _submit_body_request(
        self,
        transport: Transport,
        configuration: Configuration,
        method: RequestMethod,
        url: str,
        request_body: Any,
        response_handler: Callable[[requests.Response], Any]
    ) -> Any:
        """POST/PUT: заголовки + тело запроса."""
        context = RequestContext(url, method)
        headers = self._build_headers(configuration, context)
        body, content_type = self._build_entity(configuration, request_body, context)
        if content_type and not any(name.lower() == 'content-type' for name in headers):
            headers['Content-Type'] = content_type
        return self._execute(transport, context, headers, body, None, response_handler)

    def _submit_delete_request(
        self,
        transport: Transport,
        configuration: Configuration,
        url: str,
        response_handler: Callable[[requests.Response], Any]
    ) -> Any:
        """DELETE: только заголовки. Тело запроса, даже если задано, не отправляется."""
        context = RequestContext(url, RequestMethod.DELETE)
        headers = self._build_headers(configuration, context)
        return self._execute(transport, context, headers, None, None, response_handler)

    def _execute(
        self,
        transport: Transport,
        context: RequestContext,
        headers: Dict[str, str],
        body: Optional[bytes],
        params: Optional[Mapping[str, str]],
        response_handler: Callable[[requests.Response], Any]
    ) -> Any:
        """Выполняет вызов и классифицирует ошибки на границе транспорта."""
        logger = self._logger
        start_time = time.time()

        if logger:
            from .logging.filters import set_correlation_id
            set_correlation_id(str(uuid.uuid4()))
            logger.debug(
                "Executing request",
                method=context.method.value,
                url=mask_url(context.url),
                headers=mask_headers(headers),
                has_body=body is not None,
            )

        try:
            result = transport.execute(
                context.method.value,
                context.url,
                headers,
                body=body,
                params=params,
                response_handler=response_handler,
            )
        except ClientClosedError:
            raise
        except Exception as e:
            error = classify_transport_exception(e, context.url)
            if logger:
                logger.warning(
                    "Request failed",
                    method=context.method.value,
                    url=mask_url(context.url),
                    error_type=error.__class__.__name__,
                    error=str(e),
                    duration_ms=round((time.time() - start_time) * 1000, 2),
                )
            if error is e:
                raise
            raise error from e

        if logger:
            logger.debug(
                "Request completed",
                method=context.method.value,
                url=mask_url(context.url),
                status_code=getattr(result, 'status_code', None),
                duration_ms=round((time.time() - start_time) * 1000, 2),
            )
        return result

    @staticmethod
    def _construct_api_url(configuration: Configuration, endpoint: str) -> str:
        """api_host + endpoint, без нормализации слешей."""
        return configuration.api_host + endpoint

    @staticmethod
    def _build_headers(configuration: Configuration, context: RequestContext) -> Dict[str, str]:
        """
        Копирует дефолтные заголовки, пропускает через перехватчик.

        Повторяющиеся имена объединяются через ", " в порядке добавления.
        """
        headers: List[RequestHeader] = list(configuration.request_headers)
        configuration.request_interceptor.modify_headers(headers, context)

        result: Dict[str, str] = {}
        names: Dict[str, str] = {}
        for header in headers:
            key = header.name.lower()
            if key in names:
                name = names[key]
                result[name] = f"{result[name]}, {header.value}"
            else:
                names[key] = header.name
                result[header.name] = header.value
        return result

    @staticmethod
    def _build_entity(
        configuration: Configuration,
        request_body: Any,
        context: RequestContext
    ) -> Tuple[Optional[bytes], Optional[str]]:
        """
        Кодирует тело запроса.

        Returns:
            (тело в UTF-8, Content-Type) или (None, None) если тела нет
        """
        if request_body is None:
            return None, None

        if isinstance(request_body, Mapping):
            # Перехватчик работает с копией: словарь вызывающего кода не меняется
            parameters: Dict[str, str] = dict(request_body)
            configuration.request_interceptor.modify_request_parameters(parameters, context)
            encoded = urlencode(list(parameters.items()), encoding='utf-8')
            return encoded.encode('utf-8'), FORM_CONTENT_TYPE

        return str(request_body).encode('utf-8'), TEXT_CONTENT_TYPE

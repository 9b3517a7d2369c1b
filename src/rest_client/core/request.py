# src/rest_client/core/request.py

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar, Union

from .context import RequestMethod

T = TypeVar("T")


class Request(ABC, Generic[T]):
    """
    Базовый класс для всех запросов.

    Запрос описывает endpoint, HTTP метод, тело и способ разбора ответа.
    Параметр T - тип результата, который возвращает parse_response().

    Example:
        >>> class PingRequest(Request[str]):
        ...     api_endpoint = "/v1/ping"
        ...     request_method = RequestMethod.GET
        ...     request_body = None
        ...
        ...     def parse_response(self, response_str: str) -> str:
        ...         return response_str.strip()
    """

    @property
    @abstractmethod
    def api_endpoint(self) -> str:
        """Endpoint, который дописывается к api_host"""
        pass

    @property
    @abstractmethod
    def request_method(self) -> Union[RequestMethod, str]:
        """HTTP метод запроса"""
        pass

    @property
    @abstractmethod
    def request_body(self) -> Any:
        """
        Тело запроса.

        Returns:
            None, словарь str -> str (отправляется как форма)
            или любой объект (отправляется как str(obj))
        """
        pass

    @abstractmethod
    def parse_response(self, response_str: str) -> T:
        """
        Разбирает ответ сервера.

        Args:
            response_str: Тело ответа в виде строки

        Returns:
            Результат запроса
        """
        pass

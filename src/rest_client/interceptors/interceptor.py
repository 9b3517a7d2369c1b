# src/rest_client/interceptors/interceptor.py

from abc import ABC, abstractmethod
from typing import Dict, List, TYPE_CHECKING

# Delayed import to avoid circular dependency
if TYPE_CHECKING:
    from ..core.config import RequestHeader
    from ..core.context import RequestContext


class RequestInterceptor(ABC):
    """
    Базовый класс для всех перехватчиков запроса.

    Перехватчик позволяет изменить заголовки и параметры формы
    каждого запроса (подпись, токены, audit заголовки) без изменения RestClient.

    Хуки вызываются синхронно в потоке, выполняющем запрос,
    поэтому не должны блокироваться надолго.
    Изменения допустимы только в переданных коллекциях.
    """

    @abstractmethod
    def modify_headers(self, headers: List['RequestHeader'], context: 'RequestContext') -> None:
        """
        Вызывается перед отправкой любого запроса.

        Args:
            headers: Копия дефолтных заголовков; можно добавлять, удалять и заменять элементы
            context: URL и метод текущего запроса
        """
        pass

    @abstractmethod
    def modify_request_parameters(self, parameters: Dict[str, str], context: 'RequestContext') -> None:
        """
        Вызывается для POST/PUT запросов, тело которых - словарь.

        Args:
            parameters: Копия параметров формы до кодирования
            context: URL и метод текущего запроса
        """
        pass


class NoopRequestInterceptor(RequestInterceptor):
    """Перехватчик по умолчанию - ничего не меняет"""

    def modify_headers(self, headers: List['RequestHeader'], context: 'RequestContext') -> None:
        pass

    def modify_request_parameters(self, parameters: Dict[str, str], context: 'RequestContext') -> None:
        pass

# src/rest_client/interceptors/auth_interceptor.py

import threading
from typing import Dict, List, Optional

from ..core.config import RequestHeader
from ..core.context import RequestContext
from .interceptor import RequestInterceptor


class AuthInterceptor(RequestInterceptor):
    """Перехватчик для токенной аутентификации"""

    HEADER_NAMES = {
        'bearer': 'Authorization',
        'api_key': 'X-API-Key',
    }

    def __init__(self, auth_type: str = "bearer", token: Optional[str] = None):
        """
        Args:
            auth_type: Тип аутентификации ('bearer', 'api_key')
            token: Токен для Bearer или API Key аутентификации
        """
        self.auth_type = auth_type.lower()
        if self.auth_type not in self.HEADER_NAMES:
            raise ValueError(
                f"Unknown auth type: {auth_type}. "
                f"Available: {', '.join(self.HEADER_NAMES)}"
            )
        self._token = token
        self._lock = threading.Lock()

    @property
    def token(self) -> Optional[str]:
        with self._lock:
            return self._token

    def modify_headers(self, headers: List[RequestHeader], context: RequestContext) -> None:
        """Заменяет заголовок аутентификации в запросе"""
        token = self.token
        if not token:
            return

        name = self.HEADER_NAMES[self.auth_type]
        value = f"Bearer {token}" if self.auth_type == 'bearer' else token

        # Убираем одноимённые заголовки из дефолтных
        headers[:] = [h for h in headers if h.name.lower() != name.lower()]
        headers.append(RequestHeader(name, value))

    def modify_request_parameters(self, parameters: Dict[str, str], context: RequestContext) -> None:
        pass

    def update_token(self, token: str):
        """Обновляет токен аутентификации"""
        with self._lock:
            self._token = token

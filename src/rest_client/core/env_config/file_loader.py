"""
Configuration file loader for YAML and JSON files.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from ..config import Configuration
from ...interceptors.interceptor import RequestInterceptor
from .loader import ConfigValidationError, build_configuration
from .validator import RestClientFileSettings

CONFIG_FILE_ENV_VAR = "REST_CLIENT_CONFIG_FILE"


class ConfigFileLoader:
    """
    Загрузчик конфигурации из файлов.

    Examples:
        >>> config = ConfigFileLoader.from_yaml("rest_client.yaml")
        >>> config = ConfigFileLoader.from_json("rest_client.json")
        >>> config = ConfigFileLoader.from_file("rest_client.yml")  # по расширению
        >>> config = ConfigFileLoader.from_env_path()  # из REST_CLIENT_CONFIG_FILE
    """

    @staticmethod
    def from_yaml(path: Union[str, Path], interceptor: Optional[RequestInterceptor] = None) -> Configuration:
        """
        Загрузить конфиг из YAML файла.

        Raises:
            FileNotFoundError: Если файл не найден
            ConfigValidationError: Если конфиг невалидный
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML syntax in {path}: {e}", cause=e) from e

        return ConfigFileLoader._build_config(data, str(path), interceptor)

    @staticmethod
    def from_json(path: Union[str, Path], interceptor: Optional[RequestInterceptor] = None) -> Configuration:
        """
        Загрузить конфиг из JSON файла.

        Raises:
            FileNotFoundError: Если файл не найден
            ConfigValidationError: Если конфиг невалидный
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid JSON syntax in {path}: {e}", cause=e) from e

        return ConfigFileLoader._build_config(data, str(path), interceptor)

    @staticmethod
    def from_file(path: Union[str, Path], interceptor: Optional[RequestInterceptor] = None) -> Configuration:
        """
        Автоопределение формата по расширению (.yaml, .yml, .json).

        Raises:
            ValueError: Если формат не поддерживается
        """
        path = Path(path)
        suffix = path.suffix.lower()

        if suffix in (".yaml", ".yml"):
            return ConfigFileLoader.from_yaml(path, interceptor)
        elif suffix == ".json":
            return ConfigFileLoader.from_json(path, interceptor)
        else:
            raise ValueError(
                f"Unsupported config format: {suffix}. Use .yaml, .yml or .json"
            )

    @staticmethod
    def from_env_path(interceptor: Optional[RequestInterceptor] = None) -> Configuration:
        """
        Загрузить конфиг из файла, путь к которому в REST_CLIENT_CONFIG_FILE.

        Raises:
            ConfigValidationError: Если переменная окружения не задана
        """
        path = os.getenv(CONFIG_FILE_ENV_VAR)
        if not path:
            raise ConfigValidationError(f"{CONFIG_FILE_ENV_VAR} environment variable is not set")
        return ConfigFileLoader.from_file(path, interceptor)

    @staticmethod
    def _build_config(
        data: Any,
        source: str,
        interceptor: Optional[RequestInterceptor]
    ) -> Configuration:
        if not data:
            raise ConfigValidationError(f"Empty config file: {source}")
        if not isinstance(data, dict):
            raise ConfigValidationError(f"Config root must be a mapping in {source}")

        try:
            settings = RestClientFileSettings.model_validate(data)
        except ValidationError as e:
            raise ConfigValidationError(f"Invalid config in {source}: {e}", cause=e) from e

        basic_auth: Dict[str, Optional[str]] = {}
        if settings.basic_auth is not None:
            basic_auth = {
                'basic_auth_username': settings.basic_auth.username,
                'basic_auth_password': settings.basic_auth.password,
            }

        return build_configuration(
            api_host=settings.api_host,
            request_timeout_in_seconds=settings.request_timeout_in_seconds,
            default_headers=settings.default_headers,
            proxy=settings.proxy,
            ignore_invalid_ssl_certificates=settings.ssl.ignore_invalid_certificates,
            trust_store_file=settings.ssl.trust_store_file,
            logging=settings.logging,
            interceptor=interceptor,
            **basic_auth
        )

"""
Configuration loader from environment variables and .env files.

Main entry point for loading configuration.
"""

from typing import Dict, Optional

from pydantic import ValidationError

from ..config import Configuration, ProxyConfiguration
from ..exceptions import ConfigurationError
from ..logging.config import LoggingConfig
from ...interceptors.interceptor import RequestInterceptor
from ...utils.sanitizer import mask_url
from .profiles import ProfileType, get_env_file_path
from .validator import LoggingSettings, ProxySettings, RestClientSettings


class ConfigValidationError(ConfigurationError):
    """Raised when environment or file configuration is invalid."""
    pass


def build_configuration(
    api_host: str,
    request_timeout_in_seconds: int,
    default_headers: Dict[str, str],
    basic_auth_username: Optional[str] = None,
    basic_auth_password: Optional[str] = None,
    proxy: Optional[ProxySettings] = None,
    ignore_invalid_ssl_certificates: bool = False,
    trust_store_file: Optional[str] = None,
    logging: Optional[LoggingSettings] = None,
    interceptor: Optional[RequestInterceptor] = None,
) -> Configuration:
    """
    Build Configuration from validated settings.

    Raises:
        ConfigValidationError: If the values pass settings validation
            but are rejected by Configuration (e.g. api_host "https://")
    """
    try:
        proxy_config = None
        if proxy is not None:
            proxy_config = ProxyConfiguration(
                proxy_host=proxy.host,
                proxy_port=proxy.port,
                proxy_scheme=proxy.scheme,
                proxy_username=proxy.username,
                proxy_password=proxy.password,
            )

        logging_config = None
        if logging is not None:
            logging_config = LoggingConfig.create(
                level=logging.level,
                format=logging.format,
                enable_file=logging.file_path is not None,
                file_path=logging.file_path,
            )

        return Configuration(
            api_host=api_host,
            request_timeout_in_seconds=request_timeout_in_seconds,
            proxy=proxy_config,
            basic_auth_username=basic_auth_username,
            basic_auth_password=basic_auth_password,
            request_headers=default_headers,
            request_interceptor=interceptor,
            ignore_invalid_ssl_certificates=ignore_invalid_ssl_certificates,
            trust_store_file=trust_store_file,
            logging=logging_config,
        )
    except (ConfigurationError, ValueError) as e:
        message = getattr(e, "message", None) or str(e)
        raise ConfigValidationError(f"Invalid configuration: {message}", cause=e) from e


def load_from_env(
    profile: Optional[ProfileType] = None,
    env_file: Optional[str] = None,
    interceptor: Optional[RequestInterceptor] = None,
    **overrides
) -> Configuration:
    """
    Load Configuration from environment variables.

    Priority (highest to lowest):
    1. **overrides - explicit parameters (RestClientSettings field names)
    2. Environment variables (REST_CLIENT_*)
    3. .env file (profile-specific or default)
    4. Defaults

    Args:
        profile: Profile to load (development/staging/production)
        env_file: Custom .env file path (overrides profile)
        interceptor: Request interceptor (cannot come from the environment)
        **overrides: Explicit settings overrides

    Returns:
        Configuration instance

    Raises:
        ConfigValidationError: If settings are missing or invalid

    Example:
        >>> config = load_from_env(profile="production")
        >>> config = load_from_env(api_host="https://staging.example.com")
    """
    if env_file is None:
        env_file = get_env_file_path(profile)

    try:
        settings = RestClientSettings(_env_file=env_file, **overrides)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid environment configuration: {e}", cause=e) from e

    return build_configuration(
        api_host=settings.api_host,
        request_timeout_in_seconds=settings.request_timeout_in_seconds,
        default_headers=settings.default_headers,
        basic_auth_username=settings.basic_auth_username,
        basic_auth_password=settings.basic_auth_password,
        proxy=settings.to_proxy_settings(),
        ignore_invalid_ssl_certificates=settings.ignore_invalid_ssl_certificates,
        trust_store_file=settings.trust_store_file,
        logging=settings.to_logging_settings(),
        interceptor=interceptor,
    )


def print_config_summary(config: Configuration):
    """
    Print configuration summary with secrets masked.

    Example:
        >>> print_config_summary(load_from_env())
        Configuration:
          api_host: https://api.example.com
          timeout: 300s
          ...
    """
    print("Configuration:")
    print(f"  api_host: {config.api_host}")
    print(f"  timeout: {config.request_timeout_in_seconds}s")
    if config.is_basic_auth_enabled:
        print(f"  basic_auth: {config.basic_auth_username}:***")
    if config.proxy:
        print(f"  proxy: {mask_url(config.proxy.proxy_url)}")
    print(f"  verify_ssl: {not config.ignore_invalid_ssl_certificates}")
    if config.trust_store_file:
        print(f"  trust_store_file: {config.trust_store_file}")
    print(f"  default_headers: {len(config.request_headers)}")
    print(f"  interceptor: {config.request_interceptor.__class__.__name__}")

    if config.logging:
        print(f"  logging: level={config.logging.level.value}, format={config.logging.format.value}")
        if config.logging.enable_file:
            print(f"    file: {config.logging.file_path}")

"""
Environment configuration system for REST Client.

Load Configuration from .env files, environment variables and YAML/JSON files.

Example:
    >>> from rest_client.core.env_config import load_from_env, ConfigFileLoader
    >>>
    >>> config = load_from_env()                        # .env + REST_CLIENT_* variables
    >>> config = load_from_env(profile="production")    # .env.production
    >>> config = ConfigFileLoader.from_file("rest_client.yaml")
"""

from .loader import load_from_env, print_config_summary, build_configuration, ConfigValidationError
from .file_loader import ConfigFileLoader
from .validator import (
    RestClientSettings,
    RestClientFileSettings,
    ProxySettings,
    LoggingSettings,
    BasicAuthSettings,
    SSLSettings,
)
from .profiles import ProfileType, get_env_file_path

__all__ = [
    # Loaders
    "load_from_env",
    "print_config_summary",
    "build_configuration",
    "ConfigFileLoader",
    "ConfigValidationError",
    # Validators
    "RestClientSettings",
    "RestClientFileSettings",
    "ProxySettings",
    "LoggingSettings",
    "BasicAuthSettings",
    "SSLSettings",
    # Profiles
    "ProfileType",
    "get_env_file_path",
]

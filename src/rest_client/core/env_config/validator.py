"""
Pydantic validators for environment configuration.
"""

from typing import Dict, Optional, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProxySettings(BaseModel):
    """Proxy configuration from environment."""

    host: str = Field(min_length=1)
    port: int = Field(ge=1, le=65535)
    scheme: Literal["http", "https"] = "http"
    username: Optional[str] = None
    password: Optional[str] = None


class LoggingSettings(BaseModel):
    """Logging configuration from environment."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "text", "colored"] = "text"
    file_path: Optional[str] = None


class RestClientSettings(BaseSettings):
    """
    RestClient configuration from environment variables.

    All variables use the REST_CLIENT_ prefix:

        REST_CLIENT_API_HOST=https://api.example.com
        REST_CLIENT_REQUEST_TIMEOUT_IN_SECONDS=30
        REST_CLIENT_BASIC_AUTH_USERNAME=user
        REST_CLIENT_BASIC_AUTH_PASSWORD=secret
        REST_CLIENT_PROXY_HOST=proxy.local
        REST_CLIENT_PROXY_PORT=3128
        REST_CLIENT_LOG_ENABLED=true
        REST_CLIENT_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="REST_CLIENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_host: str = Field(min_length=1)
    request_timeout_in_seconds: int = Field(default=300, gt=0)

    # JSON object: REST_CLIENT_DEFAULT_HEADERS='{"Accept": "application/json"}'
    default_headers: Dict[str, str] = Field(default_factory=dict)

    basic_auth_username: Optional[str] = None
    basic_auth_password: Optional[str] = None

    proxy_host: Optional[str] = None
    proxy_port: Optional[int] = Field(default=None, ge=1, le=65535)
    proxy_scheme: Literal["http", "https"] = "http"
    proxy_username: Optional[str] = None
    proxy_password: Optional[str] = None

    ignore_invalid_ssl_certificates: bool = False
    trust_store_file: Optional[str] = None

    log_enabled: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "text", "colored"] = "text"
    log_file_path: Optional[str] = None

    @field_validator('api_host')
    @classmethod
    def validate_api_host(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("api_host must start with http:// or https://")
        return v

    @field_validator('log_level', mode='before')
    @classmethod
    def upper_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @model_validator(mode='after')
    def validate_proxy(self) -> 'RestClientSettings':
        """proxy_host and proxy_port go together."""
        if (self.proxy_host is None) != (self.proxy_port is None):
            raise ValueError("proxy_host and proxy_port must be set together")
        return self

    def to_proxy_settings(self) -> Optional[ProxySettings]:
        if self.proxy_host is None:
            return None
        return ProxySettings(
            host=self.proxy_host,
            port=self.proxy_port,
            scheme=self.proxy_scheme,
            username=self.proxy_username,
            password=self.proxy_password,
        )

    def to_logging_settings(self) -> Optional[LoggingSettings]:
        if not self.log_enabled:
            return None
        return LoggingSettings(
            level=self.log_level,
            format=self.log_format,
            file_path=self.log_file_path,
        )


class BasicAuthSettings(BaseModel):
    """Basic auth credentials from a config file."""

    username: str = Field(min_length=1)
    password: str = ""


class SSLSettings(BaseModel):
    """TLS verification settings from a config file."""

    ignore_invalid_certificates: bool = False
    trust_store_file: Optional[str] = None


class RestClientFileSettings(BaseModel):
    """
    RestClient configuration from a YAML or JSON file.

    Example (YAML):
        api_host: https://api.example.com
        request_timeout_in_seconds: 30
        default_headers:
          Accept: application/json
        basic_auth:
          username: user
          password: secret
        proxy:
          host: proxy.local
          port: 3128
        logging:
          level: DEBUG
          format: json
    """

    model_config = ConfigDict(extra="forbid")

    api_host: str = Field(min_length=1)
    request_timeout_in_seconds: int = Field(default=300, gt=0)
    default_headers: Dict[str, str] = Field(default_factory=dict)
    basic_auth: Optional[BasicAuthSettings] = None
    proxy: Optional[ProxySettings] = None
    ssl: SSLSettings = Field(default_factory=SSLSettings)
    logging: Optional[LoggingSettings] = None

    @field_validator('api_host')
    @classmethod
    def validate_api_host(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("api_host must start with http:// or https://")
        return v

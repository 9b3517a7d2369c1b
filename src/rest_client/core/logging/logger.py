"""
Structured logger for REST Client.
"""

import logging
from typing import Optional, Any, Dict

from .config import LoggingConfig, LogLevel
from .formatters import get_formatter
from .filters import CorrelationIdFilter, ExtraFieldsFilter
from .handlers import create_console_handler, create_file_handler
from ...utils.sanitizer import mask_sensitive_data

# Keys logging.makeRecord refuses to overwrite
_RESERVED_KEYS = frozenset({'message', 'asctime'}) | frozenset(
    vars(logging.LogRecord('', 0, '', 0, '', None, None))
)


class RestClientLogger:
    """
    Logger with configurable handlers, formatters and filters.

    Keyword arguments of the logging methods become structured fields
    of the record; sensitive values (passwords, tokens, Authorization
    headers) are masked before they reach any handler.

    Example:
        >>> logger = RestClientLogger(LoggingConfig.create(level="DEBUG"), name="rest_client.api")
        >>> logger.debug("Executing request", method="GET", url="https://api.example.com/v1/ping")
        >>> logger.close()
    """

    def __init__(self, config: Optional[LoggingConfig] = None, name: str = "rest_client"):
        """
        Args:
            config: Logging configuration (defaults if None)
            name: Logger name
        """
        self.config = config or LoggingConfig()
        self.name = name
        self._closed = False

        level = self._get_level(self.config.level)

        self._logger = logging.getLogger(name)
        self._logger.setLevel(level)
        self._logger.propagate = False

        # Drop handlers from a previous instance with the same name
        self._logger.handlers.clear()

        filters = []
        if self.config.enable_correlation_id:
            filters.append(CorrelationIdFilter())
        if self.config.extra_fields:
            filters.append(ExtraFieldsFilter(self.config.extra_fields))

        formatter = get_formatter(self.config.format.value)

        if self.config.enable_console:
            self._logger.addHandler(create_console_handler(level, formatter, filters))

        if self.config.enable_file and self.config.file_path:
            self._logger.addHandler(create_file_handler(
                file_path=self.config.file_path,
                level=level,
                formatter=formatter,
                max_bytes=self.config.max_bytes,
                backup_count=self.config.backup_count,
                filters=filters
            ))

    @staticmethod
    def _get_level(level: LogLevel) -> int:
        return getattr(logging, level.value)

    @property
    def logger(self) -> logging.Logger:
        """Underlying stdlib logger."""
        return self._logger

    def _log(self, level: int, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        if self._closed or not self._logger.isEnabledFor(level):
            return
        sanitized: Dict[str, Any] = mask_sensitive_data(kwargs)
        extra = {
            (f"field_{key}" if key in _RESERVED_KEYS else key): value
            for key, value in sanitized.items()
        }
        self._logger.log(level, message, exc_info=exc_info, extra=extra)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, **kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log error with traceback; call from an exception handler."""
        self._log(logging.ERROR, message, exc_info=True, **kwargs)

    def close(self) -> None:
        """
        Flush and close all handlers.

        Idempotent: safe to call multiple times.
        """
        if self._closed:
            return

        for handler in list(self._logger.handlers):
            try:
                handler.flush()
                handler.close()
            finally:
                self._logger.removeHandler(handler)

        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

"""Logger implementation over Python's standard logging."""

import logging
from typing import Any

from ..ports.logger import LoggerPort


class SimpleLogger(LoggerPort):
    """LoggerPort implementation using Python's standard logging.

    Structured keyword context is rendered after the message as ``key=value``
    pairs and also attached to the record through ``extra``.
    """

    def __init__(self, name: str = "clerq", level: int = logging.INFO):
        """Initialize the logger.

        Args:
            name: Logger name (default: "clerq")
            level: Logging level (default: INFO)
        """
        self._logger = logging.getLogger(name)
        self._logger.setLevel(level)

        if not self._logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
            handler.setFormatter(formatter)
            self._logger.addHandler(handler)

    @staticmethod
    def _format(message: str, context: dict[str, Any]) -> str:
        if not context:
            return message
        pairs = " ".join(f"{key}={value}" for key, value in context.items())
        return f"{message} [{pairs}]"

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log a debug message."""
        self._logger.debug(self._format(message, kwargs), extra={"context": kwargs})

    def info(self, message: str, **kwargs: Any) -> None:
        """Log an info message."""
        self._logger.info(self._format(message, kwargs), extra={"context": kwargs})

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log a warning message."""
        self._logger.warning(self._format(message, kwargs), extra={"context": kwargs})

    def error(self, message: str, **kwargs: Any) -> None:
        """Log an error message."""
        self._logger.error(self._format(message, kwargs), extra={"context": kwargs})

    def exception(self, message: str, exc_info: Exception | None = None, **kwargs: Any) -> None:
        """Log an exception with traceback."""
        self._logger.exception(
            self._format(message, kwargs),
            exc_info=exc_info or True,
            extra={"context": kwargs},
        )

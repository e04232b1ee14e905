#regionkit/infrastructure/logging/logger_service.py
"""
Logger service implementations on top of Python's logging module.
"""
import logging
import sys
import os
from datetime import datetime
from typing import Any, Dict

from regionkit.domain.services.i_logger_service import ILoggerService


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class ConsoleLoggerService(ILoggerService):
    """
    Logger service writing to stdout.

    Keyword context is appended to the message as "[key=value ...]".
    """

    def __init__(self, level: int = logging.INFO, name: str = "regionkit"):
        """
        Initialize the logger service.

        Args:
            level: Initial log level (default: INFO)
            name: Logger name
        """
        self.logger = logging.getLogger(name)
        self.set_level(level)

        # Loggers are process-wide; only attach the handler once
        if not self.logger.handlers:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(level)
            console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            self.logger.addHandler(console_handler)

    def debug(self, message: str, **kwargs) -> None:
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs) -> None:
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs) -> None:
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs) -> None:
        self._log(logging.CRITICAL, message, kwargs)

    def set_level(self, level: int) -> None:
        """
        Set the minimum log level to display.

        Args:
            level: Minimum log level (e.g., logging.INFO, logging.DEBUG)
        """
        self.logger.setLevel(level)

    def _log(self, level: int, message: str, extra: Dict[str, Any]) -> None:
        context = self._format_extra(extra)
        if context:
            message = f"{message} {context}"
        self.logger.log(level, message)

    def _format_extra(self, extra: Dict[str, Any]) -> str:
        """
        Format extra context information for logging.

        Args:
            extra: Dictionary of extra context information

        Returns:
            Formatted string of context information
        """
        if not extra:
            return ""
        return "[" + " ".join(f"{key}={value}" for key, value in extra.items()) + "]"


class FileLoggerService(ConsoleLoggerService):
    """
    ConsoleLoggerService that also writes a dated log file.
    """

    def __init__(self, level: int = logging.INFO, name: str = "regionkit",
                 log_dir: str = "logs"):
        """
        Initialize the file logger service.

        Args:
            level: Initial log level (default: INFO)
            name: Logger name
            log_dir: Directory to store log files
        """
        super().__init__(level, name)

        os.makedirs(log_dir, exist_ok=True)

        current_date = datetime.now().strftime("%Y-%m-%d")
        self.log_file = os.path.join(log_dir, f"{name}_{current_date}.log")

        file_handler = logging.FileHandler(self.log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        self.logger.addHandler(file_handler)

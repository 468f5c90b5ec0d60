"""
Logging Utility for the Reset Service.

Provides structured JSON logging with appropriate levels and formats.
"""

import logging
import sys
from datetime import datetime
import json


class StructuredLogger:
    """Structured logger emitting one JSON document per record."""

    def __init__(self, name: str, level: int = logging.INFO):
        """
        Initialize structured logger.

        Args:
            name: Logger name, reported as the "service" field
            level: Logging level
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)

        # Prevent adding handlers multiple times
        if not self.logger.handlers:
            self._setup_handlers()

    def _setup_handlers(self):
        """Set up the stdout handler."""
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG)

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        console_handler.setFormatter(formatter)

        self.logger.addHandler(console_handler)

    def _build_record(self, level_name: str, message: str, **kwargs) -> str:
        log_data = {
            "timestamp": datetime.utcnow().isoformat(),
            "level": level_name,
            "message": message,
            "service": self.logger.name
        }
        log_data.update(kwargs)
        return json.dumps(log_data, default=str)

    def _log_structured(self, level: int, message: str, **kwargs):
        """
        Log a structured message.

        Args:
            level: Logging level
            message: Log message
            **kwargs: Additional structured data (task_id, counts, dates...)
        """
        if self.logger.isEnabledFor(level):
            self.logger.log(level, self._build_record(logging.getLevelName(level), message, **kwargs))

    def debug(self, message: str, **kwargs):
        """Log debug message."""
        self._log_structured(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs):
        """Log info message."""
        self._log_structured(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message."""
        self._log_structured(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log error message."""
        self._log_structured(logging.ERROR, message, **kwargs)

    def exception(self, message: str, **kwargs):
        """Log exception with traceback. Call from inside an except block."""
        if self.logger.isEnabledFor(logging.ERROR):
            self.logger.exception(self._build_record("ERROR", message, exception=True, **kwargs))


reset_logger = StructuredLogger("task-reset-service")
cron_logger = StructuredLogger("task-reset-cron")


def get_logger(service_name: str) -> StructuredLogger:
    """
    Get a logger for the specified service.

    Args:
        service_name: Name of the service

    Returns:
        StructuredLogger instance
    """
    return StructuredLogger(service_name)

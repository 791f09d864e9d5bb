"""
Logging context manager with entry, success and failure messages.
"""

import logging

from .loggers import StorefrontLogger
from .manager import logging_manager


class LoggingContext:
    """Context manager for structured logging with entry/exit messages."""

    def __init__(self, entry_msg=None, success_msg=None, failure_msg=None,
                 logger=None, entry_level=logging.DEBUG, success_level=logging.INFO,
                 failure_level=logging.WARNING):
        self.entry_msg = entry_msg
        self.success_msg = success_msg
        self.failure_msg = failure_msg

        if isinstance(logger, StorefrontLogger):
            self.logger = logger
        else:
            logger_name = logger.name if logger else __name__
            self.logger = logging_manager.get_logger(logger_name)

        self.entry_level = entry_level
        self.success_level = success_level
        self.failure_level = failure_level

    def _emit(self, level: int, msg: str):
        getattr(self.logger, logging.getLevelName(level).lower())(msg)

    def __enter__(self):
        if self.entry_msg:
            self._emit(self.entry_level, self.entry_msg)
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        if exc_type is None:
            if self.success_msg:
                self._emit(self.success_level, self.success_msg)
        elif self.failure_msg:
            self._emit(self.failure_level, f"{self.failure_msg}: {exc_value}")
        return False

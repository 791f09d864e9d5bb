"""
Logger wrapper with correlation IDs and structured context.
"""

import logging
from typing import Any, Dict, Optional
from uuid import uuid4


class StorefrontLogger:
    """Logger with a correlation id and keyword context on every record."""

    def __init__(self, name: str, correlation_id: Optional[str] = None):
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id or str(uuid4())

    def _log(self, level: int, msg: str, **kwargs):
        extra: Dict[str, Any] = {"correlation_id": self.correlation_id}
        if kwargs:
            extra["extra_context"] = kwargs
        self.logger.log(level, msg, extra=extra)

    def debug(self, msg: str, **kwargs):
        self._log(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs):
        self._log(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs):
        self._log(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, **kwargs):
        self._log(logging.ERROR, msg, **kwargs)

"""
storefront-client logging package.

- formatters: log formatting (JSON, console, rich)
- loggers: logger wrapper with correlation IDs
- config: logging configuration
- manager: centralized logging setup
- context: entry/exit logging around an operation
"""

from .config import LoggingConfig
from .context import LoggingContext
from .formatters import StructuredFormatter
from .loggers import StorefrontLogger
from .manager import LoggingManager, configure_logging, logging_manager

get_logger = logging_manager.get_logger

__all__ = [
    "LoggingConfig",
    "LoggingManager",
    "configure_logging",
    "StorefrontLogger",
    "get_logger",
    "LoggingContext",
    "StructuredFormatter",
]

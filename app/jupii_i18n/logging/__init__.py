"""Structured logging infrastructure.

Public API:
    - configure_logging(): Initialize logging for the application
    - get_logger(): Get a logger instance with a specific name
    - get_module_logger(): Get a logger for the calling module

Processors:
    - add_app_info(): Processor to add app name/version
    - add_environment_info(): Processor to add environment name
    - truncate_large_values(): Processor to limit string lengths
"""

from jupii_i18n.logging.setup import (
    configure_logging,
    get_logger,
    get_module_logger,
)
from jupii_i18n.logging.formatters import (
    add_app_info,
    add_environment_info,
    truncate_large_values,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "get_module_logger",
    "add_app_info",
    "add_environment_info",
    "truncate_large_values",
]

"""Structlog configuration and logger setup.

Configures structlog with call-site context, exception formatting and
environment-aware rendering.

Usage:
    from jupii_i18n.logging import configure_logging, get_module_logger

    # Configure logging at app startup
    configure_logging()

    # Get a logger for your module
    logger = get_module_logger()
    logger.info("event_name", key="value")

Dependencies:
    - jupii_i18n.configuration.Settings
"""

import inspect
import logging
import sys
from typing import Any, Callable, Optional, Sequence

import structlog
from structlog.stdlib import BoundLogger

from jupii_i18n import __version__
from jupii_i18n.configuration import Settings
from jupii_i18n.logging.formatters import (
    add_app_info,
    add_environment_info,
    truncate_large_values,
)

APP_NAME = "jupii-i18n"


def _is_test_environment() -> bool:
    """Detect if running in a test environment.

    Returns:
        True if pytest is in sys.modules, False otherwise
    """
    return "pytest" in sys.modules


def configure_logging(
    settings: Optional[Settings] = None,
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
    extra_processors: Optional[Sequence[Callable[..., Any]]] = None,
) -> BoundLogger:
    """Configure structured logging with enhanced processors.

    Args:
        settings: Settings to read LOG_LEVEL and PREFIX from. Defaults to the
            application-scoped settings.
        log_level: Optional override for log level (DEBUG, INFO, WARNING, etc).
        is_production: Optional override for production mode. Controls JSON
            vs console output.
        extra_processors: Processors inserted before the renderer.

    Returns:
        Configured logger instance
    """
    # Suppress all logging during tests
    if _is_test_environment():
        logging.root.setLevel(logging.CRITICAL + 1)

        # Basic processors avoid errors; nothing is emitted at CRITICAL + 1
        structlog.configure(
            processors=[
                structlog.stdlib.add_log_level,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

        logging.basicConfig(
            format="%(message)s",
            level=logging.CRITICAL + 1,
            force=True,
        )
        return structlog.stdlib.get_logger()

    if settings is None:
        from jupii_i18n.providers import get_settings

        settings = get_settings()

    prod_mode = is_production if is_production is not None else settings.is_production

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        add_app_info(APP_NAME, __version__, git_sha=settings.GIT_SHA),
        add_environment_info("production" if prod_mode else settings.PREFIX or "development"),
        truncate_large_values(max_length=500),
    ]
    processors.extend(extra_processors or [])

    if not prod_mode:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    effective_log_level = log_level or settings.LOG_LEVEL
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, effective_log_level.upper(), logging.INFO),
    )

    return structlog.stdlib.get_logger()


def get_logger(name: Optional[str] = None) -> BoundLogger:
    """Get a logger instance bound to a name.

    Args:
        name: Optional logger name (typically __name__ in calling module)

    Returns:
        Configured logger instance with context
    """
    if name:
        return structlog.stdlib.get_logger(logger_name=name)

    current_frame = inspect.currentframe()
    if current_frame is None or current_frame.f_back is None:
        return structlog.stdlib.get_logger()

    module = inspect.getmodule(current_frame.f_back)
    if module:
        return structlog.stdlib.get_logger(logger_name=module.__name__)

    return structlog.stdlib.get_logger(logger_name="unknown")


def get_module_logger(component: Optional[str] = None) -> BoundLogger:
    """Get a logger for the calling module with full path context.

    The logger is created lazily and picks up whatever configuration is in
    place when it first logs, so module-level loggers may be created before
    configure_logging() runs.

    Args:
        component: Overrides the component name derived from the module.

    Example:
        # In jupii_i18n/i18n/loader.py
        logger = get_module_logger()
        # context: {"component": "loader", "module_path": "jupii_i18n.i18n.loader"}
    """
    current_frame = inspect.currentframe()
    if current_frame is None or current_frame.f_back is None:
        return structlog.stdlib.get_logger(component=component or "unknown")

    module = inspect.getmodule(current_frame.f_back)
    if module:
        module_name = module.__name__
        return structlog.stdlib.get_logger(
            component=component or module_name.split(".")[-1],
            module_path=module_name,
        )

    return structlog.stdlib.get_logger(component=component or "unknown")

"""Structured logging for the g11n package.

Importing g11n never changes logging configuration. Every module logs through
a structlog logger bound with its ``component`` and ``module_path``; where the
events end up is decided by the host application's structlog setup.

Scripts and services without a setup of their own can opt in:

    from g11n.logging import configure_logging

    configure_logging(log_level="DEBUG")

Dependencies:
    - g11n.configuration.Settings (LOG_LEVEL, is_production defaults)
"""

import inspect
import logging
from typing import Optional

import structlog
from structlog.stdlib import BoundLogger

from g11n.configuration import settings

# Standard library logger receiving every g11n event once configured
PACKAGE_LOGGER = "g11n"


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Route g11n events through the standard library ``g11n`` logger.

    Only the ``g11n`` logger's level and handler are touched; the root logger
    is left to the application.

    Args:
        log_level: Level name (DEBUG, INFO, WARNING, ...). Defaults to
            settings.LOG_LEVEL.
        is_production: JSON output when True, console output otherwise.
            Defaults to settings.is_production.

    Returns:
        Logger bound to the package logger.
    """
    prod_mode = is_production if is_production is not None else settings.is_production

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if prod_mode:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    level_name = (log_level or settings.LOG_LEVEL).upper()
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(getattr(logging, level_name, logging.INFO))
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        package_logger.addHandler(handler)
        package_logger.propagate = False

    return structlog.stdlib.get_logger(PACKAGE_LOGGER)


def get_module_logger() -> BoundLogger:
    """Logger for the calling module.

    Example:
        # In g11n/registry.py
        logger = get_module_logger()
        # context: {"component": "registry", "module_path": "g11n.registry"}
    """
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    module = inspect.getmodule(caller) if caller is not None else None

    if module is None:
        return structlog.get_logger(PACKAGE_LOGGER).bind(component="unknown")

    name = module.__name__
    return structlog.get_logger(name).bind(
        component=name.rsplit(".", 1)[-1],
        module_path=name,
    )

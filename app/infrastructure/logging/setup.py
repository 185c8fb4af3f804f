"""Structlog configuration for the translation engine.

Engine modules log snake_case events with keyword context, for example
``logger.warning("formatter_failed", format="number", locale="en-US")``.
Events are rendered for the console in development and as JSON lines in
production. Nothing is emitted while pytest runs.

Usage:
    from infrastructure.logging import get_module_logger

    logger = get_module_logger()
    logger.info("loaded_translations", locale="en-US", file_count=2)
"""

import inspect
import logging
import sys
from typing import List, Optional

import structlog
from structlog.stdlib import BoundLogger
from structlog.typing import Processor

from infrastructure.configuration import Settings
from infrastructure.configuration import settings as default_settings

SILENT_LEVEL = logging.CRITICAL + 1


def _is_test_environment() -> bool:
    return "pytest" in sys.modules


def build_processors(is_production: bool) -> List[Processor]:
    """Processor chain for engine events.

    Level and ISO timestamp are added to every event. Tracebacks passed with
    ``exc_info=True`` (formatter failures) are rendered to text before the
    final renderer.
    """
    processors: List[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]
    if is_production:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())
    return processors


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
    settings: Optional[Settings] = None,
) -> BoundLogger:
    """Configure structlog on top of the stdlib root logger.

    Args:
        log_level: Level name overriding settings.LOG_LEVEL.
        is_production: Overrides settings.is_production (JSON vs console).
        settings: Settings to read defaults from (default: the application
            singleton).

    Returns:
        The root structlog logger.
    """
    settings = settings or default_settings

    if _is_test_environment():
        processors = [structlog.stdlib.add_log_level]
        level = SILENT_LEVEL
    else:
        prod_mode = (
            is_production if is_production is not None else settings.is_production
        )
        processors = build_processors(prod_mode)
        level_name = (log_level or settings.LOG_LEVEL).upper()
        level = getattr(logging, level_name, logging.INFO)

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", level=level, force=True)

    return structlog.stdlib.get_logger()


logger: BoundLogger = configure_logging()


def get_module_logger() -> BoundLogger:
    """Get a logger bound to the calling module.

    The logger carries ``component`` (last dotted segment of the module
    name) and ``module_path``; in infrastructure/i18n/nesting.py that is
    ``component="nesting"``, ``module_path="infrastructure.i18n.nesting"``.
    """
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    module = inspect.getmodule(caller) if caller is not None else None
    if module is None:
        return logger.bind(component="unknown")

    module_name = module.__name__
    return logger.bind(
        component=module_name.rsplit(".", 1)[-1],
        module_path=module_name,
    )

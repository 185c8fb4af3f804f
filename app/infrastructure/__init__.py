"""Infrastructure modules for the translation engine.

Centralized infrastructure components:
- configuration: Settings management (settings, I18nSettings)
- logging: Structured logging (configure_logging, get_module_logger)
- i18n: Translation catalogs and template evaluation
"""

from infrastructure.configuration import settings
from infrastructure.logging import get_module_logger

__all__ = [
    "settings",
    "get_module_logger",
]

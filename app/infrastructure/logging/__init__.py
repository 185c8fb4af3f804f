"""Structured logging for the translation engine, built on structlog.

Public API:
    - configure_logging(): (Re)configure rendering and level
    - get_module_logger(): Get a logger bound to the calling module
"""

from infrastructure.logging.setup import configure_logging, get_module_logger

__all__ = [
    "configure_logging",
    "get_module_logger",
]

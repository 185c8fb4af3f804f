"""Infrastructure settings __init__ - exports all infrastructure settings."""

from infrastructure.configuration.infrastructure.i18n import (
    DEFAULT_MAX_NESTING_DEPTH,
    I18nSettings,
)

__all__ = [
    "DEFAULT_MAX_NESTING_DEPTH",
    "I18nSettings",
]

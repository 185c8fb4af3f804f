"""Test data factories for i18n system testing.

Provides deterministic test data builders for:
- TranslationKey
- TranslationCatalog
- I18nOptions with recording formatters and handlers
"""

from typing import Any, Callable, Dict, List, Optional

from infrastructure.i18n import (
    BASE_OPTIONS,
    I18nOptions,
    InterpolationFormat,
    Locale,
    TranslationCatalog,
    TranslationKey,
)


def make_translation_key(
    namespace: str = "incident", message_key: str = "created"
) -> TranslationKey:
    """Create a TranslationKey instance."""
    return TranslationKey(namespace=namespace, message_key=message_key)


def make_translation_catalog(
    locale: Locale = Locale.EN_US,
    messages: dict = None,
    loaded_at: str = None,
) -> TranslationCatalog:
    """Create a TranslationCatalog instance.

    Args:
        locale: Locale for the catalog.
        messages: Nested dict {namespace: {key: message}}.
        loaded_at: ISO 8601 timestamp.

    Returns:
        TranslationCatalog instance.
    """
    if messages is None:
        messages = {
            "incident": {
                "created": "Incident created",
                "resolved": "Incident resolved",
                "status": {"open": "Open", "closed": "Closed"},
            },
            "role": {
                "created": "Role created",
            },
        }

    return TranslationCatalog(
        locale=locale,
        messages=messages,
        loaded_at=loaded_at or "2024-01-01T00:00:00Z",
    )


def make_options(
    formats: Optional[Dict[str, Callable]] = None, **overrides: Any
) -> I18nOptions:
    """Create fully populated options with the given overrides."""
    return BASE_OPTIONS.merge(I18nOptions(formats=formats, **overrides))


class RecordingFormatter:
    """Formatter double returning a fixed value and recording its calls."""

    def __init__(self, result: Any = None, error: Optional[Exception] = None):
        self.result = result
        self.error = error
        self.calls: List[tuple] = []

    def __call__(
        self,
        value: Any,
        format: InterpolationFormat,
        locale: str,
        options: I18nOptions,
    ) -> Any:
        self.calls.append((value, format, locale, options))
        if self.error is not None:
            raise self.error
        return self.result

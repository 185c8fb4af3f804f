"""Errors raised while evaluating translation templates.

Recoverable errors derive from TranslationError and can be intercepted by a
``translation_failed_handler``. Malformed nesting blocks raise the
non-recoverable NestingFormatError and NestingVariablesError, which always
propagate.
"""

from typing import Optional


class TranslationError(Exception):
    """Base class for recoverable template evaluation failures.

    Attributes:
        locale: Locale the template was evaluated for.
        match: Raw placeholder text that failed, when known.
    """

    def __init__(self, message: str, locale: str, match: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.locale = locale
        self.match = match

    def __str__(self) -> str:
        return self.message


class InterpolationError(TranslationError):
    """A ``{{...}}`` placeholder could not produce a value.

    Attributes:
        variable: The variable path of the placeholder (may be empty).
    """

    def __init__(self, message: str, locale: str, match: str, variable: str):
        super().__init__(message, locale, match)
        self.variable = variable

    def __repr__(self) -> str:
        return (
            f"InterpolationError({self.message!r}, match={self.match!r}, "
            f"variable={self.variable!r}, locale={self.locale!r})"
        )


class NestingError(TranslationError):
    """A ``$t(...)`` placeholder could not be resolved.

    Attributes:
        key: The nested key (empty when the placeholder had none).
    """

    def __init__(self, message: str, locale: str, match: str, key: str):
        super().__init__(message, locale, match)
        self.key = key

    def __repr__(self) -> str:
        return (
            f"NestingError({self.message!r}, match={self.match!r}, "
            f"key={self.key!r}, locale={self.locale!r})"
        )


class NestingFormatError(ValueError):
    """A nesting placeholder carries more than one variables block."""


class NestingVariablesError(TypeError):
    """A nesting variables block is not a JSON object."""

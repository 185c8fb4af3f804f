"""Translation models for i18n system.

Defines core data structures for managing translations, locales and the
parsed formatting steps of an interpolation.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, Dict, Mapping, Optional, Union

DEFAULT_NAMESPACE = "translation"

FormatOptionValue = Union[bool, str]


class Locale(str, Enum):
    """Supported locale identifiers.

    Uses IETF BCP 47 language tag format (e.g., en-US, fr-FR).
    """

    EN_US = "en-US"
    FR_FR = "fr-FR"
    PT_BR = "pt-BR"

    @classmethod
    def from_string(cls, locale_str: str) -> "Locale":
        """Convert string to Locale enum.

        Args:
            locale_str: Locale string (e.g., "en-US", "fr-FR").

        Returns:
            Matching Locale enum value.

        Raises:
            ValueError: If locale string is not supported.
        """
        try:
            return cls(locale_str)
        except ValueError as e:
            raise ValueError(f"Unsupported locale: {locale_str}") from e

    @property
    def language(self) -> str:
        """Get language part of locale (e.g., "en" from "en-US")."""
        return self.value.split("-")[0]

    @property
    def region(self) -> str:
        """Get region part of locale (e.g., "US" from "en-US")."""
        parts = self.value.split("-")
        return parts[1] if len(parts) > 1 else ""


@dataclass(frozen=True)
class TranslationKey:
    """Represents a translation key for accessing translated messages.

    Keys are split into a namespace and a message key, where the message key
    may itself be a path (e.g., "incident:status.open").
    Frozen to ensure immutability and hashability for caching.

    Attributes:
        namespace: Top-level namespace (e.g., "incident", "translation").
        message_key: Message path inside the namespace (e.g., "status.open").
    """

    namespace: str
    message_key: str

    def __str__(self) -> str:
        return f"{self.namespace}:{self.message_key}"

    @classmethod
    def from_string(
        cls,
        key_string: str,
        namespace_separator: str = ":",
        default_namespace: str = DEFAULT_NAMESPACE,
    ) -> "TranslationKey":
        """Create TranslationKey from a "namespace:key" string.

        When the separator is absent the whole string is the message key and
        the namespace falls back to ``default_namespace``.

        Args:
            key_string: Key with optional namespace prefix.
            namespace_separator: Separator between namespace and key.
            default_namespace: Namespace used when none is given.

        Returns:
            TranslationKey instance.
        """
        if namespace_separator and namespace_separator in key_string:
            namespace, message_key = key_string.split(namespace_separator, 1)
            return cls(namespace=namespace, message_key=message_key)
        return cls(namespace=default_namespace, message_key=key_string)


@dataclass(frozen=True)
class InterpolationFormat:
    """One parsed step of a formatting chain.

    ``{{price, currency(symbol: €; short: true)}}`` produces
    ``InterpolationFormat("currency", {"symbol": "€", "short": True})``.

    Attributes:
        name: Formatter name looked up in the formats registry.
        options: Ordered option mapping; values are bools or strings.
    """

    FALLBACK: ClassVar["InterpolationFormat"]

    name: str
    options: Mapping[str, FormatOptionValue] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self):
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InterpolationFormat):
            return NotImplemented
        return self.name == other.name and dict(self.options) == dict(other.options)

    def __hash__(self) -> int:
        return hash((self.name, tuple(self.options.items())))


InterpolationFormat.FALLBACK = InterpolationFormat("fallback")


@dataclass
class TranslationCatalog:
    """Container for translations in a specific locale.

    Stores all translation messages for a single locale, organized by namespace.

    Attributes:
        locale: The Locale this catalog is for.
        messages: Nested dict structure {namespace: {key: message_or_group}}.
        loaded_at: Timestamp (ISO 8601) when translations were loaded.
    """

    locale: Locale
    messages: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    loaded_at: Optional[str] = None

    def get_message(
        self, key: TranslationKey, key_separator: Optional[str] = "."
    ) -> Optional[str]:
        """Retrieve a translation message by key.

        The message key is walked through nested groups using
        ``key_separator``; a falsy separator disables path walking.

        Args:
            key: TranslationKey with namespace and message_key.
            key_separator: Separator between nested key segments.

        Returns:
            Translated message string, or None if not found or not a string.
        """
        value: Any = self.messages.get(key.namespace)
        if value is None:
            return None

        if key.message_key in value and isinstance(value[key.message_key], str):
            return value[key.message_key]

        segments = key.message_key.split(key_separator) if key_separator else []
        if len(segments) < 2:
            return None

        for segment in segments:
            if not isinstance(value, Mapping) or segment not in value:
                return None
            value = value[segment]
        return value if isinstance(value, str) else None

    def set_message(
        self, key: TranslationKey, message: str, key_separator: Optional[str] = "."
    ) -> None:
        """Set a translation message, creating intermediate groups as needed.

        Args:
            key: TranslationKey with namespace and message_key.
            message: Translated message string.
            key_separator: Separator between nested key segments.
        """
        group = self.messages.setdefault(key.namespace, {})
        segments = key.message_key.split(key_separator) if key_separator else [
            key.message_key
        ]
        for segment in segments[:-1]:
            group = group.setdefault(segment, {})
        group[segments[-1]] = message

    def has_message(
        self, key: TranslationKey, key_separator: Optional[str] = "."
    ) -> bool:
        """Check if translation exists for given key."""
        return self.get_message(key, key_separator) is not None

    def get_namespace(self, namespace: str) -> Dict[str, Any]:
        """Get all messages for a specific namespace.

        Args:
            namespace: Namespace identifier (e.g., "incident").

        Returns:
            Dictionary of all messages in namespace.
        """
        return self.messages.get(namespace, {})

    def merge(self, other: "TranslationCatalog") -> None:
        """Deep-merge another catalog into this one.

        Later entries override earlier ones; nested groups are merged
        key by key.

        Args:
            other: TranslationCatalog to merge.
        """
        for namespace, messages in other.messages.items():
            _deep_update(self.messages.setdefault(namespace, {}), messages)


def _deep_update(target: Dict[str, Any], source: Mapping[str, Any]) -> None:
    for name, value in source.items():
        if isinstance(value, Mapping) and isinstance(target.get(name), dict):
            _deep_update(target[name], value)
        elif isinstance(value, Mapping):
            target[name] = dict(value)
        else:
            target[name] = value

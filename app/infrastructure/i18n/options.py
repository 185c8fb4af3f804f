"""Options controlling how translation templates are evaluated.

I18nOptions is an immutable value. Every field is optional so call-site
options can be layered over library defaults with ``merge``: a field set on
the override wins, a field left as ``None`` keeps the base value.

Usage:
    from infrastructure.i18n.options import BASE_OPTIONS, I18nOptions

    options = BASE_OPTIONS.merge(I18nOptions(interpolation_prefix="[["))
"""

from dataclasses import dataclass, fields, replace
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Sequence, Tuple

from infrastructure.configuration.infrastructure.i18n import DEFAULT_MAX_NESTING_DEPTH
from infrastructure.i18n.models import FormatOptionValue, InterpolationFormat

# (value, format, locale, options) -> new value or None
ValueFormatter = Callable[[Any, InterpolationFormat, str, "I18nOptions"], Any]

# (locale, key, variables, options) -> replacement text or None
MissingKeyHandler = Callable[
    [str, str, Mapping[str, Any], "I18nOptions"], Optional[str]
]

# (locale, namespace, key, variables, options, error) -> replacement text
TranslationFailedHandler = Callable[
    [str, str, str, Mapping[str, Any], "I18nOptions", Exception], str
]

EscapeHandler = Callable[[str], str]


@dataclass(frozen=True)
class I18nOptions:
    """Delimiters, separators, formatters and hooks for template evaluation.

    Attributes:
        fallback_namespaces: Namespaces searched, in order, when a key is
            not found in the requested namespace.
        namespace_separator: Separates the namespace from the key ("ns:key").
        context_separator: Inserted between a key and its context value.
        plural_separator: Inserted between a key and its plural suffix.
        key_separator: Separates nested key segments, in catalogs and in
            interpolated variable paths.
        plural_suffix: Suffix of the simple plural form ("key_plural").
        interpolation_prefix: Opening delimiter of interpolations. May be empty.
        interpolation_suffix: Closing delimiter of interpolations. May be empty.
        interpolation_separator: Separates the variable from its formats.
            Must never be empty.
        nesting_prefix: Opening delimiter of nestings. May be empty.
        nesting_suffix: Closing delimiter of nestings. May be empty.
        nesting_separator: Separates the nested key from its JSON variables.
            Must never be empty.
        options_separator: Separates format options ("a: 1; b: 2").
        option_value_separator: Separates an option name from its value.
        formatter_values: Maps raw format option values to the values
            formatters receive. Defaults to "true" and "false" as booleans.
        formats: Registry of formatter functions by format name.
        missing_format_handler: Called for format names missing from
            ``formats``, and once more to coerce a non-text final value.
        missing_key_handler: Called when a key cannot be found at all.
        translation_failed_handler: Called when interpolation or nesting
            fails; its result replaces the failed placeholder.
        escape: Escapes plain interpolation values. Defaults to HTML escaping.
        max_nesting_depth: Maximum depth of nested translate calls.
    """

    fallback_namespaces: Optional[Tuple[str, ...]] = None
    namespace_separator: Optional[str] = None
    context_separator: Optional[str] = None
    plural_separator: Optional[str] = None
    key_separator: Optional[str] = None
    plural_suffix: Optional[str] = None
    interpolation_prefix: Optional[str] = None
    interpolation_suffix: Optional[str] = None
    interpolation_separator: Optional[str] = None
    nesting_prefix: Optional[str] = None
    nesting_suffix: Optional[str] = None
    nesting_separator: Optional[str] = None
    options_separator: Optional[str] = None
    option_value_separator: Optional[str] = None
    formatter_values: Optional[Mapping[str, FormatOptionValue]] = None
    formats: Optional[Mapping[str, ValueFormatter]] = None
    missing_format_handler: Optional[ValueFormatter] = None
    missing_key_handler: Optional[MissingKeyHandler] = None
    translation_failed_handler: Optional[TranslationFailedHandler] = None
    escape: Optional[EscapeHandler] = None
    max_nesting_depth: Optional[int] = None

    def __post_init__(self):
        if self.fallback_namespaces is not None:
            object.__setattr__(
                self, "fallback_namespaces", tuple(self.fallback_namespaces)
            )
        if self.formats is not None:
            object.__setattr__(self, "formats", MappingProxyType(dict(self.formats)))
        if self.formatter_values is not None:
            object.__setattr__(
                self, "formatter_values", MappingProxyType(dict(self.formatter_values))
            )

    def __hash__(self) -> int:
        values = []
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Mapping):
                value = frozenset(value.items())
            values.append(value)
        return hash(tuple(values))

    def merge(self, other: Optional["I18nOptions"]) -> "I18nOptions":
        """Create new options where every field set on ``other`` wins.

        If ``other`` is None, returns self.
        """
        if other is None:
            return self
        return self.copy_with(
            **{f.name: getattr(other, f.name) for f in fields(other)}
        )

    def copy_with(self, **changes: Any) -> "I18nOptions":
        """Create new options overriding the given fields that aren't None."""
        return replace(
            self, **{name: value for name, value in changes.items() if value is not None}
        )


BASE_OPTIONS = I18nOptions(
    fallback_namespaces=None,
    namespace_separator=":",
    context_separator="_",
    plural_separator="_",
    key_separator=".",
    plural_suffix="plural",
    interpolation_prefix="{{",
    interpolation_suffix="}}",
    interpolation_separator=",",
    nesting_prefix="$t(",
    nesting_suffix=")",
    nesting_separator=",",
    options_separator=";",
    option_value_separator=":",
    formatter_values=None,
    formats=None,
    missing_format_handler=None,
    missing_key_handler=None,
    translation_failed_handler=None,
    escape=None,
    max_nesting_depth=DEFAULT_MAX_NESTING_DEPTH,
)


def merge_options(
    base: I18nOptions, override: Optional[I18nOptions] = None
) -> I18nOptions:
    """Layer ``override`` over ``base`` field by field."""
    return base.merge(override)


def with_defaults(
    options: Optional[I18nOptions] = None,
    fallback_namespaces: Optional[Sequence[str]] = None,
) -> I18nOptions:
    """Fill every unset field of ``options`` from BASE_OPTIONS."""
    merged = BASE_OPTIONS.merge(options)
    if merged.fallback_namespaces is None and fallback_namespaces:
        merged = merged.copy_with(fallback_namespaces=tuple(fallback_namespaces))
    return merged

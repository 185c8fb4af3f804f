"""i18n system - translation catalogs and template evaluation.

Provides translation management and the evaluation of translation templates:
variable interpolation with format chains, and nesting of other keys.

Main components:
- models: Locale, TranslationKey, TranslationCatalog, InterpolationFormat
- options: I18nOptions and BASE_OPTIONS
- patterns: placeholder matchers built from the options
- formatter: format string parsing and format chains
- interpolator: interpolate() and escape()
- nesting: nest()
- loader: TranslationLoader, YAMLTranslationLoader, JSONTranslationLoader,
  RemoteTranslationLoader
- translator: Translator service
"""

from infrastructure.i18n.errors import (
    InterpolationError,
    NestingError,
    NestingFormatError,
    NestingVariablesError,
    TranslationError,
)
from infrastructure.i18n.formatter import format_value, parse_format_string
from infrastructure.i18n.interpolator import escape, interpolate
from infrastructure.i18n.loader import (
    JSONTranslationLoader,
    RemoteTranslationLoader,
    TranslationLoader,
    YAMLTranslationLoader,
)
from infrastructure.i18n.models import (
    InterpolationFormat,
    Locale,
    TranslationCatalog,
    TranslationKey,
)
from infrastructure.i18n.nesting import Translate, nest
from infrastructure.i18n.options import (
    BASE_OPTIONS,
    I18nOptions,
    merge_options,
    with_defaults,
)
from infrastructure.i18n.patterns import CompiledPatterns, compile_patterns
from infrastructure.i18n.translator import Translator

__all__ = [
    "BASE_OPTIONS",
    "CompiledPatterns",
    "I18nOptions",
    "InterpolationError",
    "InterpolationFormat",
    "JSONTranslationLoader",
    "Locale",
    "NestingError",
    "NestingFormatError",
    "NestingVariablesError",
    "RemoteTranslationLoader",
    "Translate",
    "TranslationCatalog",
    "TranslationError",
    "TranslationKey",
    "TranslationLoader",
    "Translator",
    "YAMLTranslationLoader",
    "compile_patterns",
    "escape",
    "format_value",
    "interpolate",
    "merge_options",
    "nest",
    "parse_format_string",
    "with_defaults",
]

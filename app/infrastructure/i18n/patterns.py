r"""Regular expressions matching interpolation and nesting placeholders.

Patterns are built from the configured delimiters on every call; delimiters
are escaped so they always match literally.

With the default options:
    interpolation:           \{\{(.*?)\}\}
    unescaped interpolation: \{\{-(.+?)\}\}
    nesting:                 \$t\((?P<key>.*?)(,\s*(?P<variables>.*?)\s*)?\)
"""

import re
from dataclasses import dataclass

from infrastructure.i18n.options import I18nOptions

UNESCAPE_MARKER = "-"


@dataclass(frozen=True)
class CompiledPatterns:
    """The three placeholder matchers derived from one set of options.

    Attributes:
        interpolation: Group 1 is the raw "variable, format, ..." body.
        unescaped_interpolation: Group 1 is the body after the dash, leading
            whitespace included.
        nesting: Named groups ``key`` and ``variables``; the variables group
            is None when absent and never has surrounding whitespace.
    """

    interpolation: re.Pattern
    unescaped_interpolation: re.Pattern
    nesting: re.Pattern


def interpolation_pattern(options: I18nOptions) -> re.Pattern:
    prefix = re.escape(options.interpolation_prefix or "")
    suffix = re.escape(options.interpolation_suffix or "")
    return re.compile(f"{prefix}(.*?){suffix}", re.DOTALL)


def interpolation_unescape_pattern(options: I18nOptions) -> re.Pattern:
    prefix = re.escape(options.interpolation_prefix or "")
    suffix = re.escape(options.interpolation_suffix or "")
    return re.compile(f"{prefix}{UNESCAPE_MARKER}(.+?){suffix}", re.DOTALL)


def nesting_pattern(options: I18nOptions) -> re.Pattern:
    prefix = re.escape(options.nesting_prefix or "")
    suffix = re.escape(options.nesting_suffix or "")
    separator = re.escape(options.nesting_separator or "")
    return re.compile(
        f"{prefix}(?P<key>.*?)({separator}\\s*(?P<variables>.*?)\\s*)?{suffix}",
        re.DOTALL,
    )


def compile_patterns(options: I18nOptions) -> CompiledPatterns:
    """Build all placeholder matchers for ``options``."""
    return CompiledPatterns(
        interpolation=interpolation_pattern(options),
        unescaped_interpolation=interpolation_unescape_pattern(options),
        nesting=nesting_pattern(options),
    )

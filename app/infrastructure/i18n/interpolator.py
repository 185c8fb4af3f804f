"""Variable interpolation for translation templates.

Replaces ``{{variable}}``, ``{{variable, format, ...}}`` and the unescaped
``{{-variable}}`` placeholders with values taken from a variables mapping.

Usage:
    from infrastructure.i18n.interpolator import interpolate
    from infrastructure.i18n.options import BASE_OPTIONS

    interpolate("en-US", "Hello {{user.name}}", {"user": {"name": "Ada"}}, BASE_OPTIONS)
"""

import re
from typing import Any, Iterator, List, Mapping, Sequence, Tuple

from infrastructure.i18n.errors import InterpolationError
from infrastructure.i18n.formatter import format_value
from infrastructure.i18n.options import I18nOptions
from infrastructure.i18n.patterns import compile_patterns

_MISSING = object()

_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
    "/": "&#x2F;",
}


def escape(text: str) -> str:
    """HTML-escape ``text`` in a single pass.

    Entities already present are escaped again: ``escape("&amp;")`` is
    ``"&amp;amp;"``.
    """
    return "".join(_ESCAPES.get(char, char) for char in text)


def interpolate(
    locale: str,
    string: str,
    variables: Mapping[str, Any],
    options: I18nOptions,
    namespace: str = "",
    key: str = "",
) -> str:
    """Replace every interpolation placeholder in ``string``.

    Args:
        locale: Locale passed to formatters and handlers.
        string: The template.
        variables: Nested mapping the variable paths are resolved against.
        options: Fully populated options (see ``with_defaults``).
        namespace: Namespace of the enclosing translation, for the
            translation_failed_handler.
        key: Key of the enclosing translation, for the
            translation_failed_handler.

    Returns:
        The template with all placeholders substituted.

    Raises:
        InterpolationError: When a placeholder yields no value and no
            translation_failed_handler is configured.
    """
    escape_handler = options.escape or escape
    parts: List[str] = []
    cursor = 0

    for match, escaped in _iter_matches(string, options):
        parts.append(string[cursor : match.start()])
        cursor = match.end()

        variable, formats = _split_body(match.group(1), options)
        value = _resolve_variable(variable, variables, options)
        result = format_value(
            None if value is _MISSING else value, formats, locale, options
        )

        if result is None:
            error = InterpolationError(
                f'Could not evaluate or format variable "{variable}"',
                locale=locale,
                match=match.group(0),
                variable=variable,
            )
            handler = options.translation_failed_handler
            if handler is None:
                raise error
            parts.append(handler(locale, namespace, key, variables, options, error))
        elif escaped:
            parts.append(escape_handler(result))
        else:
            parts.append(result)

    parts.append(string[cursor:])
    return "".join(parts)


def _iter_matches(
    string: str, options: I18nOptions
) -> Iterator[Tuple[re.Match, bool]]:
    """Yield (match, escaped) for both placeholder forms, left to right.

    ``{{-name}}`` is matched by both patterns at the same position; the
    unescaped form wins. Overlapping matches are dropped.
    """
    patterns = compile_patterns(options)
    found = [
        (match, False) for match in patterns.unescaped_interpolation.finditer(string)
    ]
    found.extend((match, True) for match in patterns.interpolation.finditer(string))
    found.sort(key=lambda item: (item[0].start(), item[1]))

    cursor = 0
    previous_start = -1
    for match, escaped in found:
        if match.start() < cursor or match.start() == previous_start:
            continue
        cursor = match.end()
        previous_start = match.start()
        yield match, escaped


def _split_body(body: str, options: I18nOptions) -> Tuple[str, Sequence[str]]:
    separator = options.interpolation_separator or ","
    variable, found, rest = body.partition(separator)
    formats = rest.split(separator) if found else []
    return variable.strip(), formats


def _resolve_variable(
    variable: str, variables: Mapping[str, Any], options: I18nOptions
) -> Any:
    if not variable:
        return _MISSING

    key_separator = options.key_separator
    segments = variable.split(key_separator) if key_separator else [variable]

    value: Any = variables
    for segment in segments:
        if not isinstance(value, Mapping) or segment not in value:
            return _MISSING
        value = value[segment]
    return value

"""Format chains applied to interpolated values.

A placeholder such as ``{{price, number(decimals: 2), currency}}`` runs the
variable's value through each named formatter in order.
"""

from typing import Any, Dict, Iterable, Optional

from infrastructure.configuration import settings
from infrastructure.i18n.models import FormatOptionValue, InterpolationFormat
from infrastructure.i18n.options import I18nOptions
from infrastructure.logging import get_module_logger

logger = get_module_logger()

OPTIONS_PREFIX = "("
OPTIONS_SUFFIX = ")"

_LITERAL_VALUES: Dict[str, FormatOptionValue] = {
    "true": True,
    "false": False,
}


def parse_format_string(
    format_string: str, options: I18nOptions
) -> InterpolationFormat:
    """Parse a format token into its name and options.

    Examples:
        "uppercase"
        "datetime(format: dd/MM/yyyy)"
        "number(decimals: 2; grouping: false)"

    Option values may contain the option value separator; only the first one
    splits. When an option name repeats, the first value is kept. Values found
    in ``options.formatter_values`` (default: "true" and "false") are replaced
    by their mapped value.

    Args:
        format_string: Raw format token.
        options: Options providing the option separators.

    Returns:
        The parsed InterpolationFormat.
    """
    options_separator = options.options_separator or ";"
    option_value_separator = options.option_value_separator or ":"
    literal_values = options.formatter_values or _LITERAL_VALUES

    name = format_string.strip()
    if OPTIONS_PREFIX not in name:
        return InterpolationFormat(name)

    name, _, body = name.partition(OPTIONS_PREFIX)
    end = body.rfind(OPTIONS_SUFFIX)
    if end != -1:
        body = body[:end]

    format_options: Dict[str, FormatOptionValue] = {}
    for option in body.strip().split(options_separator):
        option = option.strip()
        if not option:
            continue
        option_key, _, value = option.partition(option_value_separator)
        option_key = option_key.strip()
        value = value.strip()
        if option_key not in format_options:
            format_options[option_key] = literal_values.get(value, value)

    return InterpolationFormat(name.strip(), format_options)


def format_value(
    value: Any,
    formats: Iterable[str],
    locale: str,
    options: I18nOptions,
) -> Optional[str]:
    """Run ``value`` through every format in ``formats``.

    A formatter returning None does not stop the chain: later formatters can
    still produce a value from nothing. A formatter that raises is skipped
    and the current value carries on to the next format. The same holds for
    the final fallback format that turns a non-text value into text; if it
    raises, the value is stringified as is.

    Args:
        value: The resolved variable, or None when there is none.
        formats: Raw format tokens, in order.
        locale: Locale passed through to each formatter.
        options: Options providing the formats registry and handlers.

    Returns:
        The final value as text, or None when the chain produced nothing.
    """
    registry = options.formats or {}
    current = value

    for format_string in formats:
        try:
            parsed = parse_format_string(format_string, options)
            formatter = registry.get(parsed.name) or options.missing_format_handler
            if formatter is not None:
                current = formatter(current, parsed, locale, options)
        except Exception as e:  # pylint: disable=broad-except
            _log_formatter_failure(format_string, locale, e)

    if current is not None and not isinstance(current, str):
        fallback = options.missing_format_handler
        if fallback is not None:
            try:
                current = fallback(
                    current, InterpolationFormat.FALLBACK, locale, options
                )
            except Exception as e:  # pylint: disable=broad-except
                _log_formatter_failure(InterpolationFormat.FALLBACK.name, locale, e)

    return None if current is None else str(current)


def _log_formatter_failure(format_string: str, locale: str, error: Exception) -> None:
    if not settings.is_production:
        logger.warning(
            "formatter_failed",
            format=format_string,
            locale=locale,
            error=str(error),
            exc_info=True,
        )

"""Nested translations inside translation templates.

``$t(key)`` is replaced by the translation of ``key``; ``$t(key, {"a": 1})``
translates ``key`` with the JSON object merged over the current variables.
"""

import json
from contextvars import ContextVar
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from infrastructure.configuration.infrastructure.i18n import DEFAULT_MAX_NESTING_DEPTH
from infrastructure.i18n.errors import (
    NestingError,
    NestingFormatError,
    NestingVariablesError,
)
from infrastructure.i18n.options import I18nOptions
from infrastructure.i18n.patterns import nesting_pattern
from infrastructure.logging import get_module_logger

logger = get_module_logger()

# (key, locale, variables, options) -> translation or None
Translate = Callable[[str, str, Mapping[str, Any], I18nOptions], Optional[str]]

_nesting_depth: ContextVar[int] = ContextVar("i18n_nesting_depth", default=0)


def nest(
    locale: str,
    string: str,
    translate: Translate,
    variables: Mapping[str, Any],
    options: I18nOptions,
    namespace: str = "",
    key: str = "",
) -> str:
    """Replace every nesting placeholder in ``string``.

    Either every placeholder resolves or the whole call fails; no partial
    result is returned.

    Args:
        locale: Locale passed to ``translate``.
        string: The template.
        translate: Resolves a nested key to its final text, or None.
        variables: Variables of the enclosing translation. Never mutated.
        options: Fully populated options (see ``with_defaults``).
        namespace: Namespace of the enclosing translation, for logging.
        key: Key of the enclosing translation, for logging.

    Returns:
        The template with all nestings substituted.

    Raises:
        NestingError: When a key is empty, cannot be translated, or the
            nesting depth limit is reached.
        NestingFormatError: When a placeholder has more than one variables
            block.
        NestingVariablesError: When a variables block is not a JSON object.
    """
    replacements: List[Tuple[int, int, str]] = []

    for match in nesting_pattern(options).finditer(string):
        nested_key = match.group("key").strip()
        if not nested_key:
            raise NestingError(
                "Nesting has no key",
                locale=locale,
                match=match.group(0),
                key=nested_key,
            )

        nested_variables: Mapping[str, Any] = variables
        block = match.group("variables")
        if block is not None:
            nested_variables = dict(variables)
            nested_variables.update(_parse_variables(block, options))

        result = _translate_nested(
            translate, nested_key, locale, nested_variables, options, match.group(0)
        )
        if result is None:
            logger.debug(
                "nested_translation_not_found",
                namespace=namespace,
                key=key,
                nested_key=nested_key,
                locale=locale,
            )
            raise NestingError(
                f'Could not resolve nested key "{nested_key}"',
                locale=locale,
                match=match.group(0),
                key=nested_key,
            )
        replacements.append((match.start(), match.end(), result))

    if not replacements:
        return string

    parts: List[str] = []
    cursor = 0
    for start, end, result in replacements:
        parts.append(string[cursor:start])
        parts.append(result)
        cursor = end
    parts.append(string[cursor:])
    return "".join(parts)


def _translate_nested(
    translate: Translate,
    nested_key: str,
    locale: str,
    variables: Mapping[str, Any],
    options: I18nOptions,
    raw_match: str,
) -> Optional[str]:
    depth = _nesting_depth.get()
    max_depth = options.max_nesting_depth
    if max_depth is None:
        max_depth = DEFAULT_MAX_NESTING_DEPTH

    if depth >= max_depth:
        logger.warning(
            "nesting_depth_exceeded",
            nested_key=nested_key,
            locale=locale,
            max_depth=max_depth,
        )
        raise NestingError(
            f'Nesting depth {max_depth} exceeded while resolving "{nested_key}"',
            locale=locale,
            match=raw_match,
            key=nested_key,
        )

    token = _nesting_depth.set(depth + 1)
    try:
        return translate(nested_key, locale, variables, options)
    finally:
        _nesting_depth.reset(token)


def _parse_variables(block: str, options: I18nOptions) -> Dict[str, Any]:
    """Decode a nesting variables block into a dict.

    ``{"a": 1}, {"b": 2}`` is a structural error; anything else that is not
    exactly one JSON object is a variables error. An empty block before the
    separator, as in ``$t(key, , {"a": 1})``, is structural too.
    """
    separator = options.nesting_separator or ","
    block = block.strip()
    if block.startswith(separator):
        raise NestingFormatError(f"Nesting has more than one variables block: {block}")

    try:
        parsed, end = json.JSONDecoder().raw_decode(block)
    except json.JSONDecodeError as e:
        raise NestingVariablesError(
            f"Nesting variables are not valid JSON: {block}"
        ) from e

    trailing = block[end:].strip()
    if trailing:
        if trailing.startswith(separator):
            raise NestingFormatError(
                f"Nesting has more than one variables block: {block}"
            )
        raise NestingVariablesError(f"Nesting variables are not valid JSON: {block}")

    if not isinstance(parsed, dict):
        raise NestingVariablesError(
            f"Nesting variables must be a JSON object, got {type(parsed).__name__}"
        )
    return parsed

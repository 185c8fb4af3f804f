"""Translation service for retrieving and evaluating translated messages.

Looks keys up in loaded catalogs (with namespace, context, plural and locale
fallbacks) and evaluates the found template through nesting and
interpolation.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from infrastructure.i18n.errors import TranslationError
from infrastructure.i18n.interpolator import interpolate
from infrastructure.i18n.loader import TranslationLoader
from infrastructure.i18n.models import (
    DEFAULT_NAMESPACE,
    Locale,
    TranslationCatalog,
    TranslationKey,
)
from infrastructure.i18n.nesting import nest
from infrastructure.i18n.options import I18nOptions, with_defaults
from infrastructure.logging import get_module_logger

logger = get_module_logger()

LocaleLike = Union[Locale, str]


class Translator:
    """Service for translating messages.

    Manages catalogs for multiple locales and provides translate(), the
    lookup used for nested keys, and t(), which always returns text.

    Attributes:
        loader: TranslationLoader for loading translation files.
        catalogs: Cache of loaded TranslationCatalogs by locale.
        fallback_locale: Locale to use when key not found.
        options: Default options, merged under call-site options.
        interpolate_first: Run interpolation before nesting.
    """

    def __init__(
        self,
        loader: TranslationLoader,
        fallback_locale: Locale = Locale.EN_US,
        options: Optional[I18nOptions] = None,
        interpolate_first: bool = False,
    ):
        """Initialize Translator.

        Args:
            loader: TranslationLoader instance for loading translations.
            fallback_locale: Locale to use when key not found (default: en-US).
            options: Options layered over the library defaults.
            interpolate_first: Evaluate interpolation before nesting
                (default: nesting first).
        """
        self.loader = loader
        self.fallback_locale = fallback_locale
        self.options = with_defaults(options)
        self.interpolate_first = interpolate_first
        self.catalogs: Dict[Locale, TranslationCatalog] = {}
        logger.info(
            "initialized_translator",
            fallback_locale=fallback_locale.value,
            interpolate_first=interpolate_first,
        )

    def load_all(self) -> None:
        """Load all available locales from loader."""
        self.catalogs = self.loader.load_all()
        logger.info("loaded_all_translations", locale_count=len(self.catalogs))

    def load_locale(self, locale: Locale) -> None:
        """Load specific locale from loader.

        Raises:
            FileNotFoundError: If translation files not found.
        """
        self.catalogs[locale] = self.loader.load(locale)
        logger.info("loaded_locale_translations", locale=locale.value)

    def translate(
        self,
        key: str,
        locale: LocaleLike,
        variables: Optional[Mapping[str, Any]] = None,
        options: Optional[I18nOptions] = None,
    ) -> Optional[str]:
        """Find and evaluate the message for ``key``.

        Args:
            key: Key with optional namespace, e.g. "incident:status.open".
            locale: Locale to translate to.
            variables: Variables for interpolation; "context" and "count"
                also select context and plural forms of the key.
            options: Call-site options layered over self.options.

        Returns:
            The evaluated message; the missing_key_handler result when the
            key cannot be found; None when there is no handler either.

        Raises:
            InterpolationError, NestingError: When evaluation fails and no
                translation_failed_handler is configured.
        """
        variables = variables if variables is not None else {}
        options = self.options.merge(options)

        found = self._find_message(key, locale, variables, options)
        if found is None:
            logger.info(
                "translation_not_found",
                key=key,
                locale=_locale_value(locale),
                fallback_locale=self.fallback_locale.value,
            )
            handler = options.missing_key_handler
            if handler is not None:
                return handler(locale, key, variables, options)
            return None

        message, translation_key = found
        return self._evaluate(message, translation_key, locale, variables, options)

    def t(
        self,
        key: str,
        locale: LocaleLike,
        variables: Optional[Mapping[str, Any]] = None,
        options: Optional[I18nOptions] = None,
    ) -> str:
        """Translate ``key``, falling back to the key itself.

        Returns:
            The translation, or ``key`` when it is missing or its
            evaluation failed.
        """
        try:
            result = self.translate(key, locale, variables, options)
        except TranslationError as e:
            logger.warning(
                "translation_failed",
                key=key,
                locale=_locale_value(locale),
                error=str(e),
                match=e.match,
            )
            return key
        return key if result is None else result

    def has_message(self, key: Union[TranslationKey, str], locale: Locale) -> bool:
        """Check if translation exists for key in locale.

        Returns:
            True if message exists in requested locale, False otherwise.
        """
        if isinstance(key, str):
            key = self._parse_key(key, self.options)
        catalog = self.catalogs.get(locale)
        return catalog.has_message(key, self.options.key_separator) if catalog else False

    def get_available_locales(self) -> list:
        """Get list of loaded locales."""
        return list(self.catalogs.keys())

    def get_catalog(self, locale: Locale) -> Optional[TranslationCatalog]:
        """Get complete catalog for a locale, or None if not loaded."""
        return self.catalogs.get(locale)

    def reload(self) -> None:
        """Reload all translations from loader."""
        self.catalogs.clear()
        clear_cache = getattr(self.loader, "clear_cache", None)
        if clear_cache is not None:
            clear_cache()
        self.load_all()
        logger.info("reloaded_all_translations")

    def _evaluate(
        self,
        message: str,
        translation_key: TranslationKey,
        locale: LocaleLike,
        variables: Mapping[str, Any],
        options: I18nOptions,
    ) -> str:
        namespace = translation_key.namespace
        key = translation_key.message_key
        try:
            if self.interpolate_first:
                message = interpolate(locale, message, variables, options, namespace, key)
                return nest(
                    locale, message, self.translate, variables, options, namespace, key
                )
            message = nest(
                locale, message, self.translate, variables, options, namespace, key
            )
            return interpolate(locale, message, variables, options, namespace, key)
        except TranslationError as e:
            handler = options.translation_failed_handler
            if handler is None:
                raise
            logger.info(
                "translation_failed_handled",
                key=str(translation_key),
                locale=_locale_value(locale),
                error=str(e),
            )
            return handler(locale, namespace, key, variables, options, e)

    def _find_message(
        self,
        key: str,
        locale: LocaleLike,
        variables: Mapping[str, Any],
        options: I18nOptions,
    ) -> Optional[Tuple[str, TranslationKey]]:
        translation_key = self._parse_key(key, options)
        namespaces = [translation_key.namespace]
        namespaces.extend(
            namespace
            for namespace in options.fallback_namespaces or ()
            if namespace not in namespaces
        )
        candidates = self._candidate_keys(translation_key.message_key, variables, options)

        locales: List[Locale] = []
        requested = _coerce_locale(locale)
        if requested is not None:
            locales.append(requested)
        if self.fallback_locale not in locales:
            locales.append(self.fallback_locale)

        for current_locale in locales:
            catalog = self.catalogs.get(current_locale)
            if catalog is None:
                continue
            for namespace in namespaces:
                for candidate in candidates:
                    found_key = TranslationKey(namespace, candidate)
                    message = catalog.get_message(found_key, options.key_separator)
                    if message is not None:
                        if current_locale != requested:
                            logger.info(
                                "used_fallback_translation",
                                key=str(found_key),
                                requested_locale=_locale_value(locale),
                                fallback_locale=current_locale.value,
                            )
                        return message, found_key
        return None

    @staticmethod
    def _parse_key(key: str, options: I18nOptions) -> TranslationKey:
        fallback_namespaces = options.fallback_namespaces or ()
        default_namespace = (
            fallback_namespaces[0] if fallback_namespaces else DEFAULT_NAMESPACE
        )
        return TranslationKey.from_string(
            key, options.namespace_separator or "", default_namespace
        )

    @staticmethod
    def _candidate_keys(
        message_key: str, variables: Mapping[str, Any], options: I18nOptions
    ) -> List[str]:
        """Keys to try, most specific first: context+plural, context, plural, key."""
        plural = ""
        count = variables.get("count")
        if isinstance(count, (int, float)) and not isinstance(count, bool) and count != 1:
            plural = f"{options.plural_separator or ''}{options.plural_suffix or ''}"

        candidates = []
        context = variables.get("context")
        if isinstance(context, str) and context:
            context_key = f"{message_key}{options.context_separator or ''}{context}"
            if plural:
                candidates.append(context_key + plural)
            candidates.append(context_key)
        if plural:
            candidates.append(message_key + plural)
        candidates.append(message_key)
        return candidates


def _coerce_locale(locale: LocaleLike) -> Optional[Locale]:
    if isinstance(locale, Locale):
        return locale
    try:
        return Locale.from_string(locale)
    except ValueError:
        return None


def _locale_value(locale: LocaleLike) -> str:
    return locale.value if isinstance(locale, Locale) else str(locale)

"""Translation loading interface and implementations.

Defines the contract for loading translations and provides YAML and JSON
file loaders, plus a loader that fetches catalogs over HTTP and falls back
to a file loader.
"""

import json
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlparse

import requests
import yaml

from infrastructure.i18n.models import Locale, TranslationCatalog
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class TranslationLoader(ABC):
    """Abstract base for translation loaders.

    Implementations must define how to load and parse translation files
    for different locales.
    """

    @abstractmethod
    def load(self, locale: Locale) -> TranslationCatalog:
        """Load translations for a specific locale.

        Args:
            locale: Locale to load translations for.

        Returns:
            TranslationCatalog with loaded messages.

        Raises:
            FileNotFoundError: If translation files not found.
            ValueError: If translation format is invalid.
        """

    @abstractmethod
    def load_all(self) -> Dict[Locale, TranslationCatalog]:
        """Load translations for all supported locales.

        Returns:
            Dict mapping Locale to TranslationCatalog.
        """


class FileTranslationLoader(TranslationLoader):
    """Loader for translation files named ``<name>.<locale>.<extension>``.

    Every file holds a mapping of namespace to (possibly nested) messages.
    All files of a locale are merged into a single catalog, in file name
    order.

    Attributes:
        translations_dir: Path to directory containing translation files.
        cache: Cache of loaded catalogs (locale -> catalog).
    """

    extension: str = ""

    def __init__(
        self,
        translations_dir: Path,
        use_cache: bool = True,
    ):
        """Initialize the loader.

        Args:
            translations_dir: Path to directory with translation files.
            use_cache: Whether to cache loaded catalogs in memory.

        Raises:
            ValueError: If the directory does not exist.
        """
        self.translations_dir = Path(translations_dir)
        self.use_cache = use_cache
        self.cache: Dict[Locale, TranslationCatalog] = {}

        if not self.translations_dir.exists():
            raise ValueError(
                f"Translations directory not found: {self.translations_dir}"
            )

        logger.info(
            "initialized_translation_loader",
            loader=type(self).__name__,
            translations_dir=str(self.translations_dir),
            use_cache=use_cache,
        )

    @abstractmethod
    def _parse(self, content: str) -> Any:
        """Parse file content.

        Raises:
            ValueError: If the content cannot be parsed.
        """

    def load(self, locale: Locale) -> TranslationCatalog:
        """Load translations for a locale.

        Searches for files matching pattern: *.<locale>.<extension>
        Merges all matching files into single catalog.

        Args:
            locale: Locale to load.

        Returns:
            TranslationCatalog with loaded messages.

        Raises:
            FileNotFoundError: If no files found for locale.
            ValueError: If parsing fails.
        """
        if self.use_cache and locale in self.cache:
            logger.info("loaded_from_cache", locale=locale.value)
            return self.cache[locale]

        files = sorted(
            self.translations_dir.glob(f"*.{locale.value}.{self.extension}")
        )
        if not files:
            raise FileNotFoundError(
                f"No translation files found for locale {locale.value} in {self.translations_dir}"
            )

        catalog = TranslationCatalog(
            locale=locale, loaded_at=datetime.now(timezone.utc).isoformat()
        )
        for path in files:
            with open(path, "r", encoding="utf-8") as f:
                try:
                    data = self._parse(f.read())
                except ValueError as e:
                    logger.error("translation_parse_error", file=str(path), error=str(e))
                    raise ValueError(f"Failed to parse {path}: {e}") from e
            if data:
                self._merge_data(catalog, data, path)

        logger.info(
            "loaded_translations",
            locale=locale.value,
            file_count=len(files),
            namespace_count=len(catalog.messages),
        )

        if self.use_cache:
            self.cache[locale] = catalog

        return catalog

    def load_all(self) -> Dict[Locale, TranslationCatalog]:
        """Load translations for all locales found in the directory.

        Returns:
            Dict mapping each Locale to its TranslationCatalog.

        Raises:
            ValueError: If no translation files found at all.
        """
        locales_found = set()
        for path in self.translations_dir.glob(f"*.{self.extension}"):
            # "incident.en-US.yml" -> "en-US"
            parts = path.stem.split(".")
            if len(parts) >= 2:
                try:
                    locales_found.add(Locale.from_string(parts[-1]))
                except ValueError:
                    logger.debug("skipped_unknown_locale_file", file=str(path))

        if not locales_found:
            raise ValueError(f"No translation files found in {self.translations_dir}")

        result = {}
        for locale in locales_found:
            try:
                result[locale] = self.load(locale)
            except FileNotFoundError:
                logger.warning("could_not_load_locale", locale=locale.value)

        return result

    def _merge_data(
        self,
        catalog: TranslationCatalog,
        data: Any,
        source_file: Path,
    ) -> None:
        """Merge parsed file data into catalog.

        Expected format:
        namespace:
          key1: message1
          group:
            key2: message2
        """
        if not isinstance(data, dict):
            logger.warning(
                "invalid_translation_format", file=str(source_file), expected="dict"
            )
            return

        namespaces = {}
        for namespace, messages in data.items():
            if not isinstance(messages, dict):
                logger.warning(
                    "invalid_namespace_format",
                    namespace=namespace,
                    expected="dict",
                )
                continue
            namespaces[namespace] = messages

        catalog.merge(TranslationCatalog(locale=catalog.locale, messages=namespaces))

    def clear_cache(self) -> None:
        """Clear all cached translations."""
        self.cache.clear()
        logger.info("cleared_translation_cache")


class YAMLTranslationLoader(FileTranslationLoader):
    """Loader for YAML translation files (``<name>.<locale>.yml``)."""

    extension = "yml"

    def _parse(self, content: str) -> Any:
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ValueError(str(e)) from e


class JSONTranslationLoader(FileTranslationLoader):
    """Loader for JSON translation bundles (``<name>.<locale>.json``)."""

    extension = "json"

    def _parse(self, content: str) -> Any:
        return json.loads(content)


class RemoteTranslationLoader(TranslationLoader):
    r"""Loader fetching translation bundles over HTTP.

    The endpoint answers with a JSON object mapping each namespace to a JSON
    encoded string of its messages::

        {"translation": "{\"greeting\": \"Hello {{name}}\"}"}

    A ``{locale}`` placeholder in the URL is replaced by the locale value.
    When the URL is not an absolute http(s) URL, the request fails or the
    status is outside 200-205, the locale is loaded from ``fallback``
    instead.

    Attributes:
        url: Bundle endpoint, optionally containing ``{locale}``.
        fallback: File loader used when the remote bundle is unavailable.
        timeout: Request timeout in seconds.
    """

    SUCCESS_STATUS_CODES = range(200, 206)

    def __init__(
        self,
        url: str,
        fallback: FileTranslationLoader,
        timeout: float = 10,
    ):
        self.url = url
        self.fallback = fallback
        self.timeout = timeout

        logger.info(
            "initialized_translation_loader",
            loader=type(self).__name__,
            url=url,
            fallback=type(fallback).__name__,
        )

    def load(self, locale: Locale) -> TranslationCatalog:
        """Fetch the bundle for a locale, or load it from the fallback.

        Raises:
            FileNotFoundError: If the fallback has no files for the locale.
            ValueError: If the remote bundle is not a namespace mapping of
                JSON objects.
        """
        url = self._locale_url(locale)
        if url is None:
            logger.warning("invalid_remote_translations_url", url=self.url)
            return self.fallback.load(locale)

        try:
            response = requests.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(
                "remote_translations_request_failed",
                url=url,
                locale=locale.value,
                error=str(e),
            )
            return self.fallback.load(locale)

        if response.status_code not in self.SUCCESS_STATUS_CODES:
            logger.warning(
                "remote_translations_unavailable",
                url=url,
                locale=locale.value,
                response_code=response.status_code,
            )
            return self.fallback.load(locale)

        catalog = TranslationCatalog(
            locale=locale,
            messages=self._decode_bundle(response.json()),
            loaded_at=datetime.now(timezone.utc).isoformat(),
        )
        logger.info(
            "loaded_remote_translations",
            url=url,
            locale=locale.value,
            namespace_count=len(catalog.messages),
        )
        return catalog

    def load_all(self) -> Dict[Locale, TranslationCatalog]:
        """Load every supported locale, skipping those with no translations.

        Raises:
            ValueError: If no locale could be loaded.
        """
        result = {}
        for locale in Locale:
            try:
                result[locale] = self.load(locale)
            except FileNotFoundError:
                logger.warning("could_not_load_locale", locale=locale.value)

        if not result:
            raise ValueError(f"No translations available from {self.url}")
        return result

    def clear_cache(self) -> None:
        """Clear the fallback loader's cache."""
        self.fallback.clear_cache()

    def _locale_url(self, locale: Locale) -> Optional[str]:
        url = self.url.replace("{locale}", locale.value)
        try:
            parsed = urlparse(url)
        except ValueError:
            return None
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            return None
        return url

    @staticmethod
    def _decode_bundle(payload: Any) -> Dict[str, Any]:
        if not isinstance(payload, Mapping):
            raise ValueError("Remote translation bundle must be a JSON object")

        namespaces = {}
        for namespace, encoded in payload.items():
            messages = json.loads(encoded) if isinstance(encoded, str) else encoded
            if not isinstance(messages, dict):
                raise ValueError(
                    f"Namespace {namespace} of the remote bundle is not an object"
                )
            namespaces[namespace] = messages
        return namespaces

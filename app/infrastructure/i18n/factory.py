"""Factory functions for creating i18n components.

Provides convenience functions for initializing translators with default
configurations taken from application settings.
"""

from pathlib import Path
from typing import Optional

from infrastructure.configuration import settings
from infrastructure.i18n.loader import (
    FileTranslationLoader,
    JSONTranslationLoader,
    RemoteTranslationLoader,
    TranslationLoader,
    YAMLTranslationLoader,
)
from infrastructure.i18n.models import Locale
from infrastructure.i18n.options import I18nOptions
from infrastructure.i18n.translator import Translator
from infrastructure.logging import get_module_logger

logger = get_module_logger()

LOADERS = {
    "yml": YAMLTranslationLoader,
    "json": JSONTranslationLoader,
}


def create_translator(
    translations_dir: Optional[Path] = None,
    fallback_locale: Optional[Locale] = None,
    use_cache: Optional[bool] = None,
    preload: bool = True,
    options: Optional[I18nOptions] = None,
    file_format: str = "yml",
    remote_url: Optional[str] = None,
) -> Translator:
    """Create and configure a Translator instance.

    Arguments left as None are read from ``settings.i18n``. If no
    translations directory is configured either, the bundled app/locales
    directory is used.

    Args:
        translations_dir: Path to translation files.
        fallback_locale: Locale to use when translations not found.
        use_cache: Whether the loader should cache parsed catalogs.
        preload: Whether to load all locales immediately (default: True).
        options: Options layered over the library defaults.
        file_format: "yml" or "json".
        remote_url: Endpoint serving translation bundles. When set, the
            file loader only serves as its fallback.

    Returns:
        Translator: Configured translator instance

    Raises:
        ValueError: If translations_dir does not exist or the file format
            is unknown.

    Usage:
        translator = create_translator()
        translator.t("incident:created", Locale.EN_US, {"incident_id": "INC-1"})
    """
    i18n_settings = settings.i18n

    if translations_dir is None and i18n_settings.translations_dir:
        translations_dir = Path(i18n_settings.translations_dir)
    if translations_dir is None:
        # this file is at .../app/infrastructure/i18n/factory.py
        translations_dir = Path(__file__).resolve().parents[2] / "locales"
    if fallback_locale is None:
        fallback_locale = Locale.from_string(i18n_settings.fallback_locale)
    if use_cache is None:
        use_cache = i18n_settings.use_cache
    if remote_url is None:
        remote_url = i18n_settings.remote_url

    loader_class = LOADERS.get(file_format)
    if loader_class is None:
        raise ValueError(f"Unsupported translation file format: {file_format}")

    file_loader: FileTranslationLoader = loader_class(
        translations_dir=translations_dir,
        use_cache=use_cache,
    )
    loader: TranslationLoader = file_loader
    if remote_url:
        loader = RemoteTranslationLoader(url=remote_url, fallback=file_loader)

    settings_options = I18nOptions(
        fallback_namespaces=tuple(i18n_settings.fallback_namespaces) or None,
        max_nesting_depth=i18n_settings.max_nesting_depth,
    )
    translator = Translator(
        loader=loader,
        fallback_locale=fallback_locale,
        options=settings_options.merge(options),
        interpolate_first=i18n_settings.interpolate_first,
    )

    if preload:
        translator.load_all()
        logger.info(
            "translator_created_with_preload",
            translations_dir=str(translations_dir),
            locale_count=len(translator.get_available_locales()),
        )
    else:
        logger.info(
            "translator_created_lazy",
            translations_dir=str(translations_dir),
        )

    return translator

"""Translation engine infrastructure settings."""

from typing import List, Optional

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings

DEFAULT_MAX_NESTING_DEPTH = 10


class I18nSettings(InfrastructureSettings):
    """Translation catalog and template resolution configuration.

    Environment Variables:
        I18N_TRANSLATIONS_DIR: Directory holding translation files
            (default: auto-discover app/locales)
        I18N_FALLBACK_LOCALE: Locale used when a key is missing (default: en-US)
        I18N_USE_CACHE: Cache parsed catalogs in memory (default: True)
        I18N_MAX_NESTING_DEPTH: Maximum depth of $t(...) recursion (default: 10)
        I18N_FALLBACK_NAMESPACES: JSON list of namespaces searched after the
            requested one (default: [])
        I18N_INTERPOLATE_FIRST: Run interpolation before nesting (default: False)
        I18N_REMOTE_URL: Endpoint serving translation bundles; files are the
            fallback when it is unavailable (default: unset)

    Example:
        ```python
        from infrastructure.configuration import settings

        depth = settings.i18n.max_nesting_depth
        ```
    """

    translations_dir: Optional[str] = Field(
        default=None,
        alias="I18N_TRANSLATIONS_DIR",
        description="Directory containing translation files",
    )
    fallback_locale: str = Field(
        default="en-US",
        alias="I18N_FALLBACK_LOCALE",
        description="Locale used when a key is missing in the requested locale",
    )
    use_cache: bool = Field(
        default=True,
        alias="I18N_USE_CACHE",
        description="Cache parsed translation catalogs in memory",
    )
    max_nesting_depth: int = Field(
        default=DEFAULT_MAX_NESTING_DEPTH,
        alias="I18N_MAX_NESTING_DEPTH",
        description="Maximum depth of nested translation lookups",
    )
    fallback_namespaces: List[str] = Field(
        default_factory=list,
        alias="I18N_FALLBACK_NAMESPACES",
        description="Namespaces searched after the requested namespace",
    )
    interpolate_first: bool = Field(
        default=False,
        alias="I18N_INTERPOLATE_FIRST",
        description="Run interpolation before nesting when evaluating messages",
    )
    remote_url: Optional[str] = Field(
        default=None,
        alias="I18N_REMOTE_URL",
        description="Endpoint serving translation bundles, may contain {locale}",
    )

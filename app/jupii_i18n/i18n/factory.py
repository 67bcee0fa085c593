"""Factory functions for creating i18n components.

Provides convenience functions for initializing the translation service
from application settings.
"""

from pathlib import Path
from typing import Optional

from jupii_i18n.configuration import Settings
from jupii_i18n.i18n.loader import TSTranslationLoader
from jupii_i18n.i18n.resolvers import LocaleLike, LocaleResolver
from jupii_i18n.i18n.service import TranslationService
from jupii_i18n.logging import get_module_logger
from jupii_i18n.providers import get_settings

logger = get_module_logger()


def create_loader(
    settings: Optional[Settings] = None,
    translations_dir: Optional[Path] = None,
) -> TSTranslationLoader:
    """Create a ``.ts`` loader configured from settings.

    Args:
        settings: Settings (default: application-scoped settings).
        translations_dir: Overrides settings.i18n.TRANSLATIONS_DIR.

    Raises:
        ValueError: If the translations directory does not exist.
    """
    settings = settings or get_settings()
    return TSTranslationLoader(
        translations_dir=translations_dir or settings.i18n.TRANSLATIONS_DIR,
        prefix=settings.i18n.CATALOG_PREFIX,
        use_cache=settings.i18n.CACHE_CATALOGS,
        include_unfinished=settings.i18n.INCLUDE_UNFINISHED,
    )


def create_translation_service(
    settings: Optional[Settings] = None,
    translations_dir: Optional[Path] = None,
    locale: Optional[LocaleLike] = None,
) -> TranslationService:
    """Create and configure a TranslationService.

    The initial locale is, in order: the ``locale`` argument,
    settings.i18n.LOCALE, then the process environment.

    Args:
        settings: Settings (default: application-scoped settings).
        translations_dir: Directory with ``.ts`` files (default: from settings).
        locale: Initial UI locale.

    Returns:
        TranslationService: Configured service instance

    Usage:
        # Use defaults (packaged catalogs, locale from environment)
        service = create_translation_service()

        # Explicit locale
        service = create_translation_service(locale="de")
    """
    settings = settings or get_settings()
    loader = create_loader(settings, translations_dir)
    source_language = settings.i18n.SOURCE_LANGUAGE

    service = TranslationService(
        loader=loader,
        locale=locale or settings.i18n.LOCALE,
        resolver=LocaleResolver(default_locale=source_language),
        source_language=source_language,
    )
    logger.info(
        "translation_service_created",
        translations_dir=str(loader.translations_dir),
        locale=service.current_locale.value,
    )
    return service

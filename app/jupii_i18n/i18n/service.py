"""Translation service holding the current UI catalog.

The service is the handle the longest-lived UI session object owns and
passes to whatever renders strings. Switching the locale builds a new
catalog and replaces the translator reference in one assignment, so readers
see either the old or the new catalog, never a partially built one.
"""

import threading
from typing import Any, Callable, List, Optional

from jupii_i18n.i18n.errors import MalformedCatalogError
from jupii_i18n.i18n.loader import TranslationLoader
from jupii_i18n.i18n.models import Locale
from jupii_i18n.i18n.resolvers import LocaleLike, LocaleResolver, LanguageNegotiator
from jupii_i18n.i18n.translator import Translator
from jupii_i18n.logging import get_module_logger

logger = get_module_logger()


class TranslationService:
    """Class-based translation service.

    Wraps the current Translator with a service interface to support
    dependency injection and easier testing.

    Usage:
        loader = TSTranslationLoader(Path("locales"))
        service = TranslationService(loader, locale="de_DE")
        service.translate("AboutPage", "About")  # "Über"

        service.switch_locale("en")
        service.translate("AboutPage", "About")  # "About"
    """

    def __init__(
        self,
        loader: TranslationLoader,
        locale: Optional[LocaleLike] = None,
        resolver: Optional[LocaleResolver] = None,
        source_language: str = "en",
    ):
        """Initialize translation service.

        Args:
            loader: Loader used to build catalogs.
            locale: Initial UI locale. None resolves it from the environment.
            resolver: Locale resolver (default: one defaulting to source_language).
            source_language: Language of the untranslated source strings.
        """
        self.loader = loader
        self.source_language = source_language
        self.resolver = resolver or LocaleResolver(default_locale=source_language)
        self._lock = threading.Lock()
        self._translator = Translator(None, source_language=source_language)
        self._locale = Locale.from_string(source_language)

        self.switch_locale(locale)

    @property
    def translator(self) -> Translator:
        """The translator currently in use."""
        return self._translator

    @property
    def current_locale(self) -> Locale:
        return self._locale

    def available_locales(self) -> List[Locale]:
        """Locales a catalog exists for, plus the source language."""
        locales = self.loader.available_locales()
        source = Locale.from_string(self.source_language)
        if source not in locales:
            locales = [source] + locales
        return locales

    def switch_locale(self, locale: Optional[LocaleLike] = None) -> Locale:
        """Build the catalog for a locale and make it current.

        The source language and locales without a catalog install the
        identity translator.

        Args:
            locale: Requested locale. None resolves it from the environment.

        Returns:
            The locale now in effect.

        Raises:
            MalformedCatalogError: If the catalog is invalid. The previous
                translator stays in place.
        """
        with self._lock:
            requested = self.resolver.resolve(locale)
            previous = self._locale

            if LanguageNegotiator.matches_language(requested.value, self.source_language):
                translator = Translator(None, source_language=self.source_language)
            else:
                try:
                    catalog = self.loader.load(requested)
                except FileNotFoundError:
                    logger.warning("catalog_not_found", locale=requested.value)
                    translator = Translator(None, source_language=self.source_language)
                except MalformedCatalogError as e:
                    logger.error(
                        "catalog_switch_failed",
                        locale=requested.value,
                        kept_locale=previous.value,
                        error=str(e),
                    )
                    raise
                else:
                    translator = Translator(catalog, source_language=self.source_language)

            self._translator = translator
            self._locale = requested

        logger.info(
            "switched_locale",
            previous_locale=previous.value,
            locale=requested.value,
            identity=translator.is_identity,
        )
        return requested

    def translate(
        self,
        context: str,
        source: str,
        *args: Any,
        n: Optional[int] = None,
        comment: str = "",
    ) -> str:
        """Retrieve and interpolate a translated message.

        Args:
            context: UI context name.
            source: Source text.
            *args: Positional arguments for ``%1``, ``%2``, ...
            n: Quantity selecting the plural form and replacing ``%n``.
            comment: Disambiguation comment.

        Returns:
            Translated and interpolated message string
        """
        return self._translator.translate(context, source, *args, n=n, comment=comment)

    def lookup(
        self, context: str, source: str, n: Optional[int] = None, comment: str = ""
    ) -> str:
        """Return the raw translation, placeholders intact."""
        return self._translator.lookup(context, source, n=n, comment=comment)

    def for_context(self, context: str) -> Callable[..., str]:
        """Return a translate function bound to one UI context.

        The returned function follows later locale switches.
        """

        def tr(source: str, *args: Any, n: Optional[int] = None, comment: str = "") -> str:
            return self.translate(context, source, *args, n=n, comment=comment)

        return tr

"""Translation service for retrieving and interpolating translated messages.

A ``Translator`` is bound to one immutable catalog. It looks messages up and
performs the substitutions the UI would otherwise do itself: ``%n`` becomes
the plural quantity and ``%1``..``%99`` become positional arguments.
"""

import re
from typing import Any, Callable, Optional, Sequence

from jupii_i18n.i18n.models import TranslationCatalog
from jupii_i18n.logging import get_module_logger

logger = get_module_logger()

_PLACEHOLDER = re.compile(r"%(\d{1,2})")


def interpolate(message: str, args: Sequence[Any] = (), n: Optional[int] = None) -> str:
    """Substitute ``%n`` and positional ``%1``..``%99`` placeholders.

    Placeholders without a matching argument are left intact.

    Args:
        message: Message with placeholders.
        args: Positional arguments; ``args[0]`` replaces ``%1``.
        n: Quantity replacing ``%n``.

    Returns:
        Message with placeholders substituted.
    """
    if n is not None:
        message = message.replace("%n", str(n))

    if not args:
        return message

    def replace(match: "re.Match[str]") -> str:
        index = int(match.group(1))
        if 1 <= index <= len(args):
            return str(args[index - 1])
        return match.group(0)

    return _PLACEHOLDER.sub(replace, message)


class Translator:
    """Service for translating messages with placeholder substitution.

    Attributes:
        catalog: The catalog lookups are served from. None means the
            identity translator: every message falls back to its source.
        source_language: Language the source strings are written in.
    """

    def __init__(
        self,
        catalog: Optional[TranslationCatalog] = None,
        source_language: str = "en",
    ):
        """Initialize Translator.

        Args:
            catalog: Catalog to serve lookups from, or None for identity.
            source_language: Language of the untranslated source strings.
        """
        self.catalog = catalog
        self.source_language = source_language
        logger.info(
            "initialized_translator",
            language=self.language,
            entry_count=len(catalog) if catalog is not None else 0,
        )

    @property
    def language(self) -> str:
        """Language of the translations served."""
        return self.catalog.language if self.catalog is not None else self.source_language

    @property
    def is_identity(self) -> bool:
        return self.catalog is None

    def lookup(
        self,
        context: str,
        source: str,
        n: Optional[int] = None,
        comment: str = "",
    ) -> str:
        """Return the raw translation, placeholders intact."""
        if self.catalog is None:
            return source

        message = self.catalog.lookup(context, source, n=n, comment=comment)
        if message is source:
            logger.debug(
                "translation_fallback",
                context=context,
                source=source,
                language=self.catalog.language,
            )
        return message

    def translate(
        self,
        context: str,
        source: str,
        *args: Any,
        n: Optional[int] = None,
        comment: str = "",
    ) -> str:
        """Retrieve and interpolate a translated message.

        Falls back to the source text when no translation exists; never
        raises for missing translations.

        Args:
            context: UI context name (e.g. "AlbumsPage").
            source: Source text.
            *args: Positional arguments for ``%1``, ``%2``, ...
            n: Quantity selecting the plural form and replacing ``%n``.
            comment: Disambiguation comment.

        Returns:
            Translated and interpolated message string.

        Example:
            translator.translate("AlbumsPage", "%n track(s)", n=3)  # "3 Titel"
        """
        message = self.lookup(context, source, n=n, comment=comment)
        return interpolate(message, args, n)

    def has_message(self, context: str, source: str, comment: str = "") -> bool:
        """Check if the catalog holds an entry for the message."""
        return self.catalog is not None and self.catalog.has_message(context, source, comment)

    def for_context(self, context: str) -> Callable[..., str]:
        """Return a translate function bound to one UI context.

        Example:
            tr = translator.for_context("AboutPage")
            tr("Version %1", "2.0")
        """

        def tr(source: str, *args: Any, n: Optional[int] = None, comment: str = "") -> str:
            return self.translate(context, source, *args, n=n, comment=comment)

        return tr

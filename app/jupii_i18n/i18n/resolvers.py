"""Locale resolution logic for determining the UI language.

Provides strategies for resolving the locale from explicit requests, the
process environment and the set of catalogs that are actually available.
"""

import os
from typing import Iterable, List, Mapping, Optional, Sequence, Union

from jupii_i18n.i18n.models import Locale
from jupii_i18n.logging import get_module_logger

logger = get_module_logger(component="i18n.resolver")

# POSIX precedence for message catalogs
ENVIRONMENT_VARIABLES = ("LANGUAGE", "LC_ALL", "LC_MESSAGES", "LANG")
_NEUTRAL_LOCALES = {"C", "POSIX"}

LocaleLike = Union[Locale, str]


def _as_locale(value: LocaleLike) -> Locale:
    return value if isinstance(value, Locale) else Locale.from_string(value)


def candidate_names(locale: LocaleLike) -> List[str]:
    """Return catalog name suffixes to try for a locale, most specific first.

    Mirrors how Qt looks up ``<prefix>-de_DE.ts`` before ``<prefix>-de.ts``.

    Args:
        locale: Locale or locale string.

    Returns:
        Candidate names, e.g. ["de_DE", "de"].
    """
    resolved = _as_locale(locale)
    names = [resolved.value]
    if resolved.region:
        names.append(resolved.language)
    return names


class LocaleResolver:
    """Resolves the UI locale from various sources.

    Fallback chain:
    1. Explicit request (if a catalog for it is available)
    2. Process environment (LANGUAGE, LC_ALL, LC_MESSAGES, LANG)
    3. Default locale
    """

    def __init__(self, default_locale: LocaleLike = "en"):
        """Initialize locale resolver.

        Args:
            default_locale: Fallback locale when no preference found.
        """
        self.default_locale = _as_locale(default_locale)
        self.log = logger.bind(default_locale=self.default_locale.value)

    def resolve_from_environment(
        self, environ: Optional[Mapping[str, str]] = None
    ) -> Locale:
        """Resolve locale from POSIX locale environment variables.

        ``LANGUAGE`` may hold a colon-separated priority list; its first
        entry is used. ``C`` and ``POSIX`` select the default locale.

        Args:
            environ: Environment mapping (default: os.environ).

        Returns:
            Resolved Locale, or default if nothing usable is set.
        """
        env = os.environ if environ is None else environ

        for variable in ENVIRONMENT_VARIABLES:
            raw = (env.get(variable) or "").strip()
            if not raw:
                continue
            value = raw.split(":")[0]
            if value.split(".")[0] in _NEUTRAL_LOCALES:
                break
            try:
                locale = Locale.from_string(value)
            except ValueError:
                self.log.warning("invalid_environment_locale", variable=variable, value=raw)
                continue
            self.log.info("resolved_from_environment", variable=variable, locale=locale.value)
            return locale

        self.log.info("no_environment_locale")
        return self.default_locale

    def resolve_from_string(self, locale_str: str) -> Locale:
        """Parse and validate locale string.

        Raises:
            ValueError: If locale_str is not a valid locale.
        """
        try:
            return Locale.from_string(locale_str)
        except ValueError:
            self.log.warning("invalid_locale_string", locale_str=locale_str)
            raise

    def resolve(
        self,
        requested: Optional[LocaleLike],
        available: Optional[Sequence[LocaleLike]] = None,
    ) -> Locale:
        """Resolve the best available locale for a request.

        Args:
            requested: Requested locale; None resolves from the environment.
            available: Locales with catalogs. None accepts any locale.

        Returns:
            The requested locale or its closest available match, or the
            default locale.
        """
        if requested is None:
            locale = self.resolve_from_environment()
        else:
            try:
                locale = _as_locale(requested)
            except ValueError:
                self.log.warning("invalid_requested_locale", requested=str(requested))
                return self.default_locale

        if available is None:
            return locale

        candidates = [_as_locale(item) for item in available]
        match = LanguageNegotiator.find_best_match(
            [locale.value], [item.value for item in candidates]
        )
        if match is None:
            self.log.info("no_matching_locale", requested=locale.value)
            return self.default_locale

        resolved = Locale.from_string(match)
        self.log.info("resolved_locale", requested=locale.value, locale=resolved.value)
        return resolved


class LanguageNegotiator:
    """Performs language negotiation for multilingual content.

    Implements RFC 4647 style range matching (e.g., when "de_AT" is
    requested but only "de" is available).
    """

    @staticmethod
    def _normalise(tag: str) -> str:
        return tag.replace("-", "_").lower()

    @staticmethod
    def matches_language(
        requested: str,
        available: str,
        strict: bool = False,
    ) -> bool:
        """Check if available language matches requested language.

        Args:
            requested: Requested language tag (e.g., "de_DE").
            available: Available language tag (e.g., "de").
            strict: If True, requires exact match. If False, allows language-only match.
        """
        requested_norm = LanguageNegotiator._normalise(requested)
        available_norm = LanguageNegotiator._normalise(available)
        if requested_norm == available_norm:
            return True

        if strict:
            return False

        return requested_norm.split("_")[0] == available_norm.split("_")[0]

    @staticmethod
    def find_best_match(
        requested: Iterable[str],
        available: Sequence[str],
        default: Optional[str] = None,
    ) -> Optional[str]:
        """Find best matching language from available options.

        Args:
            requested: Requested language tags in preference order.
            available: Available language tags.
            default: Default if no match found.

        Returns:
            Best matching language from available, or default if no match.
        """
        for req_lang in requested:
            for avail_lang in available:
                if LanguageNegotiator.matches_language(req_lang, avail_lang, strict=True):
                    return avail_lang

            for avail_lang in available:
                if LanguageNegotiator.matches_language(req_lang, avail_lang, strict=False):
                    return avail_lang

        return default

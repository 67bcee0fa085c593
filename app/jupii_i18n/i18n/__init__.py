"""i18n system - runtime translation catalogs for the Jupii UI.

Main components:
- models: Locale, MessageKey, CatalogEntry, TranslationCatalog
- plurals: per-language plural rules
- loader: TranslationLoader and TSTranslationLoader (Qt Linguist .ts files)
- translator: Translator with %n / %1 substitution
- resolvers: LocaleResolver and LanguageNegotiator
- service: TranslationService, the handle to the current catalog
"""

from jupii_i18n.i18n.errors import MalformedCatalogError
from jupii_i18n.i18n.factory import create_loader, create_translation_service
from jupii_i18n.i18n.loader import (
    TranslationLoader,
    TSTranslationLoader,
    parse_ts,
    parse_ts_data,
)
from jupii_i18n.i18n.models import (
    CatalogEntry,
    CatalogRecord,
    CatalogStats,
    Locale,
    Location,
    MessageKey,
    TranslationCatalog,
    TranslationStatus,
)
from jupii_i18n.i18n.plurals import PluralRule, plural_rule_for, register_plural_rule
from jupii_i18n.i18n.resolvers import LanguageNegotiator, LocaleResolver, candidate_names
from jupii_i18n.i18n.service import TranslationService
from jupii_i18n.i18n.translator import Translator, interpolate

__all__ = [
    "MalformedCatalogError",
    "CatalogEntry",
    "CatalogRecord",
    "CatalogStats",
    "Locale",
    "Location",
    "MessageKey",
    "TranslationCatalog",
    "TranslationStatus",
    "PluralRule",
    "plural_rule_for",
    "register_plural_rule",
    "TranslationLoader",
    "TSTranslationLoader",
    "parse_ts",
    "parse_ts_data",
    "Translator",
    "interpolate",
    "LocaleResolver",
    "LanguageNegotiator",
    "candidate_names",
    "TranslationService",
    "create_loader",
    "create_translation_service",
]

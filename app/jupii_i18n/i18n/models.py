"""Translation models for the i18n system.

Defines the immutable catalog built from Qt Linguist ``.ts`` input and the
value types it is made of.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from jupii_i18n.i18n.errors import MalformedCatalogError
from jupii_i18n.i18n.plurals import PluralRule, plural_rule_for

_LOCALE_PATTERN = re.compile(
    r"^(?P<language>[A-Za-z]{2,3})(?:[-_](?P<region>[A-Za-z]{2}|\d{3}))?"
    r"(?:\.[\w-]+)?(?:@\w+)?$"
)


@dataclass(frozen=True)
class Locale:
    """A UI locale: language code plus optional region.

    Accepts POSIX (``de_DE.UTF-8``) and BCP 47 (``de-DE``) spellings and
    normalises to ``language[_REGION]``.
    """

    language: str
    region: str = ""

    @classmethod
    def from_string(cls, locale_str: str) -> "Locale":
        """Parse a locale string.

        Args:
            locale_str: Locale string (e.g., "de", "de_DE", "de-DE", "de_DE.UTF-8").

        Returns:
            Parsed Locale.

        Raises:
            ValueError: If the string is not a recognisable locale.
        """
        match = _LOCALE_PATTERN.match((locale_str or "").strip())
        if not match:
            raise ValueError(f"Unsupported locale: {locale_str!r}")
        return cls(
            language=match.group("language").lower(),
            region=(match.group("region") or "").upper(),
        )

    @property
    def value(self) -> str:
        """Normalised name (e.g. "de_DE", or "de" without region)."""
        return f"{self.language}_{self.region}" if self.region else self.language

    @property
    def tag(self) -> str:
        """BCP 47 tag (e.g. "de-DE")."""
        return f"{self.language}-{self.region}" if self.region else self.language

    def __str__(self) -> str:
        return self.value


class TranslationStatus(str, Enum):
    """State of an entry's translation, as written by Qt Linguist."""

    FINISHED = "finished"
    UNFINISHED = "unfinished"
    OBSOLETE = "obsolete"
    VANISHED = "vanished"

    @property
    def is_active(self) -> bool:
        """Whether entries in this state take part in lookups."""
        return self in (TranslationStatus.FINISHED, TranslationStatus.UNFINISHED)


@dataclass(frozen=True)
class Location:
    """Where a source string appears in the UI sources. Advisory only."""

    filename: str
    line: Optional[int] = None

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}" if self.line is not None else self.filename


@dataclass(frozen=True)
class MessageKey:
    """Index key of a catalog entry.

    Attributes:
        context: UI context name (e.g. "AboutPage").
        source: Untranslated source text.
        comment: Disambiguation comment; empty for most entries.
    """

    context: str
    source: str
    comment: str = ""

    def __str__(self) -> str:
        if self.comment:
            return f"{self.context}::{self.source} ({self.comment})"
        return f"{self.context}::{self.source}"


@dataclass(frozen=True)
class CatalogEntry:
    """One translatable unit.

    Attributes:
        context: Name of the owning context (back-reference).
        source: Source text, may contain ``%1``-style and ``%n`` placeholders.
        translation: Translated text of a non-plural entry.
        plural_forms: Ordered plural forms of a plural-aware entry.
        numerus: Whether the entry is plural-aware.
        status: Translation status.
        comment: Disambiguation comment.
        extra_comment: Developer note for translators.
        translator_comment: Translator's own note.
        locations: Source locations, advisory only.
    """

    context: str
    source: str
    translation: str = ""
    plural_forms: Tuple[str, ...] = ()
    numerus: bool = False
    status: TranslationStatus = TranslationStatus.FINISHED
    comment: str = ""
    extra_comment: str = ""
    translator_comment: str = ""
    locations: Tuple[Location, ...] = ()

    @property
    def key(self) -> MessageKey:
        return MessageKey(self.context, self.source, self.comment)

    @property
    def is_finished(self) -> bool:
        return self.status == TranslationStatus.FINISHED

    @property
    def is_translated(self) -> bool:
        """True if the entry carries at least one non-empty translation."""
        if self.numerus:
            return any(self.plural_forms)
        return bool(self.translation)


class CatalogRecord(BaseModel):
    """Raw input record accepted by ``TranslationCatalog.build``."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    context: str
    source: str
    translation: Optional[str] = None
    plural_forms: Optional[List[str]] = None
    numerus: Optional[bool] = None
    status: TranslationStatus = TranslationStatus.FINISHED
    comment: str = ""
    extra_comment: str = ""
    translator_comment: str = ""
    locations: List[Location] = Field(default_factory=list)

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, v: Any) -> Any:
        """Treat a missing status as finished."""
        if v is None or v == "":
            return TranslationStatus.FINISHED
        return v


@dataclass(frozen=True)
class CatalogStats:
    """Entry counts of a catalog."""

    total: int
    finished: int
    unfinished: int
    plural: int
    untranslated: int

    @property
    def completion(self) -> float:
        """Share of finished entries, 1.0 for an empty catalog."""
        return self.finished / self.total if self.total else 1.0


RawRecord = Union[Mapping[str, Any], CatalogEntry, CatalogRecord]


def _to_entry(record: RawRecord) -> Optional[CatalogEntry]:
    """Validate a raw record; None for obsolete and vanished records."""
    if isinstance(record, CatalogEntry):
        parsed = CatalogRecord(
            context=record.context,
            source=record.source,
            translation=record.translation,
            plural_forms=list(record.plural_forms) if record.numerus else None,
            numerus=record.numerus,
            status=record.status,
            comment=record.comment,
            extra_comment=record.extra_comment,
            translator_comment=record.translator_comment,
            locations=list(record.locations),
        )
    elif isinstance(record, CatalogRecord):
        parsed = record
    elif not isinstance(record, Mapping):
        raise MalformedCatalogError(
            f"Unsupported catalog record type: {type(record).__name__}"
        )
    else:
        try:
            parsed = CatalogRecord.model_validate(dict(record))
        except ValidationError as e:
            raise MalformedCatalogError(
                f"Invalid catalog record: {e.errors()[0]['msg']}",
                context=record.get("context"),
                source=record.get("source"),
            ) from e

    if not parsed.status.is_active:
        return None

    if not parsed.context or not parsed.context.strip():
        raise MalformedCatalogError(
            "Context name must not be empty", source=parsed.source
        )

    numerus = parsed.numerus if parsed.numerus is not None else parsed.plural_forms is not None
    forms = tuple(parsed.plural_forms or ())
    if numerus and not forms:
        raise MalformedCatalogError(
            "Plural entry has no plural forms",
            context=parsed.context,
            source=parsed.source,
        )

    return CatalogEntry(
        context=parsed.context,
        source=parsed.source,
        translation="" if numerus else (parsed.translation or ""),
        plural_forms=forms if numerus else (),
        numerus=numerus,
        status=parsed.status,
        comment=parsed.comment,
        extra_comment=parsed.extra_comment,
        translator_comment=parsed.translator_comment,
        locations=tuple(parsed.locations),
    )


@dataclass(frozen=True)
class TranslationCatalog:
    """Immutable catalog of translations for one language.

    Entries are indexed by ``MessageKey`` once, at construction. Lookups are
    pure and never raise: anything without a usable translation falls back to
    its source text.

    Attributes:
        language: Target language of the catalog (e.g. "de").
        entries: Active entries in input order.
        version: TS format version the catalog was read from.
        include_unfinished: Serve non-empty unfinished translations.
        source_path: Catalog file the entries were read from, if any.
        loaded_at: Timestamp (ISO 8601) when the catalog was built.
    """

    language: str
    entries: Tuple[CatalogEntry, ...] = ()
    version: str = "2.1"
    include_unfinished: bool = True
    source_path: Optional[str] = None
    loaded_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    _index: Mapping[MessageKey, CatalogEntry] = field(
        init=False, repr=False, compare=False
    )
    _contexts: Mapping[str, Tuple[CatalogEntry, ...]] = field(
        init=False, repr=False, compare=False
    )
    _plural_rule: PluralRule = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        index: Dict[MessageKey, CatalogEntry] = {}
        contexts: Dict[str, List[CatalogEntry]] = {}
        for entry in self.entries:
            if not entry.status.is_active:
                continue
            if entry.key in index:
                raise MalformedCatalogError(
                    "Duplicate message in context",
                    context=entry.context,
                    source=entry.source,
                    path=self.source_path,
                )
            index[entry.key] = entry
            contexts.setdefault(entry.context, []).append(entry)

        object.__setattr__(self, "entries", tuple(index.values()))
        object.__setattr__(self, "_index", MappingProxyType(index))
        object.__setattr__(
            self,
            "_contexts",
            MappingProxyType({name: tuple(items) for name, items in contexts.items()}),
        )
        object.__setattr__(self, "_plural_rule", plural_rule_for(self.language))

    @classmethod
    def build(
        cls,
        records: Iterable[RawRecord],
        language: str,
        version: str = "2.1",
        include_unfinished: bool = True,
        source_path: Optional[str] = None,
    ) -> "TranslationCatalog":
        """Build a catalog from a flat list of records.

        Each record carries ``context``, ``source``, ``translation``,
        optionally ``plural_forms`` and ``status``, and optionally
        ``comment``, ``extra_comment``, ``translator_comment`` and
        ``locations``. Obsolete and vanished records are dropped before they
        are validated.

        Args:
            records: Mappings, ``CatalogRecord`` or ``CatalogEntry`` objects.
            language: Target language of the catalog.
            version: TS format version.
            include_unfinished: Serve non-empty unfinished translations.
            source_path: Originating file, for error reporting.

        Returns:
            TranslationCatalog ready for lookups.

        Raises:
            MalformedCatalogError: For an empty context name, a plural entry
                without forms, an invalid record or a duplicate message.
        """
        if not language or not language.strip():
            raise MalformedCatalogError("Catalog language must not be empty", path=source_path)

        entries = []
        for record in records:
            try:
                entry = _to_entry(record)
            except MalformedCatalogError as e:
                raise e.with_path(source_path) if source_path else e
            if entry is not None:
                entries.append(entry)

        return cls(
            language=language.strip(),
            entries=tuple(entries),
            version=version,
            include_unfinished=include_unfinished,
            source_path=source_path,
        )

    @classmethod
    def empty(cls, language: str) -> "TranslationCatalog":
        """Catalog without entries; every lookup returns its source text."""
        return cls(language=language)

    @property
    def plural_rule(self) -> PluralRule:
        """Plural rule of the catalog language, resolved once at construction."""
        return self._plural_rule

    @property
    def contexts(self) -> Tuple[str, ...]:
        """Context names in input order."""
        return tuple(self._contexts.keys())

    def get_context(self, name: str) -> Tuple[CatalogEntry, ...]:
        """Entries of one context in input order; empty for unknown contexts."""
        return self._contexts.get(name, ())

    def get_entry(
        self, context: str, source: str, comment: str = ""
    ) -> Optional[CatalogEntry]:
        """Return the entry for an exact key, or None."""
        return self._index.get(MessageKey(context, source, comment))

    def has_message(self, context: str, source: str, comment: str = "") -> bool:
        return MessageKey(context, source, comment) in self._index

    def lookup(
        self,
        context: str,
        source: str,
        n: Optional[int] = None,
        comment: str = "",
    ) -> str:
        """Return the translation of ``source`` in ``context``.

        Placeholders (``%1``, ``%n``) are returned intact. When the entry is
        plural-aware, ``n`` selects the plural form through the catalog
        language's plural rule; without ``n`` the first form is used. A
        disambiguated lookup that finds nothing retries without the comment.

        Args:
            context: UI context name.
            source: Source text.
            n: Quantity selecting the plural form.
            comment: Disambiguation comment.

        Returns:
            The stored translation, or ``source`` unchanged when the key is
            unknown or the translation is empty.
        """
        entry = self.get_entry(context, source, comment)
        if entry is None and comment:
            entry = self.get_entry(context, source)
        if entry is None:
            return source

        if entry.status == TranslationStatus.UNFINISHED and not self.include_unfinished:
            return source

        if entry.numerus:
            index = 0 if n is None else self.plural_rule.select(n, len(entry.plural_forms))
            text = entry.plural_forms[index]
        else:
            text = entry.translation

        return text or source

    def stats(self) -> CatalogStats:
        """Count entries by state."""
        finished = sum(1 for e in self.entries if e.is_finished)
        return CatalogStats(
            total=len(self.entries),
            finished=finished,
            unfinished=len(self.entries) - finished,
            plural=sum(1 for e in self.entries if e.numerus),
            untranslated=sum(1 for e in self.entries if not e.is_translated),
        )

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __iter__(self):
        return iter(self.entries)

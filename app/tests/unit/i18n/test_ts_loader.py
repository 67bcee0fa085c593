"""Tests for jupii_i18n.i18n.loader module."""

import pytest

from jupii_i18n.i18n import (
    Locale,
    Location,
    MalformedCatalogError,
    TranslationStatus,
    TSTranslationLoader,
    parse_ts,
    parse_ts_data,
)


def _ts(body: str, language: str = 'language="de"') -> str:
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n<!DOCTYPE TS>\n'
        f'<TS version="2.1" {language}>\n{body}\n</TS>\n'
    )


class TestParseTsData:
    """Tests for parsing TS content."""

    def test_parses_sample_catalog(self, sample_de_ts):
        """parse_ts_data() builds a catalog from TS XML."""
        catalog = parse_ts_data(sample_de_ts)
        assert catalog.language == "de"
        assert catalog.version == "2.1"
        assert catalog.contexts == ("AboutPage", "AlbumsPage", "CoverPage", "TracksPage")
        assert catalog.lookup("AboutPage", "About") == "Über"

    def test_decodes_entities(self, sample_de_ts):
        """XML entities in sources are decoded once."""
        catalog = parse_ts_data(sample_de_ts)
        entry = catalog.get_entry("AboutPage", "Copyright &copy; %1 %2")
        assert entry is not None
        assert entry.status == TranslationStatus.UNFINISHED
        assert entry.translation == ""

    def test_accepts_bytes(self, sample_de_ts):
        """parse_ts_data() accepts encoded bytes."""
        catalog = parse_ts_data(sample_de_ts.encode("utf-8"))
        assert catalog.lookup("CoverPage", "Unknown") == "Unbekannt"

    def test_plural_forms_in_order(self, sample_de_ts):
        """numerusform children become ordered plural forms."""
        entry = parse_ts_data(sample_de_ts).get_entry("TracksPage", "%n selected")
        assert entry.numerus
        assert entry.plural_forms == ("%n Element ausgewählt", "%n Elemente ausgewählt")

    def test_locations(self, sample_de_ts):
        """location elements become Location objects."""
        entry = parse_ts_data(sample_de_ts).get_entry("AboutPage", "About")
        assert entry.locations == (Location("../qml/AboutPage.qml", 26),)

    def test_multiple_and_relative_locations(self):
        """Missing filenames repeat the previous one; +N lines are relative."""
        body = """<context><name>ChangelogPage</name>
            <message>
                <location filename="../qml/ChangelogPage.qml" line="30"/>
                <location line="+10"/>
                <location filename="../qml/Other.qml"/>
                <source>Version %1</source>
                <translation>Version %1</translation>
            </message></context>"""
        entry = parse_ts_data(_ts(body)).get_entry("ChangelogPage", "Version %1")
        assert entry.locations == (
            Location("../qml/ChangelogPage.qml", 30),
            Location("../qml/ChangelogPage.qml", 40),
            Location("../qml/Other.qml", None),
        )

    def test_multiline_source_preserved(self):
        """Literal newlines inside sources are kept."""
        body = """<context><name>SettingsPage</name>
            <message>
                <source>First line
second line</source>
                <translation>Erste Zeile
zweite Zeile</translation>
            </message></context>"""
        catalog = parse_ts_data(_ts(body))
        assert catalog.lookup("SettingsPage", "First line\nsecond line") == "Erste Zeile\nzweite Zeile"

    def test_comments(self):
        """comment, extracomment and translatorcomment are read."""
        body = """<context><name>PlayerPanel</name>
            <message>
                <source>Play</source>
                <comment>verb</comment>
                <extracomment>Button label</extracomment>
                <translatorcomment>short</translatorcomment>
                <translation>Abspielen</translation>
            </message></context>"""
        catalog = parse_ts_data(_ts(body))
        entry = catalog.get_entry("PlayerPanel", "Play", "verb")
        assert entry.extra_comment == "Button label"
        assert entry.translator_comment == "short"
        assert catalog.lookup("PlayerPanel", "Play", comment="verb") == "Abspielen"

    def test_byte_escapes(self):
        """Qt byte elements are decoded to characters."""
        body = """<context><name>PlayerPanel</name>
            <message>
                <source>Tab<byte value="x9"/>stop</source>
                <translation>Tab<byte value="9"/>Stopp</translation>
            </message></context>"""
        catalog = parse_ts_data(_ts(body))
        assert catalog.lookup("PlayerPanel", "Tab\tstop") == "Tab\tStopp"

    def test_length_variants(self):
        """The first length variant is used."""
        body = """<context><name>PlayerPanel</name>
            <message>
                <source>Next</source>
                <translation variants="yes">
                    <lengthvariant>Nächster Titel</lengthvariant>
                    <lengthvariant>Weiter</lengthvariant>
                </translation>
            </message></context>"""
        assert parse_ts_data(_ts(body)).lookup("PlayerPanel", "Next") == "Nächster Titel"

    def test_obsolete_messages_skipped(self):
        """Obsolete and vanished messages are not indexed."""
        body = """<context><name>PlayerPanel</name>
            <message><source>Old</source><translation type="obsolete">Alt</translation></message>
            <message><source>Gone</source><translation type="vanished">Weg</translation></message>
            <message><source>Stop</source><translation>Stopp</translation></message>
            </context>"""
        catalog = parse_ts_data(_ts(body))
        assert len(catalog) == 1
        assert catalog.lookup("PlayerPanel", "Old") == "Old"

    def test_inactive_plural_messages_skipped(self):
        """Vanished and obsolete plural messages without forms are dropped."""
        body = """<context><name>AlbumsPage</name>
            <message numerus="yes"><source>%n track(s)</source><translation type="vanished"></translation></message>
            <message numerus="yes"><source>%n album(s)</source><translation type="obsolete"/></message>
            </context>"""
        catalog = parse_ts_data(_ts(body))
        assert len(catalog) == 0
        assert catalog.lookup("AlbumsPage", "%n track(s)", n=3) == "%n track(s)"

    def test_message_without_translation(self):
        """A message without a translation element falls back."""
        body = "<context><name>PlayerPanel</name><message><source>Stop</source></message></context>"
        assert parse_ts_data(_ts(body)).lookup("PlayerPanel", "Stop") == "Stop"

    def test_language_hint_used_without_attribute(self):
        """language_hint fills in a missing language attribute."""
        body = "<context><name>P</name><message><source>A</source><translation>B</translation></message></context>"
        catalog = parse_ts_data(_ts(body, language=""), language_hint="de")
        assert catalog.language == "de"

    def test_include_unfinished_false(self, sample_de_ts):
        """include_unfinished=False drops unfinished translations."""
        catalog = parse_ts_data(sample_de_ts, include_unfinished=False)
        assert catalog.lookup("CoverPage", "Unknown") == "Unknown"


class TestMalformedInput:
    """Tests for structurally invalid TS content."""

    def test_invalid_xml(self):
        """Unparseable XML raises MalformedCatalogError."""
        with pytest.raises(MalformedCatalogError):
            parse_ts_data("<TS><context>")

    def test_wrong_root(self):
        """A root other than TS is rejected."""
        with pytest.raises(MalformedCatalogError):
            parse_ts_data('<xliff version="1.2"/>')

    def test_missing_language(self):
        """A catalog without language and without hint is rejected."""
        with pytest.raises(MalformedCatalogError):
            parse_ts_data(_ts("", language=""))

    def test_context_without_name(self):
        """A context without a name is rejected."""
        body = "<context><message><source>A</source><translation>B</translation></message></context>"
        with pytest.raises(MalformedCatalogError):
            parse_ts_data(_ts(body))

    def test_message_without_source(self):
        """A message without a source is rejected."""
        body = "<context><name>P</name><message><translation>B</translation></message></context>"
        with pytest.raises(MalformedCatalogError) as exc_info:
            parse_ts_data(_ts(body))
        assert exc_info.value.context == "P"

    def test_plural_without_forms(self):
        """A numerus message without numerusform children is rejected."""
        body = """<context><name>AlbumsPage</name>
            <message numerus="yes"><source>%n track(s)</source><translation></translation></message>
            </context>"""
        with pytest.raises(MalformedCatalogError) as exc_info:
            parse_ts_data(_ts(body))
        assert exc_info.value.source == "%n track(s)"

    def test_unknown_translation_type(self):
        """An unknown translation type is rejected."""
        body = '<context><name>P</name><message><source>A</source><translation type="draft">B</translation></message></context>'
        with pytest.raises(MalformedCatalogError):
            parse_ts_data(_ts(body))

    def test_file_errors_carry_path(self, tmp_path):
        """Errors raised for files name the file."""
        path = tmp_path / "harbour-jupii-de.ts"
        path.write_text(_ts("<context><name></name></context>"), encoding="utf-8")
        with pytest.raises(MalformedCatalogError) as exc_info:
            parse_ts(path)
        assert exc_info.value.path == str(path)
        assert str(path) in str(exc_info.value)

    def test_missing_file(self, tmp_path):
        """parse_ts() raises FileNotFoundError for a missing file."""
        with pytest.raises(FileNotFoundError):
            parse_ts(tmp_path / "missing.ts")


class TestTSTranslationLoader:
    """Tests for TSTranslationLoader."""

    def test_loader_initialization(self, temp_translations_dir):
        """TSTranslationLoader initializes with valid directory."""
        loader = TSTranslationLoader(temp_translations_dir)
        assert loader.translations_dir == temp_translations_dir
        assert loader.prefix == "harbour-jupii"
        assert loader.use_cache is True
        assert loader.cache == {}

    def test_loader_initialization_nonexistent_directory(self, tmp_path):
        """TSTranslationLoader raises ValueError for missing directory."""
        with pytest.raises(ValueError):
            TSTranslationLoader(tmp_path / "nonexistent")

    def test_available_locales(self, ts_loader):
        """available_locales() lists catalogs matching the prefix."""
        assert ts_loader.available_locales() == [
            Locale("de"),
            Locale("fr", "FR"),
        ]

    def test_load_exact_locale(self, ts_loader):
        """load() finds the catalog for an exact locale name."""
        catalog = ts_loader.load("de")
        assert catalog.language == "de"
        assert catalog.lookup("AboutPage", "About") == "Über"

    def test_load_falls_back_to_language(self, ts_loader):
        """load('de_DE') uses harbour-jupii-de.ts when no de_DE file exists."""
        catalog = ts_loader.load(Locale.from_string("de_DE"))
        assert catalog.lookup("AboutPage", "About") == "Über"

    def test_load_underscore_separator(self, ts_loader):
        """Catalogs named with an underscore separator are found."""
        catalog = ts_loader.load("fr-FR")
        assert catalog.language == "fr_FR"
        assert catalog.lookup("AboutPage", "About") == "À propos"

    def test_load_missing_locale_raises_error(self, ts_loader):
        """load() raises FileNotFoundError for a locale without catalog."""
        with pytest.raises(FileNotFoundError):
            ts_loader.load("ru")

    def test_load_caches_results(self, ts_loader_with_cache):
        """load() caches catalogs when use_cache=True."""
        assert ts_loader_with_cache.load("de") is ts_loader_with_cache.load("de")

    def test_load_no_cache_separate_instances(self, ts_loader):
        """load() returns separate instances when use_cache=False."""
        first = ts_loader.load("de")
        second = ts_loader.load("de")
        assert first is not second
        assert first.entries == second.entries

    def test_load_all(self, ts_loader):
        """load_all() loads every detected locale."""
        catalogs = ts_loader.load_all()
        assert set(catalogs) == {"de", "fr_FR"}

    def test_load_all_empty_directory(self, tmp_path):
        """load_all() raises ValueError when no catalogs exist."""
        loader = TSTranslationLoader(tmp_path)
        with pytest.raises(ValueError):
            loader.load_all()

    def test_clear_cache(self, ts_loader_with_cache):
        """clear_cache() removes cached catalogs."""
        ts_loader_with_cache.load_all()
        assert len(ts_loader_with_cache.cache) == 2
        ts_loader_with_cache.clear_cache()
        assert ts_loader_with_cache.cache == {}

    def test_custom_prefix(self, tmp_path, sample_de_ts):
        """Only files with the configured prefix are considered."""
        (tmp_path / "other-de.ts").write_text(sample_de_ts, encoding="utf-8")
        loader = TSTranslationLoader(tmp_path, prefix="other")
        assert loader.available_locales() == [Locale("de")]
        assert TSTranslationLoader(tmp_path).available_locales() == []

    def test_include_unfinished_option(self, temp_translations_dir):
        """The loader passes include_unfinished to the catalogs."""
        loader = TSTranslationLoader(temp_translations_dir, include_unfinished=False)
        assert loader.load("de").lookup("CoverPage", "Unknown") == "Unknown"

    def test_malformed_catalog_raises(self, tmp_path):
        """load() propagates MalformedCatalogError."""
        (tmp_path / "harbour-jupii-de.ts").write_text("<TS", encoding="utf-8")
        loader = TSTranslationLoader(tmp_path)
        with pytest.raises(MalformedCatalogError):
            loader.load("de")

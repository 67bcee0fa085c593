"""Shared fixtures for the jupii_i18n test suite."""

import sys
from pathlib import Path

# Ensure the application package root is on sys.path so importing
# ``jupii_i18n`` works without an editable install.
APP_ROOT = Path(__file__).resolve().parents[1]
if str(APP_ROOT) not in sys.path:
    sys.path.insert(0, str(APP_ROOT))

import pytest  # noqa: E402

from jupii_i18n.i18n import TSTranslationLoader  # noqa: E402
from jupii_i18n.logging import configure_logging  # noqa: E402
from jupii_i18n.providers import get_settings  # noqa: E402

configure_logging()

SAMPLE_DE_TS = """<?xml version="1.0" encoding="utf-8"?>
<!DOCTYPE TS>
<TS version="2.1" language="de">
<context>
    <name>AboutPage</name>
    <message>
        <location filename="../qml/AboutPage.qml" line="26"/>
        <source>About</source>
        <translation>Über</translation>
    </message>
    <message>
        <location filename="../qml/AboutPage.qml" line="42"/>
        <source>Version %1</source>
        <translation>Version %1</translation>
    </message>
    <message>
        <location filename="../qml/AboutPage.qml" line="63"/>
        <source>Copyright &amp;copy; %1 %2</source>
        <translation type="unfinished"></translation>
    </message>
</context>
<context>
    <name>AlbumsPage</name>
    <message numerus="yes">
        <location filename="../qml/AlbumsPage.qml" line="81"/>
        <source>%n track(s)</source>
        <translation>
            <numerusform>%n Titel</numerusform>
            <numerusform>%n Titel</numerusform>
        </translation>
    </message>
</context>
<context>
    <name>CoverPage</name>
    <message>
        <location filename="../qml/CoverPage.qml" line="18"/>
        <source>Unknown</source>
        <translation type="unfinished">Unbekannt</translation>
    </message>
</context>
<context>
    <name>TracksPage</name>
    <message numerus="yes">
        <location filename="../qml/TracksPage.qml" line="60"/>
        <source>%n selected</source>
        <translation>
            <numerusform>%n Element ausgewählt</numerusform>
            <numerusform>%n Elemente ausgewählt</numerusform>
        </translation>
    </message>
    <message>
        <location filename="../qml/TracksPage.qml" line="66"/>
        <source>About</source>
        <translation>Info</translation>
    </message>
</context>
</TS>
"""

SAMPLE_FR_TS = """<?xml version="1.0" encoding="utf-8"?>
<!DOCTYPE TS>
<TS version="2.1" language="fr_FR">
<context>
    <name>AboutPage</name>
    <message>
        <source>About</source>
        <translation>À propos</translation>
    </message>
</context>
<context>
    <name>TracksPage</name>
    <message numerus="yes">
        <source>%n selected</source>
        <translation>
            <numerusform>%n sélectionné</numerusform>
            <numerusform>%n sélectionnés</numerusform>
        </translation>
    </message>
</context>
</TS>
"""


@pytest.fixture
def sample_de_ts():
    """German sample catalog content."""
    return SAMPLE_DE_TS


@pytest.fixture
def temp_translations_dir(tmp_path):
    """Create temporary directory with sample ``.ts`` catalogs.

    Returns a directory structure like:
    - harbour-jupii-de.ts
    - harbour-jupii_fr_FR.ts
    - README.txt (ignored)
    """
    (tmp_path / "harbour-jupii-de.ts").write_text(SAMPLE_DE_TS, encoding="utf-8")
    (tmp_path / "harbour-jupii_fr_FR.ts").write_text(SAMPLE_FR_TS, encoding="utf-8")
    (tmp_path / "README.txt").write_text("not a catalog", encoding="utf-8")
    return tmp_path


@pytest.fixture
def ts_loader(temp_translations_dir):
    """Create TSTranslationLoader for the temporary translations directory."""
    return TSTranslationLoader(temp_translations_dir, use_cache=False)


@pytest.fixture
def ts_loader_with_cache(temp_translations_dir):
    """Create TSTranslationLoader with caching enabled."""
    return TSTranslationLoader(temp_translations_dir, use_cache=True)


@pytest.fixture
def clean_locale_env(monkeypatch):
    """Remove locale variables from the environment."""
    for variable in ("LANGUAGE", "LC_ALL", "LC_MESSAGES", "LANG"):
        monkeypatch.delenv(variable, raising=False)
    return monkeypatch


@pytest.fixture
def fresh_settings():
    """Clear the cached settings before and after a test."""
    get_settings.cache_clear()
    yield get_settings
    get_settings.cache_clear()

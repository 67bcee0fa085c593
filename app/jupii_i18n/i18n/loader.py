"""Translation loading interface and implementations.

Defines the contract for loading catalogs and provides the loader for Qt
Linguist ``.ts`` files.
"""

import re
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from jupii_i18n.i18n.errors import MalformedCatalogError
from jupii_i18n.i18n.models import Locale, TranslationCatalog, TranslationStatus
from jupii_i18n.i18n.resolvers import LocaleLike, candidate_names
from jupii_i18n.logging import get_module_logger

logger = get_module_logger()


class TranslationLoader(ABC):
    """Abstract base for translation loaders.

    Implementations must define how to find and parse catalogs for
    different locales.
    """

    @abstractmethod
    def load(self, locale: LocaleLike) -> TranslationCatalog:
        """Load the catalog for a specific locale.

        Raises:
            FileNotFoundError: If no catalog exists for the locale.
            MalformedCatalogError: If the catalog is structurally invalid.
        """

    @abstractmethod
    def load_all(self) -> Dict[str, TranslationCatalog]:
        """Load catalogs for all available locales, keyed by locale name."""

    @abstractmethod
    def available_locales(self) -> List[Locale]:
        """Locales a catalog exists for."""


def _element_text(elem: Optional[ET.Element]) -> str:
    """Text of an element, with Qt ``<byte value="x1b"/>`` escapes decoded."""
    if elem is None:
        return ""

    parts = [elem.text or ""]
    for child in elem:
        if child.tag == "byte":
            value = child.get("value", "")
            try:
                code = int(value[1:], 16) if value.lower().startswith("x") else int(value)
                parts.append(chr(code))
            except ValueError:
                logger.warning("invalid_byte_escape", value=value)
        parts.append(child.tail or "")
    return "".join(parts)


def _variant_text(elem: ET.Element) -> str:
    """Text of a translation or numerus form; the first length variant wins."""
    variant = elem.find("lengthvariant")
    return _element_text(variant if variant is not None else elem)


def _status(translation: Optional[ET.Element]) -> TranslationStatus:
    raw = translation.get("type") if translation is not None else None
    if not raw:
        return TranslationStatus.FINISHED
    try:
        return TranslationStatus(raw)
    except ValueError as e:
        raise MalformedCatalogError(f"Unknown translation type {raw!r}") from e


def _parse_line(raw: Optional[str], previous: Optional[int]) -> Optional[int]:
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        return None
    if raw[0] in "+-" and previous is not None:
        return previous + value
    return value


def _parse_root(root: ET.Element, language_hint: Optional[str]) -> tuple:
    if root.tag != "TS":
        raise MalformedCatalogError(f"Root element must be <TS>, found <{root.tag}>")

    language = (root.get("language") or language_hint or "").strip()
    if not language:
        raise MalformedCatalogError("Catalog has no language")

    records: List[Dict[str, Any]] = []
    previous_file = ""
    previous_lines: Dict[str, int] = {}

    for context_elem in root.iter("context"):
        name = _element_text(context_elem.find("name")).strip()
        if not name:
            raise MalformedCatalogError("Context has no name")

        for message in context_elem.findall("message"):
            source_elem = message.find("source")
            if source_elem is None:
                raise MalformedCatalogError("Message has no <source>", context=name)
            source = _element_text(source_elem)

            locations = []
            for location in message.findall("location"):
                filename = location.get("filename") or previous_file
                line = _parse_line(location.get("line"), previous_lines.get(filename))
                if line is not None:
                    previous_lines[filename] = line
                previous_file = filename
                locations.append({"filename": filename, "line": line})

            translation = message.find("translation")
            try:
                status = _status(translation)
            except MalformedCatalogError as e:
                raise MalformedCatalogError(e.args[0], context=name, source=source) from e

            record: Dict[str, Any] = {
                "context": name,
                "source": source,
                "status": status,
                "comment": _element_text(message.find("comment")),
                "extra_comment": _element_text(message.find("extracomment")),
                "translator_comment": _element_text(message.find("translatorcomment")),
                "locations": locations,
            }
            if message.get("numerus") == "yes":
                forms = translation.findall("numerusform") if translation is not None else []
                record["plural_forms"] = [_variant_text(form) for form in forms]
                record["numerus"] = True
            else:
                record["translation"] = (
                    _variant_text(translation) if translation is not None else ""
                )
            records.append(record)

    return language, root.get("version", ""), records


def _build(
    root: ET.Element,
    language_hint: Optional[str],
    include_unfinished: bool,
    source_path: Optional[str],
) -> TranslationCatalog:
    try:
        language, version, records = _parse_root(root, language_hint)
        catalog = TranslationCatalog.build(
            records,
            language=language,
            version=version,
            include_unfinished=include_unfinished,
            source_path=source_path,
        )
    except MalformedCatalogError as e:
        if not source_path:
            logger.error("malformed_catalog", error=str(e))
            raise
        error = e.with_path(source_path)
        logger.error("malformed_catalog", error=str(error))
        raise error from e

    logger.info(
        "parsed_catalog",
        language=catalog.language,
        source_path=source_path,
        context_count=len(catalog.contexts),
        entry_count=len(catalog),
    )
    return catalog


def parse_ts(
    path: Union[str, Path],
    language_hint: Optional[str] = None,
    include_unfinished: bool = True,
) -> TranslationCatalog:
    """Parse a ``.ts`` file into a catalog.

    Args:
        path: Catalog file.
        language_hint: Language used when the file has no ``language`` attribute.
        include_unfinished: Serve non-empty unfinished translations.

    Raises:
        FileNotFoundError: If the file does not exist.
        MalformedCatalogError: If the file is not a valid catalog.
    """
    path = Path(path)
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as e:
        logger.error("xml_parse_error", file=str(path), error=str(e))
        raise MalformedCatalogError(f"Failed to parse XML: {e}", path=path) from e

    return _build(root, language_hint, include_unfinished, str(path))


def parse_ts_data(
    data: Union[str, bytes],
    language_hint: Optional[str] = None,
    include_unfinished: bool = True,
) -> TranslationCatalog:
    """Parse ``.ts`` content held in memory into a catalog.

    Raises:
        MalformedCatalogError: If the content is not a valid catalog.
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        logger.error("xml_parse_error", error=str(e))
        raise MalformedCatalogError(f"Failed to parse XML: {e}") from e

    return _build(root, language_hint, include_unfinished, None)


class TSTranslationLoader(TranslationLoader):
    """Loader for Qt Linguist ``.ts`` catalogs.

    Expects files named ``<prefix>-<locale>.ts`` (or ``<prefix>_<locale>.ts``)
    in the translations directory, e.g. ``harbour-jupii-de.ts``.

    Attributes:
        translations_dir: Directory containing the catalogs.
        prefix: Catalog file name prefix.
        cache: Loaded catalogs by locale name.
    """

    def __init__(
        self,
        translations_dir: Union[str, Path],
        prefix: str = "harbour-jupii",
        use_cache: bool = True,
        include_unfinished: bool = True,
    ):
        """Initialize the loader.

        Args:
            translations_dir: Directory with ``.ts`` files.
            prefix: Catalog file name prefix.
            use_cache: Whether to keep loaded catalogs in memory.
            include_unfinished: Serve non-empty unfinished translations.

        Raises:
            ValueError: If the directory does not exist.
        """
        self.translations_dir = Path(translations_dir)
        self.prefix = prefix
        self.use_cache = use_cache
        self.include_unfinished = include_unfinished
        self.cache: Dict[str, TranslationCatalog] = {}
        self._pattern = re.compile(
            rf"^{re.escape(prefix)}[-_](?P<locale>[A-Za-z]{{2,3}}(?:[-_][A-Za-z]{{2}})?)\.ts$"
        )

        if not self.translations_dir.is_dir():
            logger.error(
                "translations_dir_not_found",
                translations_dir=str(self.translations_dir),
            )
            raise ValueError(
                f"Translations directory not found: {self.translations_dir}"
            )

        logger.info(
            "initialized_ts_loader",
            translations_dir=str(self.translations_dir),
            prefix=prefix,
            use_cache=use_cache,
        )

    def _find_file(self, locale: Locale) -> Optional[Path]:
        for name in candidate_names(locale):
            for separator in ("-", "_"):
                path = self.translations_dir / f"{self.prefix}{separator}{name}.ts"
                if path.is_file():
                    return path
        return None

    def load(self, locale: LocaleLike) -> TranslationCatalog:
        """Load the catalog for a locale.

        Tries ``<prefix>-de_DE.ts`` before ``<prefix>-de.ts``.

        Raises:
            FileNotFoundError: If no catalog file matches the locale.
            MalformedCatalogError: If the catalog is invalid.
        """
        resolved = locale if isinstance(locale, Locale) else Locale.from_string(locale)

        if self.use_cache and resolved.value in self.cache:
            logger.debug("loaded_from_cache", locale=resolved.value)
            return self.cache[resolved.value]

        path = self._find_file(resolved)
        if path is None:
            logger.warning("catalog_file_not_found", locale=resolved.value)
            raise FileNotFoundError(
                f"No catalog found for locale {resolved.value} in {self.translations_dir}"
            )

        catalog = parse_ts(
            path,
            language_hint=resolved.value,
            include_unfinished=self.include_unfinished,
        )
        logger.info(
            "loaded_catalog",
            locale=resolved.value,
            file=path.name,
            entry_count=len(catalog),
        )

        if self.use_cache:
            self.cache[resolved.value] = catalog

        return catalog

    def available_locales(self) -> List[Locale]:
        """Locales with a catalog file, sorted by name."""
        locales = set()
        for path in self.translations_dir.glob("*.ts"):
            match = self._pattern.match(path.name)
            if not match:
                continue
            try:
                locales.add(Locale.from_string(match.group("locale")))
            except ValueError:
                logger.warning("unrecognised_catalog_name", file=path.name)
        return sorted(locales, key=lambda item: item.value)

    def load_all(self) -> Dict[str, TranslationCatalog]:
        """Load catalogs for all locales found in the directory.

        Raises:
            ValueError: If the directory holds no catalogs.
        """
        locales = self.available_locales()
        if not locales:
            logger.error("no_catalogs_found", translations_dir=str(self.translations_dir))
            raise ValueError(f"No translation files found in {self.translations_dir}")

        result = {locale.value: self.load(locale) for locale in locales}
        logger.info("loaded_all_catalogs", locale_count=len(result))
        return result

    def clear_cache(self) -> None:
        """Clear all cached catalogs."""
        self.cache.clear()
        logger.info("cleared_catalog_cache")

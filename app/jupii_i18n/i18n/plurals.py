"""Plural rules for selecting numerus forms.

Each rule maps a quantity to the index of the plural form to use. The rule
set mirrors the numerus rules Qt Linguist writes into ``.ts`` catalogs, so a
catalog produced for a language stores exactly ``form_count`` forms.
"""

from dataclasses import dataclass
from typing import Callable, Dict

from jupii_i18n.logging import get_module_logger

logger = get_module_logger()


@dataclass(frozen=True)
class PluralRule:
    """Plural-category selector for one language.

    Attributes:
        name: Short rule identifier (e.g. "germanic").
        form_count: Number of plural forms a catalog stores for the language.
        selector: Function mapping a quantity to a form index.
    """

    name: str
    form_count: int
    selector: Callable[[int], int]

    def select(self, n: int, available_forms: int = 0) -> int:
        """Return the form index for ``n``.

        The index is clamped to ``available_forms`` when the entry stores
        fewer forms than the rule expects.
        """
        index = self.selector(abs(n))
        limit = available_forms or self.form_count
        return min(index, limit - 1) if limit > 0 else 0


def _single(n: int) -> int:
    return 0


def _not_one(n: int) -> int:
    return 0 if n == 1 else 1


def _greater_than_one(n: int) -> int:
    return 0 if n <= 1 else 1


def _east_slavic(n: int) -> int:
    if n % 10 == 1 and n % 100 != 11:
        return 0
    if 2 <= n % 10 <= 4 and not 12 <= n % 100 <= 14:
        return 1
    return 2


def _polish(n: int) -> int:
    if n == 1:
        return 0
    if 2 <= n % 10 <= 4 and not 12 <= n % 100 <= 14:
        return 1
    return 2


def _czech(n: int) -> int:
    if n == 1:
        return 0
    if 2 <= n <= 4:
        return 1
    return 2


def _lithuanian(n: int) -> int:
    if n % 10 == 1 and n % 100 != 11:
        return 0
    if n % 10 >= 2 and not 10 <= n % 100 < 20:
        return 1
    return 2


def _latvian(n: int) -> int:
    if n % 10 == 1 and n % 100 != 11:
        return 0
    if n != 0:
        return 1
    return 2


def _slovenian(n: int) -> int:
    if n % 100 == 1:
        return 0
    if n % 100 == 2:
        return 1
    if n % 100 in (3, 4):
        return 2
    return 3


SINGLE = PluralRule("single", 1, _single)
GERMANIC = PluralRule("germanic", 2, _not_one)
FRENCH = PluralRule("french", 2, _greater_than_one)
EAST_SLAVIC = PluralRule("east_slavic", 3, _east_slavic)
POLISH = PluralRule("polish", 3, _polish)
CZECH = PluralRule("czech", 3, _czech)
LITHUANIAN = PluralRule("lithuanian", 3, _lithuanian)
LATVIAN = PluralRule("latvian", 3, _latvian)
SLOVENIAN = PluralRule("slovenian", 4, _slovenian)

DEFAULT_RULE = GERMANIC

_RULES: Dict[str, PluralRule] = {}

for _codes, _rule in (
    (("ja", "ko", "zh", "vi", "th", "id", "ms"), SINGLE),
    (
        (
            "en", "de", "nl", "sv", "da", "nb", "nn", "no", "fi", "et", "it",
            "es", "pt", "el", "hu", "bg", "ca", "eu", "gl", "he", "tr",
        ),
        GERMANIC,
    ),
    (("fr", "pt_BR"), FRENCH),
    (("ru", "uk", "be", "sr", "hr", "bs"), EAST_SLAVIC),
    (("pl",), POLISH),
    (("cs", "sk"), CZECH),
    (("lt",), LITHUANIAN),
    (("lv",), LATVIAN),
    (("sl",), SLOVENIAN),
):
    for _code in _codes:
        _RULES[_code] = _rule


def _normalise(language: str) -> str:
    parts = language.replace("-", "_").split("_", 1)
    if len(parts) == 1:
        return parts[0].lower()
    return f"{parts[0].lower()}_{parts[1].upper()}"


def register_plural_rule(language: str, rule: PluralRule) -> None:
    """Register or replace the plural rule for a language or locale."""
    _RULES[_normalise(language)] = rule
    logger.info("registered_plural_rule", language=language, rule=rule.name)


def plural_rule_for(language: str) -> PluralRule:
    """Return the plural rule for a language code such as ``de`` or ``pt_BR``.

    A region-specific rule wins over the language rule. Unknown languages
    use the two-form ``n != 1`` rule.
    """
    code = _normalise(language or "")
    if code in _RULES:
        return _RULES[code]

    base = code.split("_")[0]
    if base in _RULES:
        return _RULES[base]

    logger.warning(
        "unknown_plural_rule", language=language, fallback_rule=DEFAULT_RULE.name
    )
    return DEFAULT_RULE

import re
from dataclasses import dataclass

_NUMBER = r"(?<!\d)(\d{1,3}(?:\.\d{3})+(?:,\d{1,2})?|\d+(?:[.,]\d{1,2})?)(?!\d)"

# Priority order: explicit currency first, a bare number last.
AMOUNT_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(_NUMBER + r"\s*€"),
    re.compile(r"€\s*" + _NUMBER),
    re.compile(_NUMBER + r"\s*euros?(?!\w)"),
    re.compile(r"(?<!\w)euros?\s*" + _NUMBER),
    re.compile(_NUMBER + r"\s*pesos?(?!\w)"),
    re.compile(_NUMBER + r"\s*dolar(?:es)?(?!\w)"),
    re.compile(_NUMBER),
)


@dataclass(frozen=True)
class AmountMatch:
    value: float
    start: int
    end: int


def parse_number(raw: str) -> float:
    """Read ``1.500,50``, ``12,5`` or ``12.5`` as a float."""
    if re.fullmatch(r"\d{1,3}(?:\.\d{3})+(?:,\d{1,2})?", raw):
        raw = raw.replace(".", "")
    return float(raw.replace(",", "."))


def extract_amount(text: str) -> AmountMatch | None:
    """
    Return the amount of the first pattern, in priority order, that matches.

    ``text`` is expected to be normalized (lower case, accents removed).
    """
    for pattern in AMOUNT_PATTERNS:
        match = pattern.search(text)
        if match:
            return AmountMatch(parse_number(match.group(1)), match.start(), match.end())
    return None


def amount_spans(text: str) -> list[tuple[int, int]]:
    """Every substring of ``text`` that any amount pattern matches."""
    spans = []
    for pattern in AMOUNT_PATTERNS:
        spans.extend(match.span() for match in pattern.finditer(text))
    return spans

import re
import unicodedata
from collections.abc import Iterable


def _fold_char(char: str) -> str:
    lowered = char.lower()
    if len(lowered) != 1:
        lowered = char
    return unicodedata.normalize("NFD", lowered)[0]


def normalize_text(value: str) -> str:
    """
    Lower-case ``value`` and drop accents, one output character per input character.

    Offsets of matches found in the normalized text are valid in the original.
    """
    return "".join(_fold_char(char) for char in value)


def keyword_pattern(keywords: Iterable[str]) -> re.Pattern[str]:
    """Whole-word pattern for ``keywords``, tolerating a plural ``s``/``es`` suffix."""
    alternatives = sorted({normalize_text(keyword) for keyword in keywords}, key=len, reverse=True)
    joined = "|".join(re.escape(keyword).replace(r"\ ", r"\s+") for keyword in alternatives)
    return re.compile(rf"(?<!\w)(?:{joined})(?:e?s)?(?!\w)")


def collapse_whitespace(value: str) -> str:
    return re.sub(r"\s+", " ", value).strip()

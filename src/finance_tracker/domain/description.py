import re

from finance_tracker.data.categories import category_name
from finance_tracker.domain.amounts import amount_spans
from finance_tracker.domain.dates import DateMatch
from finance_tracker.domain.text import collapse_whitespace, normalize_text
from finance_tracker.models import TransactionType

MIN_DESCRIPTION_LENGTH = 3

ACTION_VERBS = re.compile(
    r"^\s*(?:gaste|pague|compre|recibi|cobre|me\s+pagaron|ingrese|gane)(?!\w)\s*"
)
FILLER_WORDS = re.compile(r"(?<!\w)(?:en|de|por|para)(?!\w)")
_EDGE_PUNCTUATION = " ,.;:-"


def _remove_spans(text: str, spans: list[tuple[int, int]]) -> str:
    if not spans:
        return text
    merged: list[list[int]] = []
    for start, end in sorted(spans):
        if merged and start <= merged[-1][1]:
            merged[-1][1] = max(merged[-1][1], end)
        else:
            merged.append([start, end])
    pieces = []
    cursor = 0
    for start, end in merged:
        pieces.append(text[cursor:start])
        pieces.append(" ")
        cursor = end
    pieces.append(text[cursor:])
    return "".join(pieces)


def default_description(transaction_type: TransactionType, category_id: str) -> str:
    prefix = "Ingreso" if transaction_type == "income" else "Gasto"
    return f"{prefix} de {category_name(category_id, 'categoría desconocida')}"


def synthesize_description(
    text: str,
    transaction_type: TransactionType,
    category_id: str,
    date_match: DateMatch | None = None,
) -> str:
    """
    Clean the user's sentence down to what the money was for.

    Amounts, the date expression, a leading action verb ("gasté", "cobré", ...)
    and filler prepositions are removed. Too little left over falls back to
    "Gasto de <categoría>" / "Ingreso de <categoría>".
    """
    normalized = normalize_text(text)
    spans = amount_spans(normalized)
    if date_match is not None:
        spans.append((date_match.start, date_match.end))
    remaining = collapse_whitespace(_remove_spans(text, spans))

    verb = ACTION_VERBS.match(normalize_text(remaining))
    if verb:
        remaining = remaining[verb.end():]

    fillers = [match.span() for match in FILLER_WORDS.finditer(normalize_text(remaining))]
    description = collapse_whitespace(_remove_spans(remaining, fillers)).strip(_EDGE_PUNCTUATION)

    if len(description) < MIN_DESCRIPTION_LENGTH:
        return default_description(transaction_type, category_id)
    return description

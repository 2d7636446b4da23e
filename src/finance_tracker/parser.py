from datetime import datetime

from finance_tracker.classifiers.category import CategoryClassifier
from finance_tracker.classifiers.transaction_type import TransactionTypeClassifier
from finance_tracker.domain.amounts import extract_amount
from finance_tracker.domain.dates import find_date
from finance_tracker.domain.description import synthesize_description
from finance_tracker.domain.text import normalize_text
from finance_tracker.logger import get_logger
from finance_tracker.models import Confidence, ParsedTransactionProposal

logger = get_logger(__name__)


def combine_confidence(type_confidence: Confidence, category_confidence: Confidence) -> Confidence:
    high_count = [type_confidence, category_confidence].count("high")
    if high_count == 2:
        return "high"
    if high_count == 1:
        return "medium"
    return "low"


class TransactionParser:
    def __init__(
        self,
        type_classifier: TransactionTypeClassifier | None = None,
        category_classifier: CategoryClassifier | None = None,
    ):
        self.type_classifier = type_classifier or TransactionTypeClassifier()
        self.category_classifier = category_classifier or CategoryClassifier()

    def parse(self, text: str, now: datetime | None = None) -> ParsedTransactionProposal | None:
        """
        Turn a Spanish sentence such as "Gasté 25€ en comida el 15 de julio"
        into a transaction proposal. Returns ``None`` when no amount is found.
        """
        now = now or datetime.now()
        normalized = normalize_text(text)

        amount = extract_amount(normalized)
        if amount is None:
            logger.debug("[PARSE] No amount found in: '%s'", text[:50])
            return None

        kind = self.type_classifier.classify(normalized)
        category = self.category_classifier.classify(normalized, kind.value)
        date_match = find_date(text, now)
        description = synthesize_description(text, kind.value, category.value, date_match)
        confidence = combine_confidence(kind.confidence, category.confidence)

        logger.debug(
            "[PARSE] '%s' -> %.2f %s/%s (type rule: %s, category rule: %s, confidence: %s)",
            text[:50],
            amount.value,
            kind.value,
            category.value,
            kind.rule,
            category.rule,
            confidence,
        )

        return ParsedTransactionProposal(
            amount=amount.value,
            description=description,
            category=category.value,
            type=kind.value,
            confidence=confidence,
            date=date_match.value if date_match else now,
            type_confidence=kind.confidence,
            category_confidence=category.confidence,
        )


_default_parser: TransactionParser | None = None


def parse(text: str, now: datetime | None = None) -> ParsedTransactionProposal | None:
    global _default_parser
    if _default_parser is None:
        _default_parser = TransactionParser()
    return _default_parser.parse(text, now)

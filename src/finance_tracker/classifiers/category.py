from collections.abc import Sequence

from finance_tracker.classifiers.base import Classification, Rule, first_match
from finance_tracker.data.categories import CATEGORY_KEYWORDS, CategoryKeywords, fallback_category
from finance_tracker.domain.text import keyword_pattern
from finance_tracker.models import TransactionType


class CategoryClassifier:
    def __init__(self, table: Sequence[CategoryKeywords] = CATEGORY_KEYWORDS):
        self.rules: list[Rule[str]] = [
            Rule(entry.category_id, keyword_pattern(entry.keywords).search, entry.category_id, "high")
            for entry in table
            if entry.keywords
        ]

    def classify(self, text: str, transaction_type: TransactionType) -> Classification[str]:
        """
        First category in table order with a keyword in ``text``.

        Falls back to the "other" category of ``transaction_type`` with low confidence.
        """
        return first_match(self.rules, text) or Classification(
            fallback_category(transaction_type), "low", "fallback"
        )

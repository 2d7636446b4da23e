from finance_tracker.classifiers.base import Classification, Rule, first_match
from finance_tracker.domain.text import keyword_pattern
from finance_tracker.models import TransactionType

INCOME_KEYWORDS: frozenset[str] = frozenset({
    "recibí", "cobré", "ingreso", "salario", "sueldo", "ganancia",
    "freelance", "trabajo", "me pagaron", "ingresé", "gané", "dividendos",
    "bonus", "propina", "venta",
})

EXPENSE_KEYWORDS: frozenset[str] = frozenset({
    "gasté", "pagué", "compré", "gasto", "cuesta", "costó", "perdí",
    "me costó", "invertí", "doné", "regalé", "salió", "desembolsé",
})


class TransactionTypeClassifier:
    """Income keywords are checked before expense keywords; neither means expense."""

    def __init__(
        self,
        income_keywords: frozenset[str] = INCOME_KEYWORDS,
        expense_keywords: frozenset[str] = EXPENSE_KEYWORDS,
    ):
        self.rules: list[Rule[TransactionType]] = [
            Rule("income_keyword", keyword_pattern(income_keywords).search, "income", "high"),
            Rule("expense_keyword", keyword_pattern(expense_keywords).search, "expense", "high"),
        ]
        self.default: Classification[TransactionType] = Classification("expense", "medium", "default")

    def classify(self, text: str) -> Classification[TransactionType]:
        return first_match(self.rules, text) or self.default

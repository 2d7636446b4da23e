import json
import os
import uuid
from datetime import datetime
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from finance_tracker.domain.periods import days_until
from finance_tracker.logger import get_logger
from finance_tracker.models import (
    Card,
    CardDraft,
    MonthlyExpense,
    MonthlyExpenseDraft,
    MonthlyExpenseUpdate,
    SavingsGoal,
    SavingsGoalDraft,
    SavingsGoalUpdate,
    Transaction,
    TransactionDraft,
)
from finance_tracker.services.stats import current_month_recurring_expenses

logger = get_logger(__name__)

CARD_NOT_FOUND = "Tarjeta no encontrada"

M = TypeVar("M", bound=BaseModel)


def _new_id() -> str:
    return uuid.uuid4().hex


def _load_items(model: type[M], raw_items: Any, collection: str) -> list[M]:
    items: list[M] = []
    if not isinstance(raw_items, list):
        return items
    for raw in raw_items:
        try:
            items.append(model.model_validate(raw))
        except ValidationError as exc:
            logger.warning("[LEDGER] Skipping invalid %s entry: %s", collection, exc.errors()[:1])
    return items


def clamp_goal_amount(goal: SavingsGoal, delta: float) -> float:
    """New ``current_amount`` after adding ``delta``, kept within ``[0, target_amount]``."""
    return min(max(goal.current_amount + delta, 0.0), goal.target_amount)


class Ledger:
    """
    In-memory collections of the user's finance entities.

    Every mutation is mirrored to a JSON file at ``data_path`` when one is given.
    """

    def __init__(self, data_path: str | None = None):
        self.data_path = data_path
        self.transactions: list[Transaction] = []
        self.cards: list[Card] = []
        self.savings_goals: list[SavingsGoal] = []
        self.monthly_expenses: list[MonthlyExpense] = []
        self.load()

    def load(self) -> None:
        if not self.data_path or not os.path.exists(self.data_path):
            return
        try:
            with open(self.data_path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            logger.error("[LEDGER] Could not read %s: %s. Starting empty.", self.data_path, exc)
            data = {}
        if not isinstance(data, dict):
            data = {}

        self.transactions = _load_items(Transaction, data.get("transactions"), "transaction")
        self.cards = _load_items(Card, data.get("cards"), "card")
        self.savings_goals = _load_items(SavingsGoal, data.get("savings_goals"), "savings goal")
        self.monthly_expenses = _load_items(MonthlyExpense, data.get("monthly_expenses"), "monthly expense")
        logger.info(
            "[LEDGER] Loaded %d transactions, %d cards, %d goals, %d monthly expenses.",
            len(self.transactions),
            len(self.cards),
            len(self.savings_goals),
            len(self.monthly_expenses),
        )

    def save(self) -> None:
        if not self.data_path:
            return
        payload = {
            "transactions": [t.model_dump(mode="json") for t in self.transactions],
            "cards": [c.model_dump(mode="json") for c in self.cards],
            "savings_goals": [g.model_dump(mode="json") for g in self.savings_goals],
            "monthly_expenses": [e.model_dump(mode="json") for e in self.monthly_expenses],
        }
        with open(self.data_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)

    # Transactions

    def list_transactions(self, limit: int | None = None) -> list[Transaction]:
        # Stable sort over the reversed list keeps later inserts first on equal timestamps.
        ordered = sorted(reversed(self.transactions), key=lambda t: t.created_at, reverse=True)
        return ordered[:limit] if limit is not None else ordered

    def add_transaction(self, draft: TransactionDraft) -> Transaction:
        transaction = Transaction(id=_new_id(), **draft.model_dump())
        self.transactions.append(transaction)
        self.save()
        logger.info(
            "[LEDGER] Added %s %.2f (%s): '%s'",
            transaction.type,
            transaction.amount,
            transaction.category,
            transaction.description,
        )
        return transaction

    def delete_transaction(self, transaction_id: str) -> bool:
        return self._delete(self.transactions, transaction_id, "transaction")

    # Cards

    def list_cards(self) -> list[Card]:
        return list(self.cards)

    def get_card(self, card_id: str | None) -> Card | None:
        if not card_id:
            return None
        return next((card for card in self.cards if card.id == card_id), None)

    def card_label(self, card_id: str | None) -> str:
        card = self.get_card(card_id)
        return card.name if card else CARD_NOT_FOUND

    def add_card(self, draft: CardDraft) -> Card:
        card = Card(id=_new_id(), **draft.model_dump())
        self.cards.append(card)
        self.save()
        logger.info("[LEDGER] Added %s card '%s' (****%s)", card.type, card.name, card.last_four_digits)
        return card

    def delete_card(self, card_id: str) -> bool:
        # Transactions keep their card_id; card_label() reports the card as missing.
        return self._delete(self.cards, card_id, "card")

    # Savings goals

    def list_savings_goals(self) -> list[SavingsGoal]:
        return list(self.savings_goals)

    def get_savings_goal(self, goal_id: str) -> SavingsGoal | None:
        return next((goal for goal in self.savings_goals if goal.id == goal_id), None)

    def add_savings_goal(self, draft: SavingsGoalDraft) -> SavingsGoal:
        goal = SavingsGoal(id=_new_id(), **draft.model_dump())
        self.savings_goals.append(goal)
        self.save()
        logger.info("[LEDGER] Added savings goal '%s' (target %.2f)", goal.name, goal.target_amount)
        return goal

    def update_savings_goal(self, goal_id: str, update: SavingsGoalUpdate) -> SavingsGoal | None:
        goal = self.get_savings_goal(goal_id)
        if goal is None:
            return None
        merged = {**goal.model_dump(), **update.model_dump(exclude_unset=True, exclude_none=True)}
        updated = SavingsGoal.model_validate(merged)
        self._replace(self.savings_goals, updated)
        self.save()
        return updated

    def add_money(self, goal_id: str, amount: float) -> SavingsGoal | None:
        goal = self.get_savings_goal(goal_id)
        if goal is None:
            return None
        updated = goal.model_copy(update={"current_amount": clamp_goal_amount(goal, amount)})
        self._replace(self.savings_goals, updated)
        self.save()
        logger.info(
            "[LEDGER] Goal '%s': %.2f -> %.2f of %.2f",
            goal.name,
            goal.current_amount,
            updated.current_amount,
            goal.target_amount,
        )
        return updated

    def days_remaining(self, goal_id: str, now: datetime | None = None) -> int | None:
        goal = self.get_savings_goal(goal_id)
        if goal is None:
            return None
        return days_until(goal.target_date, now or datetime.now())

    def delete_savings_goal(self, goal_id: str) -> bool:
        return self._delete(self.savings_goals, goal_id, "savings goal")

    # Monthly expenses

    def list_monthly_expenses(self, active_only: bool = False) -> list[MonthlyExpense]:
        if active_only:
            return [expense for expense in self.monthly_expenses if expense.is_active]
        return list(self.monthly_expenses)

    def get_monthly_expense(self, expense_id: str) -> MonthlyExpense | None:
        return next((expense for expense in self.monthly_expenses if expense.id == expense_id), None)

    def add_monthly_expense(self, draft: MonthlyExpenseDraft) -> MonthlyExpense:
        expense = MonthlyExpense(id=_new_id(), **draft.model_dump())
        self.monthly_expenses.append(expense)
        self.save()
        logger.info("[LEDGER] Added monthly expense '%s' (%.2f on day %d)", expense.name, expense.amount, expense.day_of_month)
        return expense

    def update_monthly_expense(self, expense_id: str, update: MonthlyExpenseUpdate) -> MonthlyExpense | None:
        expense = self.get_monthly_expense(expense_id)
        if expense is None:
            return None
        merged = {**expense.model_dump(), **update.model_dump(exclude_unset=True)}
        updated = MonthlyExpense.model_validate(merged)
        self._replace(self.monthly_expenses, updated)
        self.save()
        return updated

    def toggle_monthly_expense(self, expense_id: str) -> MonthlyExpense | None:
        expense = self.get_monthly_expense(expense_id)
        if expense is None:
            return None
        return self.update_monthly_expense(expense_id, MonthlyExpenseUpdate(is_active=not expense.is_active))

    def delete_monthly_expense(self, expense_id: str) -> bool:
        return self._delete(self.monthly_expenses, expense_id, "monthly expense")

    def current_month_expenses(self, now: datetime | None = None) -> float:
        return current_month_recurring_expenses(self.monthly_expenses, now)

    # Helpers

    def _replace(self, items: list[Any], updated: Any) -> None:
        for index, item in enumerate(items):
            if item.id == updated.id:
                items[index] = updated
                return

    def _delete(self, items: list[Any], item_id: str, kind: str) -> bool:
        for index, item in enumerate(items):
            if item.id == item_id:
                del items[index]
                self.save()
                logger.info("[LEDGER] Deleted %s %s", kind, item_id)
                return True
        logger.warning("[LEDGER] %s %s not found", kind.capitalize(), item_id)
        return False
